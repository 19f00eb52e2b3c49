"""qform command line editor."""

from qform import __version__

__all__ = ["__version__"]
