"""
qform Kernel — Assembly Layer

Sits between the pure functions (history reducer, reorder adapter, wire
serializer) and the outside world (credential source, remote store, user
notifications). Owns the current HistoryState of one editing session.

Operations: dispatch, undo, redo, move, submit

This is where IO happens. The reducer and transforms are pure.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from qform.kernel.events import redo, undo
from qform.kernel.history import initial_state, reduce_history
from qform.kernel.reorder import reorder_action
from qform.kernel.types import Action, HistoryState, SubmitResult
from qform.kernel.wire import to_wire

logger = logging.getLogger(__name__)

TokenLookup = Callable[[], str | None]
Notifier = Callable[[str, str], None]

SUBMIT_OK_MESSAGE = "Questionnaire created"
SUBMIT_FAILED_MESSAGE = "Unexpected error while creating the questionnaire"
MISSING_TOKEN_MESSAGE = "Token not found"
IN_PROGRESS_MESSAGE = "A submission is already in progress"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MissingCredential(Exception):
    """No bearer token available; nothing was sent."""

    pass


# ---------------------------------------------------------------------------
# Store protocol
# ---------------------------------------------------------------------------


class QuestionnaireStore:
    """
    Abstract remote store.
    Implement with HTTP for production, or in-memory for tests.
    """

    async def create(self, payload: dict[str, Any], token: str) -> dict[str, Any]:
        """Create a questionnaire from its wire body. Raises on failure."""
        raise NotImplementedError


class MemoryStore(QuestionnaireStore):
    """In-memory store for testing."""

    def __init__(self) -> None:
        self.created: list[dict[str, Any]] = []
        self.tokens: list[str] = []

    async def create(self, payload: dict[str, Any], token: str) -> dict[str, Any]:
        self.created.append(payload)
        self.tokens.append(token)
        return payload


def _silent(title: str, description: str) -> None:
    pass


# ---------------------------------------------------------------------------
# Editor session
# ---------------------------------------------------------------------------


class EditorSession:
    """
    One operator's editing session.
    Each call to dispatch() is one synchronous reducer step.
    """

    def __init__(
        self,
        store: QuestionnaireStore,
        token_lookup: TokenLookup,
        *,
        notify: Notifier | None = None,
        state: HistoryState | None = None,
        max_past: int | None = None,
    ):
        self._store = store
        self._token_lookup = token_lookup
        self._notify = notify or _silent
        self._state = state or initial_state()
        self._max_past = max_past
        self.submitting = False

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def present(self) -> dict[str, Any]:
        return self._state.present

    @property
    def can_undo(self) -> bool:
        return self._state.can_undo

    @property
    def can_redo(self) -> bool:
        return self._state.can_redo

    # -- editing --

    def dispatch(self, action: Action) -> bool:
        """Apply one action. Returns True if the state changed."""
        new_state = reduce_history(self._state, action, max_past=self._max_past)
        if new_state is self._state:
            return False
        self._state = new_state
        return True

    def undo(self) -> bool:
        return self.dispatch(undo())

    def redo(self) -> bool:
        return self.dispatch(redo())

    def move(self, source_index: int, destination_index: int | None) -> bool:
        """Finish a drag gesture. One history step for the whole move."""
        action = reorder_action(self.present, source_index, destination_index)
        if action is None:
            return False
        return self.dispatch(action)

    # -- submit --

    async def submit(self, created_at: str | None = None) -> SubmitResult:
        """
        Send the present document to the store.

        The document is read once, here; edits made while the request is in
        flight are not part of it. Failures are reported, never raised, and
        the editing history is left as it was.
        """
        if self.submitting:
            logger.warning("submit: refused, another submission is in flight")
            self._notify("Error", IN_PROGRESS_MESSAGE)
            return SubmitResult(ok=False, message=IN_PROGRESS_MESSAGE)

        self.submitting = True
        document = self._state.present
        try:
            token = self._token_lookup()
            if not token:
                raise MissingCredential(MISSING_TOKEN_MESSAGE)

            payload = to_wire(document, created_at)
            await self._store.create(payload, token)

        except MissingCredential as e:
            logger.warning("submit: no credential, questionnaire %s not sent", document["id"])
            self._notify("Error", str(e))
            return SubmitResult(ok=False, message=str(e))

        except Exception:
            logger.exception("submit: failed to create questionnaire %s", document["id"])
            self._notify("Error", SUBMIT_FAILED_MESSAGE)
            return SubmitResult(ok=False, message=SUBMIT_FAILED_MESSAGE)

        finally:
            self.submitting = False

        logger.info(
            "submit: created questionnaire %s with %d questions",
            document["id"],
            len(document["questions"]),
        )
        self._notify("Success", SUBMIT_OK_MESSAGE)
        return SubmitResult(ok=True, message=SUBMIT_OK_MESSAGE, payload=payload)
