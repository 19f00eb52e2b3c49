"""
qform Kernel — History Reducer

Pure function: (HistoryState, action) → HistoryState

Wraps the document transform with linear undo/redo:
  - mutating actions push the old present onto `past` and clear `future`
  - UNDO moves present → front of `future`, last of `past` → present
  - REDO moves present → end of `past`, first of `future` → present

Total over every input. Unknown or malformed actions, UNDO with nothing to
undo and REDO with nothing to redo all return the identical state object,
so callers can skip downstream work with an `is` check.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from qform.kernel.primitives import validate_action
from qform.kernel.reducer import default_questionnaire, transform
from qform.kernel.types import (
    MUTATING_ACTION_TYPES,
    REDO,
    UNDO,
    Action,
    HistoryState,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def initial_state(
    questionnaire_id: int | None = None,
    *,
    now: datetime | None = None,
    document: dict[str, Any] | None = None,
) -> HistoryState:
    """A fresh session: empty past and future around the default document."""
    present = document if document is not None else default_questionnaire(questionnaire_id, now=now)
    return HistoryState(present=present, past=[], future=[])


def reduce_history(
    state: HistoryState,
    action: Action,
    *,
    max_past: int | None = None,
) -> HistoryState:
    """
    Apply one action to the editing history.

    max_past caps the depth of `past` (oldest snapshots are dropped first).
    None or 0 keeps the history unbounded.
    """
    if action.type == UNDO:
        return _undo(state)
    if action.type == REDO:
        return _redo(state)

    if action.type not in MUTATING_ACTION_TYPES:
        logger.debug("history: ignoring unknown action %s", action.type)
        return state

    errors = validate_action(action.type, action.payload)
    if errors:
        logger.debug("history: ignoring malformed %s: %s", action.type, "; ".join(errors))
        return state

    past = [*state.past, state.present]
    if max_past:
        past = past[-max_past:]

    return HistoryState(
        past=past,
        present=transform(state.present, action),
        future=[],
    )


def replay(
    actions: list[Action],
    *,
    state: HistoryState | None = None,
    max_past: int | None = None,
) -> HistoryState:
    """
    Fold a sequence of actions over a starting state (default: a fresh
    session). replay([a1, a2]) == reduce_history(reduce_history(s0, a1), a2)
    """
    state = state or initial_state()
    for action in actions:
        state = reduce_history(state, action, max_past=max_past)
    return state


# ---------------------------------------------------------------------------
# Undo / redo
# ---------------------------------------------------------------------------


def _undo(state: HistoryState) -> HistoryState:
    if not state.past:
        return state
    return HistoryState(
        past=state.past[:-1],
        present=state.past[-1],
        future=[state.present, *state.future],
    )


def _redo(state: HistoryState) -> HistoryState:
    if not state.future:
        return state
    return HistoryState(
        past=[*state.past, state.present],
        present=state.future[0],
        future=state.future[1:],
    )
