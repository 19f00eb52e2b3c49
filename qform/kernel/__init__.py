"""
qform Kernel — the pure editing engine.

Components:
  primitives  — structural validation for the action vocabulary
  reducer     — (questionnaire, action) → questionnaire  (pure, deterministic)
  history     — (history, action) → history  (linear undo/redo)
  reorder     — drag gesture → single REORDER_QUESTIONS action
  wire        — questionnaire → submission body
  assembly    — editing session: reducer + store + notifications (IO)
"""

from qform.kernel.assembly import EditorSession, MemoryStore, QuestionnaireStore
from qform.kernel.history import initial_state, reduce_history, replay
from qform.kernel.primitives import validate_action
from qform.kernel.reducer import default_questionnaire, transform
from qform.kernel.reorder import move_question, reorder_action
from qform.kernel.types import Action, HistoryState
from qform.kernel.wire import to_wire

__all__ = [
    "Action",
    "HistoryState",
    "validate_action",
    "default_questionnaire",
    "transform",
    "initial_state",
    "reduce_history",
    "replay",
    "move_question",
    "reorder_action",
    "to_wire",
    "EditorSession",
    "QuestionnaireStore",
    "MemoryStore",
]
