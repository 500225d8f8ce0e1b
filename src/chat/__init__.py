"""Chat turn orchestration and history management.

Responsibilities:
    - Sequencing question persistence, completion, and answer persistence
    - Degrading completion failures into a fallback answer
    - History listing, single delete and clear-all
    - Explicit chat state shared by the chat and history views
"""

from src.chat.history import HistoryService
from src.chat.orchestrator import (
    FALLBACK_ANSWER,
    EmptyInputError,
    TurnOrchestrator,
    TurnResult,
    TurnState,
)
from src.chat.state import ChatEvent, ChatState

__all__ = [
    "FALLBACK_ANSWER",
    "ChatEvent",
    "ChatState",
    "EmptyInputError",
    "HistoryService",
    "TurnOrchestrator",
    "TurnResult",
    "TurnState",
]
