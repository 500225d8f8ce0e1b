"""Chat state shared by the chat view and the history view.

One ChatState is owned by the page and passed explicitly to the
orchestrator, the history service, and both views.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from src.models.schemas import ChatMessage

logger = logging.getLogger(__name__)


class ChatEvent(str, Enum):
    """Notifications emitted to keep the views in sync."""

    TURN_SUBMITTED = "turn_submitted"
    TURN_COMPLETED = "turn_completed"
    HISTORY_LOADED = "history_loaded"
    MESSAGE_DELETED = "message_deleted"
    HISTORY_CLEARED = "history_cleared"


Listener = Callable[[ChatEvent, Any], None]


class ChatState:
    """In-memory chat state for one page load.

    Attributes:
        session: Transcript of turns submitted from this page, in the order
            their messages were appended.
        history: Cached copy of the persisted history.
    """

    def __init__(self) -> None:
        self.session: list[ChatMessage] = []
        self.history: list[ChatMessage] = []
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, event: ChatEvent, payload: Any = None) -> None:
        logger.debug(f"Chat event: {event.value}")
        for listener in list(self._listeners):
            listener(event, payload)

    def add_to_session(self, message: ChatMessage) -> None:
        self.session.append(message)

    def replace_in_session(self, pending: ChatMessage, stored: ChatMessage) -> None:
        """Swap an optimistic entry for its persisted record."""
        for i, message in enumerate(self.session):
            if message is pending:
                self.session[i] = stored
                return

    def clear_session(self) -> None:
        self.session.clear()
