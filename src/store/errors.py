"""Message store error types."""


class StorePersistError(Exception):
    """Raised when a read or write against the message store fails."""


class MessageNotFoundError(StorePersistError):
    """Raised when deleting a message id that does not exist."""

    def __init__(self, message_id: int) -> None:
        super().__init__(f"Chat {message_id} not found")
        self.message_id = message_id
