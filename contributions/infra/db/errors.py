"""
Storage error classes.
"""


class StorageError(Exception):
    """Base exception for storage layer errors."""
    pass


class DatabaseError(StorageError):
    """Raised when a statement could not be executed against the database.

    Wraps the underlying driver or pool failure, which is kept as
    ``__cause__``. The message is the underlying error's message.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @classmethod
    def from_exception(cls, exc: BaseException) -> "DatabaseError":
        return cls(str(exc))
