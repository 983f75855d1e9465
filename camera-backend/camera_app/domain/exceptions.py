"""Domain exceptions raised by the camera lifecycle"""
from typing import List, Optional


CONCURRENCY_CONFLICT_MESSAGE = "The camera was modified by another user. Please refresh and try again."


class CameraValidationError(ValueError):
    """Camera input or configuration failed validation"""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors) if errors else [message]


class CameraNotFoundError(ValueError):
    """Camera does not exist or is no longer editable"""


class ConcurrencyConflictError(RuntimeError):
    """The stored camera changed between load and save"""

    def __init__(self, message: str = CONCURRENCY_CONFLICT_MESSAGE) -> None:
        super().__init__(message)


class CameraArchiveError(RuntimeError):
    """Archiving a camera before permanent deletion failed"""
