"""Exceptions related to sync-status."""

__all__ = [
    "SyncStatusException",
    "InputException",
    "DecodeException",
]


class SyncStatusException(Exception):
    """Generic base exception used for this library."""


class InputException(SyncStatusException):
    """Raised when input objects are not formatted as expected."""


class DecodeException(InputException):
    """Raised when a generic resource could not be decoded into an object."""

    def __init__(self, gvk: str, message: str) -> None:
        super().__init__(f"Could not decode {gvk} object: {message}")
        self.gvk = gvk
        self.message = message
