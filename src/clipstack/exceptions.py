"""Custom exceptions for clipstack."""


class ClipstackError(Exception):
    """Base exception class for clipstack."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.original_error = original_error

    def __str__(self):
        base_msg = super().__str__()
        if self.original_error:
            return f"{base_msg} (Caused by: {type(self.original_error).__name__}: {self.original_error})"
        return base_msg


class ClipboardReadError(ClipstackError):
    """The OS clipboard could not be read this tick."""

    pass


class RecordDecodeError(ClipstackError):
    """A persisted history record could not be decoded."""

    pass


__all__ = ["ClipstackError", "ClipboardReadError", "RecordDecodeError"]
