import hashlib
import mimetypes
import uuid
from datetime import datetime, timezone
from pathlib import Path


def get_time() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Returns:
        datetime: The current UTC time.
    """
    return datetime.now(timezone.utc)


def new_entry_id() -> str:
    """
    Generate a new opaque history entry identifier.

    Returns:
        str: A random UUID4 as a 32 character hex string.

    Example:
        >>> len(new_entry_id())
        32
    """
    return uuid.uuid4().hex


def get_sha256(data: bytes) -> str:
    """
    Calculate the SHA256 hash of a byte string.

    Arguments:
        data (bytes): The bytes to hash.

    Returns:
        str: The SHA256 hash as a hexadecimal string.

    Example:
        >>> get_sha256(b"")
        'e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855'
    """
    return hashlib.sha256(data).hexdigest()


def get_mime_type(file_path: Path) -> str | None:
    """
    Guess the MIME type of a file from its name.

    Arguments:
        file_path (Path): The file path to inspect.

    Returns:
        str | None: The MIME type, or None if it cannot be guessed.

    Example:
        >>> get_mime_type(Path("notes.txt"))
        'text/plain'
    """
    mime_type, _ = mimetypes.guess_type(file_path.name)
    return mime_type


__all__ = ["get_time", "new_entry_id", "get_sha256", "get_mime_type"]
