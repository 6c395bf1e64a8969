# region Docstring
"""
clipstack.constants
Shared constants and enumerations for clipboard capture, classification and persistence.
Overview:
- Provides the uniform type identifiers (UTIs) the classifier recognises and the fixed
    priority in which they are matched.
- Defines the bounds the history pipeline enforces (dedup window, unlimited ceiling).
- Provides the names and versions used by the persisted history record.
Contents:
- Format Enumerations:
    - ImageFormats: Enum of recognised image UTIs in their fixed match order
        (png, jpeg, tiff, heic, webp, bmp, gif).
    - FormatTags: Enum of the non-image UTIs (file url, plain text, url, rtf, html) plus
        the generic data identifier used as a decode fallback.
- Derived Lists:
    - IMAGE_FORMAT_LIST: Image UTIs in match order.
    - TEXT_FORMAT_LIST: UTIs accepted as plain text.
    - KNOWN_CONTENT_TYPES: Every identifier a persisted `contentType` may carry.
- History Bounds:
    - DEDUP_WINDOW: Number of most recent entries compared by the dedup filter.
    - UNLIMITED_HISTORY: The "unlimited" sentinel for max history size.
    - UNLIMITED_HISTORY_CEILING: The practical cap the sentinel resolves to.
- Provenance Heuristic:
    - CONTINUITY_MARKERS: Substrings that must all appear in a format tag for it to be
        treated as a cross-device (continuity) payload.
    - HANDOFF_THRESHOLD_SECONDS: Capture spacing under which a capture is treated as
        a cross-device handoff.
- Persistence:
    - STORAGE_KEY, RECORD_VERSION, RECORDS_TABLE, BACKUPS_TABLE.
    - APPLE_REFERENCE_DATE: Epoch of legacy numeric timestamps.
- File Categories:
    - FileCategory: Display categories derived from content and MIME type.
    - CODE_MIME_TYPES: MIME types treated as source code.
Design Notes:
- Format enums inherit from both str and enum.Enum, allowing direct string comparison
    against raw format tags coming from the OS clipboard.
- The order of members in ImageFormats is significant: the classifier walks it in order.
"""
# endregion
# region Imports
import enum
from datetime import datetime, timezone
from typing import List

# endregion
# region Constants -- Format Enums


class ImageFormats(str, enum.Enum):
    """Recognised image UTIs, in match priority order."""

    PNG = "public.png"  # Portable Network Graphics
    JPEG = "public.jpeg"  # Joint Photographic Experts Group
    TIFF = "public.tiff"  # Tagged Image File Format
    HEIC = "public.heic"  # High Efficiency Image Coding
    WEBP = "org.webmproject.webp"  # Web Picture format
    BMP = "com.microsoft.bmp"  # Bitmap Image File
    GIF = "com.compuserve.gif"  # Graphics Interchange Format


class FormatTags(str, enum.Enum):
    """Non-image UTIs recognised on the clipboard."""

    FILE_URL = "public.file-url"
    UTF8_TEXT = "public.utf8-plain-text"
    PLAIN_TEXT = "public.plain-text"
    URL = "public.url"
    RTF = "public.rtf"
    HTML = "public.html"
    DATA = "public.data"  # generic binary, decode fallback only


class FileCategory(str, enum.Enum):
    """Display category of a history entry."""

    IMAGE = "image"
    TEXT = "text"
    DOCUMENT = "document"
    PDF = "pdf"
    VIDEO = "video"
    AUDIO = "audio"
    ARCHIVE = "archive"
    URL = "url"
    CODE = "code"
    OTHER = "other"


# endregion
# region Constants -- Derived Lists

IMAGE_FORMAT_LIST: List[str] = [fmt.value for fmt in ImageFormats]
"""List[str]: Image UTIs in the order the classifier tries them."""
TEXT_FORMAT_LIST: List[str] = [FormatTags.UTF8_TEXT.value, FormatTags.PLAIN_TEXT.value]
"""List[str]: UTIs accepted as plain text."""
KNOWN_CONTENT_TYPES: List[str] = IMAGE_FORMAT_LIST + [fmt.value for fmt in FormatTags]
"""List[str]: Every content type identifier a persisted entry may carry."""

CODE_MIME_TYPES: List[str] = [
    "text/javascript",
    "application/javascript",
    "text/css",
    "text/html",
    "application/json",
    "text/xml",
    "application/xml",
    "text/x-python",
    "text/x-java-source",
    "text/x-swift",
    "text/x-c",
    "text/x-c++",
    "text/x-objective-c",
    "text/x-php",
    "text/x-ruby",
    "text/x-go",
    "text/x-rust",
    "text/x-kotlin",
    "text/x-dart",
]
"""List[str]: MIME types of files categorised as code."""

# endregion
# region Constants -- History Bounds

DEDUP_WINDOW: int = 8
"""[int] Number of most recent entries the dedup filter compares against."""
UNLIMITED_HISTORY: int = -1
"""[int] Sentinel value of `max_history_size` meaning "unlimited"."""
UNLIMITED_HISTORY_CEILING: int = 999_999
"""[int] Effective max size enforced when the unlimited sentinel is configured."""

# endregion
# region Constants -- Provenance Heuristic

CONTINUITY_MARKERS: tuple[str, ...] = ("com.apple.", "continuity")
"""[tuple] Substrings that must all be present in a cross-device format tag."""
HANDOFF_THRESHOLD_SECONDS: float = 2.0
"""[float] Captures closer together than this are attributed to a remote device."""

# endregion
# region Constants -- Persistence

STORAGE_KEY: str = "clipboardItems"
"""[str] Name of the persisted history record."""
RECORD_VERSION: int = 2
"""[int] Schema version written by the codec. Unversioned records are version 1."""
RECORDS_TABLE: str = "records"
"""[str] sqlite-utils table holding named records."""
BACKUPS_TABLE: str = "backups"
"""[str] sqlite-utils table holding previous copies of named records."""
APPLE_REFERENCE_DATE: datetime = datetime(2001, 1, 1, tzinfo=timezone.utc)
"""[datetime] Epoch of numeric timestamps found in legacy records."""
SIGNAL_NEW_CONTENT: str = "clipboard_auto_activated"
"""[str] Name of the signal fired after a successful capture."""

# endregion


__all__ = [
    "ImageFormats",
    "FormatTags",
    "FileCategory",
    "IMAGE_FORMAT_LIST",
    "TEXT_FORMAT_LIST",
    "KNOWN_CONTENT_TYPES",
    "CODE_MIME_TYPES",
    "DEDUP_WINDOW",
    "UNLIMITED_HISTORY",
    "UNLIMITED_HISTORY_CEILING",
    "CONTINUITY_MARKERS",
    "HANDOFF_THRESHOLD_SECONDS",
    "STORAGE_KEY",
    "RECORD_VERSION",
    "RECORDS_TABLE",
    "BACKUPS_TABLE",
    "APPLE_REFERENCE_DATE",
    "SIGNAL_NEW_CONTENT",
]
