# region Docstring
"""
clipstack.models.entry
Domain models for clipboard history entries and their inferred origin.
Overview:
- Provides the frozen Pydantic model for a single captured history entry.
- Provides the provenance model describing where an entry is believed to come from.
Contents:
- Enums:
    - ProvenanceKind: local, remote_device, unknown.
- Pydantic models:
    - Provenance:
        Inferred origin of an entry. Remote devices may carry a device name, which is
        always None today because the device-name resolver is a placeholder.
    - HistoryEntry:
        A captured clipboard payload. Carries an opaque id, the content variant, the
        content type identifier, capture timestamp, provenance, favorite flag and the
        SHA-256 content hash used for deduplication. Provides the derived display
        category and an on-demand thumbnail for image content.
Design notes:
- Entries are frozen. The history store replaces an entry with a modified copy when it
    toggles the favorite flag, so snapshots handed to callers can never be mutated.
- content_hash is computed once, at validation time, when not supplied.
"""
# endregion
# region Imports
import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from clipstack.constants import CODE_MIME_TYPES, FileCategory
from clipstack.models.content import (
    ContentTag,
    ContentVariant,
    FileContent,
    HtmlContent,
    ImageContent,
    RichTextContent,
    TextContent,
    UrlContent,
)
from clipstack.thumbnails import make_thumbnail
from clipstack.utils import get_sha256, get_time, new_entry_id

# endregion
# region Provenance


class ProvenanceKind(str, enum.Enum):
    LOCAL = "local"
    REMOTE_DEVICE = "remote_device"
    UNKNOWN = "unknown"


class Provenance(BaseModel):
    """
    Inferred origin of a captured entry. Heuristic, not authoritative.

    Attributes:
        kind (ProvenanceKind): Local, remote device or unknown.
        device_name (Optional[str]): Name of the remote device, when known.
    """

    model_config = ConfigDict(frozen=True)

    kind: ProvenanceKind = Field(ProvenanceKind.UNKNOWN, description="Origin kind")
    device_name: Optional[str] = Field(
        None, description="Remote device name, if it could be resolved"
    )

    @classmethod
    def local(cls) -> "Provenance":
        return cls(kind=ProvenanceKind.LOCAL)

    @classmethod
    def remote_device(cls, device_name: Optional[str] = None) -> "Provenance":
        return cls(kind=ProvenanceKind.REMOTE_DEVICE, device_name=device_name)

    @classmethod
    def unknown(cls) -> "Provenance":
        return cls(kind=ProvenanceKind.UNKNOWN)

    @property
    def is_remote(self) -> bool:
        return self.kind == ProvenanceKind.REMOTE_DEVICE

    def __str__(self) -> str:
        if self.is_remote:
            return f"remote ({self.device_name or 'unknown device'})"
        return self.kind.value


# endregion
# region History Entry


def compute_content_hash(content: ContentVariant) -> str:
    """SHA-256 hex digest of the canonical bytes of a content variant."""
    return get_sha256(content.canonical_bytes())


class HistoryEntry(BaseModel):
    """
    A single captured clipboard entry.

    Attributes:
        id (str): Opaque unique identifier, persisted across restarts.
        content (ContentVariant): The captured content.
        content_type (str): Uniform type identifier of the payload.
        captured_at (datetime): When the entry was captured (UTC).
        provenance (Provenance): Inferred origin.
        is_favorite (bool): Whether the user marked the entry as favorite.
        content_hash (str): SHA-256 of the canonical content bytes.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_entry_id, description="Opaque entry id")
    content: ContentVariant = Field(..., description="Captured content")
    content_type: str = Field(..., description="Uniform type identifier of the payload")
    captured_at: datetime = Field(
        default_factory=get_time, description="Capture timestamp (UTC)"
    )
    provenance: Provenance = Field(
        default_factory=Provenance.unknown, description="Inferred origin"
    )
    is_favorite: bool = Field(False, description="Marked as favorite")
    content_hash: str = Field("", description="SHA-256 of the canonical content bytes")

    @model_validator(mode="after")
    def fill_content_hash(self) -> "HistoryEntry":
        if not self.content_hash:
            # frozen model: bypass the assignment guard once, during validation
            object.__setattr__(self, "content_hash", compute_content_hash(self.content))
        return self

    @property
    def tag(self) -> ContentTag:
        return self.content.type

    def is_duplicate_of(self, other: "HistoryEntry") -> bool:
        """Equal variant tag and equal content hash."""
        return self.tag == other.tag and self.content_hash == other.content_hash

    @property
    def category(self) -> FileCategory:
        """Display category of the entry."""
        match self.content:
            case ImageContent():
                return FileCategory.IMAGE
            case TextContent():
                return FileCategory.TEXT
            case UrlContent():
                return FileCategory.URL
            case HtmlContent() | RichTextContent():
                return FileCategory.DOCUMENT
            case FileContent(mime_type=mime_type):
                return _file_category(mime_type)
        return FileCategory.OTHER

    @property
    def preview(self) -> str:
        """Short single-line description for listings."""
        match self.content:
            case TextContent(content=text) | HtmlContent(content=text):
                return " ".join(text.split())[:80]
            case UrlContent(url=url):
                return url[:80]
            case ImageContent(data=data, format=fmt):
                return f"{fmt} image, {len(data)} bytes"
            case FileContent(name=name, data=data):
                return f"{name} ({len(data)} bytes)"
            case RichTextContent(data=data):
                return f"rich text, {len(data)} bytes"
        return ""

    def thumbnail(self, size: tuple[int, int] = (200, 200)) -> Optional[bytes]:
        """
        PNG thumbnail of image content, or None.

        Undecodable image bytes yield None rather than raising.
        """
        match self.content:
            case ImageContent(data=data):
                return make_thumbnail(data, tuple(size))
            case FileContent(data=data, mime_type=mime_type) if mime_type.startswith(
                "image/"
            ):
                return make_thumbnail(data, tuple(size))
        return None

    def __repr__(self) -> str:
        return f"<HistoryEntry(id={self.id}, type='{self.tag}', captured_at={self.captured_at})>"


def _file_category(mime_type: str) -> FileCategory:
    if mime_type.startswith("image/"):
        return FileCategory.IMAGE
    if mime_type.startswith("video/"):
        return FileCategory.VIDEO
    if mime_type.startswith("audio/"):
        return FileCategory.AUDIO
    if mime_type == "application/pdf":
        return FileCategory.PDF
    if mime_type.startswith("application/") and any(
        marker in mime_type for marker in ("zip", "archive", "compressed")
    ):
        return FileCategory.ARCHIVE
    if mime_type in CODE_MIME_TYPES:
        return FileCategory.CODE
    return FileCategory.DOCUMENT


# endregion

__all__ = [
    "ProvenanceKind",
    "Provenance",
    "HistoryEntry",
    "compute_content_hash",
]
