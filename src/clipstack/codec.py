# region Docstring
"""
clipstack.codec
Serialization of the clipboard history to and from its persisted JSON record.
Overview:
- Encodes a history snapshot into the current record schema (version 2).
- Decodes stored records back into history entries, tolerating the older on-disk shapes
    written by earlier releases.
Contents:
- Encoding:
    - encode_content(content) -> dict
    - encode_entry(entry) -> dict
    - encode_history(entries) -> str
- Decoding:
    - decode_content(data) -> ContentVariant
    - decode_entry(item) -> HistoryEntry
    - decode_history(payload) -> list[HistoryEntry]
- Legacy translators (pure, one per historical shape):
    - from_legacy_image_field: items whose raw image bytes sit under `imageData`.
    - from_legacy_raw_content: items whose `content` is the base64 image itself rather
        than a tagged object.
Record Schema (version 2):
    {
        "version": 2,
        "items": [
            {
                "id": "<hex>",
                "content": {"type": "image", "data": "<base64>", "format": "public.png"},
                "contentType": "public.png",
                "contentHash": "<sha256>",
                "timestamp": "2025-01-01T12:00:00+00:00",
                "isFavorite": false,
                "provenance": {"kind": "local", "deviceName": null}
            }
        ]
    }
    Content objects by type: image {data, format}, text {content}, file {data, name,
    mimeType}, url {urlString}, rtf {data}, html {content}. Bytes are base64.
Design notes:
- Decoding an item tries each legacy translator in order and falls back to the current
    tagged-union schema. Legacy data is the normal success path, not an error path.
- Unversioned records (a bare JSON array of items) are read as version 1.
- Missing ids are generated, missing or non-boolean favorite flags are False, missing
    provenance is Unknown, numeric timestamps count seconds from 2001-01-01 UTC, and an
    unrecognised contentType becomes the generic `public.data`.
- Content hashes are recomputed on decode; the stored value is informational.
- Any failure while decoding (malformed or too deeply nested JSON, unknown content
    type tag, missing required field, non-finite timestamp) discards the whole record:
    decode_history returns an empty list rather than a partial history.
"""
# endregion
# region Imports
import base64
import binascii
import json
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import ValidationError

from clipstack.constants import (
    APPLE_REFERENCE_DATE,
    IMAGE_FORMAT_LIST,
    KNOWN_CONTENT_TYPES,
    RECORD_VERSION,
    FormatTags,
    ImageFormats,
)
from clipstack.exceptions import RecordDecodeError
from clipstack.models import (
    ContentVariant,
    FileContent,
    HistoryEntry,
    HtmlContent,
    ImageContent,
    Provenance,
    ProvenanceKind,
    RichTextContent,
    TextContent,
    UrlContent,
)
from clipstack.utils import new_entry_id

# endregion

logger = logging.getLogger("clipstack").getChild("Codec")

# region Helpers


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: Any) -> bytes:
    if not isinstance(value, str):
        raise RecordDecodeError(f"Expected base64 string, got {type(value).__name__}")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as e:
        raise RecordDecodeError("Invalid base64 payload", e) from e


def _require(data: dict, key: str) -> Any:
    if key not in data:
        raise RecordDecodeError(f"Missing required field '{key}'")
    return data[key]


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, bool):
        raise RecordDecodeError("Invalid timestamp")
    if isinstance(value, (int, float)):
        try:
            if not math.isfinite(value):
                raise RecordDecodeError(f"Timestamp is not finite: {value}")
            return APPLE_REFERENCE_DATE + timedelta(seconds=value)
        except (OverflowError, ValueError) as e:
            raise RecordDecodeError(f"Timestamp out of range: {value}", e) from e
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError as e:
            raise RecordDecodeError(f"Invalid timestamp '{value}'", e) from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    raise RecordDecodeError(f"Invalid timestamp type {type(value).__name__}")


def _parse_provenance(value: Any) -> Provenance:
    if not isinstance(value, dict):
        return Provenance.unknown()
    try:
        kind = ProvenanceKind(value.get("kind"))
    except ValueError:
        return Provenance.unknown()
    device_name = value.get("deviceName")
    if kind == ProvenanceKind.REMOTE_DEVICE:
        return Provenance.remote_device(device_name if isinstance(device_name, str) else None)
    return Provenance(kind=kind)


def _default_content_type(content: ContentVariant) -> str:
    match content:
        case ImageContent(format=fmt):
            return fmt
        case TextContent():
            return FormatTags.UTF8_TEXT.value
        case FileContent():
            return FormatTags.FILE_URL.value
        case UrlContent():
            return FormatTags.URL.value
        case RichTextContent():
            return FormatTags.RTF.value
        case HtmlContent():
            return FormatTags.HTML.value
    return FormatTags.DATA.value


# endregion
# region Encoding


def encode_content(content: ContentVariant) -> dict:
    """Encode a content variant as a tagged JSON object."""
    match content:
        case ImageContent(data=data, format=fmt):
            return {"type": "image", "data": _b64encode(data), "format": fmt}
        case TextContent(content=text):
            return {"type": "text", "content": text}
        case FileContent(data=data, name=name, mime_type=mime_type):
            return {
                "type": "file",
                "data": _b64encode(data),
                "name": name,
                "mimeType": mime_type,
            }
        case UrlContent(url=url):
            return {"type": "url", "urlString": url}
        case RichTextContent(data=data):
            return {"type": "rtf", "data": _b64encode(data)}
        case HtmlContent(content=html):
            return {"type": "html", "content": html}
    raise TypeError(f"Unsupported content variant: {type(content).__name__}")


def encode_entry(entry: HistoryEntry) -> dict:
    return {
        "id": entry.id,
        "content": encode_content(entry.content),
        "contentType": entry.content_type,
        "contentHash": entry.content_hash,
        "timestamp": entry.captured_at.isoformat(),
        "isFavorite": entry.is_favorite,
        "provenance": {
            "kind": entry.provenance.kind.value,
            "deviceName": entry.provenance.device_name,
        },
    }


def encode_history(entries: Iterable[HistoryEntry]) -> str:
    """
    Encode a history snapshot as a versioned JSON record.

    Args:
        entries (Iterable[HistoryEntry]): History, newest first.

    Returns:
        str: The JSON document to persist.
    """
    return json.dumps(
        {"version": RECORD_VERSION, "items": [encode_entry(e) for e in entries]},
        separators=(",", ":"),
    )


# endregion
# region Legacy Translators


def from_legacy_image_field(item: dict) -> Optional[ContentVariant]:
    """Items from releases that stored raw image bytes under `imageData`."""
    if "imageData" not in item:
        return None
    content_type = item.get("contentType")
    fmt = content_type if content_type in IMAGE_FORMAT_LIST else ImageFormats.PNG.value
    return ImageContent(data=_b64decode(item["imageData"]), format=fmt)


def from_legacy_raw_content(item: dict) -> Optional[ContentVariant]:
    """Items whose `content` holds the base64 image bytes instead of a tagged object."""
    if not isinstance(item.get("content"), str):
        return None
    content_type = item.get("contentType")
    fmt = content_type if content_type in IMAGE_FORMAT_LIST else ImageFormats.PNG.value
    return ImageContent(data=_b64decode(item["content"]), format=fmt)


LEGACY_TRANSLATORS: tuple[Callable[[dict], Optional[ContentVariant]], ...] = (
    from_legacy_image_field,
    from_legacy_raw_content,
)
"""Legacy item shapes, tried in order before the current schema."""

# endregion
# region Decoding


def decode_content(data: Any) -> ContentVariant:
    """Decode a tagged content object written by encode_content."""
    if not isinstance(data, dict):
        raise RecordDecodeError("Content must be an object")
    content_type = _require(data, "type")
    match content_type:
        case "image":
            fmt = data.get("format") or ImageFormats.PNG.value
            return ImageContent(data=_b64decode(_require(data, "data")), format=fmt)
        case "text":
            return TextContent(content=_require(data, "content"))
        case "file":
            return FileContent(
                data=_b64decode(_require(data, "data")),
                name=_require(data, "name"),
                mime_type=_require(data, "mimeType"),
            )
        case "url":
            return UrlContent(url=_require(data, "urlString"))
        case "rtf":
            return RichTextContent(data=_b64decode(_require(data, "data")))
        case "html":
            return HtmlContent(content=_require(data, "content"))
    raise RecordDecodeError(f"Unknown content type '{content_type}'")


def decode_entry(item: Any) -> HistoryEntry:
    """
    Decode one persisted item, trying each legacy shape before the current schema.

    Raises:
        RecordDecodeError: If the item matches no known shape.
    """
    if not isinstance(item, dict):
        raise RecordDecodeError("Item must be an object")

    content: Optional[ContentVariant] = None
    for translate in LEGACY_TRANSLATORS:
        content = translate(item)
        if content is not None:
            break
    if content is None:
        content = decode_content(_require(item, "content"))

    content_type = item.get("contentType")
    if content_type is None:
        content_type = _default_content_type(content)
    elif content_type not in KNOWN_CONTENT_TYPES:
        content_type = FormatTags.DATA.value

    entry_id = item.get("id")
    if not isinstance(entry_id, str) or not entry_id:
        entry_id = new_entry_id()
    favorite = item.get("isFavorite", False)

    return HistoryEntry(
        id=entry_id,
        content=content,
        content_type=content_type,
        captured_at=_parse_timestamp(_require(item, "timestamp")),
        provenance=_parse_provenance(item.get("provenance")),
        is_favorite=favorite if isinstance(favorite, bool) else False,
    )


def _items(record: Any) -> list:
    if isinstance(record, list):
        return record
    if not isinstance(record, dict):
        raise RecordDecodeError("Record must be an object or an array")
    version = record.get("version", 1)
    if not isinstance(version, int) or version > RECORD_VERSION:
        raise RecordDecodeError(f"Unsupported record version {version!r}")
    items = _require(record, "items")
    if not isinstance(items, list):
        raise RecordDecodeError("Record items must be an array")
    return items


def decode_history_strict(payload: Union[str, bytes]) -> list[HistoryEntry]:
    """
    Decode a persisted record, raising on any failure.

    Raises:
        RecordDecodeError: If the record or any item cannot be decoded.
    """
    try:
        record = json.loads(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        raise RecordDecodeError("Record is not valid JSON", e) from e

    entries: list[HistoryEntry] = []
    seen_ids: set[str] = set()
    for item in _items(record):
        try:
            entry = decode_entry(item)
        except ValidationError as e:
            raise RecordDecodeError("Item failed validation", e) from e
        if entry.id in seen_ids:
            entry = entry.model_copy(update={"id": new_entry_id()})
        seen_ids.add(entry.id)
        entries.append(entry)
    return entries


def decode_history(payload: Union[str, bytes, None]) -> list[HistoryEntry]:
    """
    Decode a persisted record into history entries, newest first.

    A record that cannot be decoded yields an empty history.

    Args:
        payload (Union[str, bytes, None]): The stored JSON document, or None.

    Returns:
        list[HistoryEntry]: The decoded entries, or [] on any failure.
    """
    if payload is None:
        return []
    try:
        return decode_history_strict(payload)
    except (RecordDecodeError, ValueError, TypeError, RecursionError) as e:
        logger.warning(f"Discarding unreadable history record: {e}")
        return []


# endregion

__all__ = [
    "encode_content",
    "encode_entry",
    "encode_history",
    "from_legacy_image_field",
    "from_legacy_raw_content",
    "LEGACY_TRANSLATORS",
    "decode_content",
    "decode_entry",
    "decode_history_strict",
    "decode_history",
]
