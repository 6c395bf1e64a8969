import base64
import json
from datetime import datetime, timezone

import pytest

from clipstack.codec import (
    decode_history,
    decode_history_strict,
    encode_history,
    from_legacy_image_field,
    from_legacy_raw_content,
)
from clipstack.exceptions import RecordDecodeError
from clipstack.models import (
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

CAPTURED = datetime(2025, 3, 4, 5, 6, 7, 890000, tzinfo=timezone.utc)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


@pytest.fixture
def snapshot() -> list[HistoryEntry]:
    return [
        HistoryEntry(
            content=ImageContent(data=b"\x89PNG-bytes"),
            content_type="public.png",
            captured_at=CAPTURED,
            provenance=Provenance.remote_device(),
            is_favorite=True,
        ),
        HistoryEntry(
            content=TextContent(content="héllo wörld"),
            content_type="public.utf8-plain-text",
            captured_at=CAPTURED,
            provenance=Provenance.local(),
        ),
        HistoryEntry(
            content=FileContent(data=b"%PDF", name="a.pdf", mime_type="application/pdf"),
            content_type="public.file-url",
            captured_at=CAPTURED,
        ),
        HistoryEntry(
            content=UrlContent(url="https://example.com"),
            content_type="public.url",
            captured_at=CAPTURED,
        ),
        HistoryEntry(
            content=RichTextContent(data=b"{\\rtf1}"),
            content_type="public.rtf",
            captured_at=CAPTURED,
        ),
        HistoryEntry(
            content=HtmlContent(content="<b>x</b>"),
            content_type="public.html",
            captured_at=CAPTURED,
        ),
    ]


def test_round_trip_preserves_history(snapshot):
    assert decode_history(encode_history(snapshot)) == snapshot


def test_encoded_record_is_versioned(snapshot):
    record = json.loads(encode_history(snapshot))
    assert record["version"] == 2
    item = record["items"][0]
    assert item["content"] == {
        "type": "image",
        "data": b64(b"\x89PNG-bytes"),
        "format": "public.png",
    }
    assert item["isFavorite"] is True
    assert item["provenance"] == {"kind": "remote_device", "deviceName": None}
    assert record["items"][3]["content"] == {
        "type": "url",
        "urlString": "https://example.com",
    }


def test_legacy_image_field_decodes_to_single_image():
    payload = json.dumps(
        [
            {
                "id": "legacy-1",
                "imageData": b64(b"\x89PNG"),
                "contentType": "public.png",
                "timestamp": 700000000,
                "isFavorite": True,
            }
        ]
    )
    [entry] = decode_history(payload)
    assert entry.id == "legacy-1"
    assert entry.content == ImageContent(data=b"\x89PNG", format="public.png")
    assert entry.is_favorite is True
    assert entry.provenance.kind == ProvenanceKind.UNKNOWN
    assert entry.captured_at == datetime(2023, 3, 8, 20, 26, 40, tzinfo=timezone.utc)


def test_legacy_raw_content_decodes_to_image():
    payload = json.dumps(
        {
            "version": 1,
            "items": [
                {
                    "content": b64(b"GIF89a"),
                    "contentType": "com.compuserve.gif",
                    "timestamp": "2024-01-01T00:00:00Z",
                }
            ],
        }
    )
    [entry] = decode_history(payload)
    assert entry.content == ImageContent(data=b"GIF89a", format="com.compuserve.gif")
    assert entry.is_favorite is False
    assert len(entry.id) == 32


def test_translators_ignore_other_shapes():
    current = {"content": {"type": "text", "content": "x"}, "timestamp": 0}
    assert from_legacy_image_field(current) is None
    assert from_legacy_raw_content(current) is None


def test_unknown_content_type_falls_back_to_generic():
    payload = json.dumps(
        {
            "version": 2,
            "items": [
                {
                    "content": {"type": "text", "content": "x"},
                    "contentType": "com.example.weird",
                    "timestamp": "2024-01-01T00:00:00+00:00",
                }
            ],
        }
    )
    [entry] = decode_history(payload)
    assert entry.content_type == "public.data"


def test_missing_content_type_is_derived_from_content():
    payload = json.dumps(
        {"items": [{"content": {"type": "url", "urlString": "u"}, "timestamp": 0}]}
    )
    [entry] = decode_history(payload)
    assert entry.content_type == "public.url"


def test_content_hash_is_recomputed(snapshot):
    record = json.loads(encode_history(snapshot[:1]))
    record["items"][0]["contentHash"] = "bogus"
    [entry] = decode_history(json.dumps(record))
    assert entry.content_hash == snapshot[0].content_hash


def test_duplicate_ids_are_reassigned():
    item = {"id": "same", "content": {"type": "text", "content": "x"}, "timestamp": 0}
    entries = decode_history(json.dumps([item, dict(item)]))
    assert len(entries) == 2
    assert entries[0].id == "same"
    assert entries[1].id != "same"


@pytest.mark.parametrize("flag", ["false", "true", 1, None])
def test_non_boolean_favorite_flags_are_false(flag):
    item = {
        "content": {"type": "text", "content": "x"},
        "timestamp": 0,
        "isFavorite": flag,
    }
    [entry] = decode_history(json.dumps([item]))
    assert entry.is_favorite is False


def test_boolean_favorite_flag_is_kept():
    item = {"content": {"type": "text", "content": "x"}, "timestamp": 0, "isFavorite": True}
    [entry] = decode_history(json.dumps([item]))
    assert entry.is_favorite is True


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        '{"version": 2, "items": [{"content": {"type": "hologram"}, "timestamp": 0}]}',
        '{"version": 2, "items": [{"content": {"type": "text", "content": "x"}}]}',
        '{"version": 2, "items": [{"imageData": "***", "timestamp": 0}]}',
        '{"version": 99, "items": []}',
        '"just a string"',
        '{"items": [{"content": {"type": "text", "content": "x"}, "timestamp": NaN}]}',
        '{"items": [{"content": {"type": "text", "content": "x"}, "timestamp": Infinity}]}',
        '{"items": [{"content": {"type": "text", "content": "x"}, "timestamp": -Infinity}]}',
        "[" * 100000 + "]" * 100000,
    ],
)
def test_corrupt_records_decode_to_empty_history(payload):
    assert decode_history(payload) == []
    with pytest.raises(RecordDecodeError):
        decode_history_strict(payload)


def test_one_bad_item_discards_whole_record(snapshot):
    record = json.loads(encode_history(snapshot))
    record["items"].append({"content": {"type": "hologram"}, "timestamp": 0})
    assert decode_history(json.dumps(record)) == []


def test_no_payload_is_empty_history():
    assert decode_history(None) == []
