from datetime import datetime, timedelta, timezone

from clipstack.dedup import is_duplicate
from clipstack.models import (
    HistoryEntry,
    ImageContent,
    TextContent,
    UrlContent,
    compute_content_hash,
)

BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


def text_entry(text: str, minutes: int = 0) -> HistoryEntry:
    return HistoryEntry(
        content=TextContent(content=text),
        content_type="public.utf8-plain-text",
        captured_at=BASE_TIME + timedelta(minutes=minutes),
    )


def newest_first(texts):
    return [text_entry(text, minutes=-i) for i, text in enumerate(texts)]


def test_empty_history_has_no_duplicates():
    content = TextContent(content="a")
    assert not is_duplicate("text", compute_content_hash(content), [])


def test_match_within_window_is_duplicate():
    history = newest_first([f"t{i}" for i in range(8)])
    target = TextContent(content="t7")  # eighth newest
    assert is_duplicate("text", compute_content_hash(target), history)


def test_ninth_entry_is_outside_window():
    history = newest_first([f"t{i}" for i in range(9)])
    target = TextContent(content="t8")  # ninth newest
    assert not is_duplicate("text", compute_content_hash(target), history)


def test_tag_must_match_as_well_as_hash():
    history = [text_entry("a")]
    content_hash = history[0].content_hash
    assert is_duplicate("text", content_hash, history)
    assert not is_duplicate("url", content_hash, history)


def test_different_variants_with_same_text_are_not_duplicates():
    url = HistoryEntry(content=UrlContent(url="https://x"), content_type="public.url")
    candidate = TextContent(content="https://x")
    assert not is_duplicate("text", compute_content_hash(candidate), [url])


def test_image_duplicates_compare_bytes():
    png = HistoryEntry(content=ImageContent(data=b"abc"), content_type="public.png")
    assert png.is_duplicate_of(
        HistoryEntry(
            content=ImageContent(data=b"abc", format="public.jpeg"),
            content_type="public.jpeg",
        )
    )
    assert not png.is_duplicate_of(
        HistoryEntry(content=ImageContent(data=b"abd"), content_type="public.png")
    )
