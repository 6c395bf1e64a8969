import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from clipstack.clipboard import MemoryClipboard, Representation
from clipstack.config import ClipboardSettings
from clipstack.events import Signal
from clipstack.exceptions import ClipboardReadError
from clipstack.models import ImageContent, ProvenanceKind, TextContent
from clipstack.monitor import ClipboardMonitor
from clipstack.store import HistoryStore


class FakeClock:
    def __init__(self):
        self.now = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def signal() -> Signal:
    return Signal("clipboard_auto_activated")


@pytest.fixture
def store(settings) -> HistoryStore:
    return HistoryStore(settings)


@pytest.fixture
def monitor(clipboard, store, repository, settings, signal, clock) -> ClipboardMonitor:
    return ClipboardMonitor(clipboard, store, repository, settings, signal, clock=clock)


def test_unchanged_counter_is_a_no_op(monitor, store):
    assert monitor.tick() is None
    assert len(store) == 0


def test_content_present_at_start_is_not_captured(
    clipboard, store, repository, settings, signal
):
    clipboard.set_text("already here")
    monitor = ClipboardMonitor(clipboard, store, repository, settings, signal)
    assert monitor.tick() is None
    assert len(store) == 0


def test_text_capture_inserts_persists_and_notifies(
    monitor, clipboard, store, repository, signal
):
    received = []
    signal.connect(lambda: received.append(True))
    clipboard.set_text("hello")

    entry = monitor.tick()

    assert entry.content == TextContent(content="hello")
    assert entry.content_type == "public.utf8-plain-text"
    assert store.snapshot() == (entry,)
    assert repository.load() == [entry]
    assert received == [True]


def test_same_image_twice_is_captured_once(monitor, clipboard, store, png_bytes, clock):
    clipboard.set_image(png_bytes)
    first = monitor.tick()
    clock.advance(10)
    clipboard.set_image(png_bytes)
    second = monitor.tick()

    assert first.content == ImageContent(data=png_bytes)
    assert second is None
    assert len(store) == 1


def test_duplicate_outside_window_is_captured_again(monitor, clipboard, store, clock):
    for i in range(9):
        clipboard.set_text(f"t{i}")
        assert monitor.tick() is not None
        clock.advance(10)
    clipboard.set_text("t0")
    assert monitor.tick() is not None
    assert len(store) == 10


def test_empty_and_unclassifiable_payloads_are_skipped(monitor, clipboard, store):
    clipboard.clear()
    assert monitor.tick() is None
    clipboard.set(Representation(format_tag="com.example.private", payload=b"x"))
    assert monitor.tick() is None
    assert len(store) == 0


def test_auto_activate_is_read_at_tick_time(
    monitor, clipboard, settings, signal, clock
):
    received = []
    signal.connect(lambda: received.append(True))
    settings.auto_activate_on_capture = False

    clipboard.set_text("a")
    assert monitor.tick() is not None
    assert received == []

    settings.auto_activate_on_capture = True
    for text in ("b", "c"):
        clock.advance(10)
        clipboard.set_text(text)
        monitor.tick()
    assert received == [True, True]


def test_read_failure_is_swallowed_and_retried(store, repository, settings, signal):
    accessor = MagicMock()
    accessor.change_counter.side_effect = [
        0,
        ClipboardReadError("clipboard busy"),
        1,
    ]
    accessor.read_representations.return_value = [
        Representation(format_tag="public.utf8-plain-text", payload="later")
    ]
    monitor = ClipboardMonitor(accessor, store, repository, settings, signal)

    assert monitor.tick() is None
    entry = monitor.tick()
    assert entry.content == TextContent(content="later")


def test_invalid_text_bytes_drop_the_tick(monitor, clipboard, store):
    clipboard.set(Representation(format_tag="public.utf8-plain-text", payload=b"\xff"))
    assert monitor.tick() is None
    assert len(store) == 0


def test_persistence_failure_keeps_entry_and_notifies(
    clipboard, store, settings, signal, clock, caplog
):
    received = []
    signal.connect(lambda: received.append(True))
    repository = MagicMock()
    repository.save.side_effect = OSError("disk full")
    monitor = ClipboardMonitor(
        clipboard, store, repository, settings, signal, clock=clock
    )

    clipboard.set_text("a")
    first = monitor.tick()
    assert first is not None
    assert store.snapshot() == (first,)
    assert received == [True]
    assert "Could not persist history" in caplog.text

    clipboard.set_text("b")
    clock.advance(5)
    second = monitor.tick()
    assert second is not None
    assert len(store) == 2
    assert received == [True, True]
    assert repository.save.call_count == 2


def test_failing_receiver_does_not_break_capture(monitor, clipboard, signal):
    received = []

    def broken():
        raise RuntimeError("receiver bug")

    signal.connect(broken)
    signal.connect(lambda: received.append(True))
    clipboard.set_text("a")

    assert monitor.tick() is not None
    assert received == [True]


def test_provenance_first_capture_is_local(monitor, clipboard):
    clipboard.set_text("a")
    assert monitor.tick().provenance.kind == ProvenanceKind.LOCAL


def test_provenance_rapid_capture_is_remote(monitor, clipboard, clock):
    clipboard.set_text("a")
    monitor.tick()
    clock.advance(0.5)
    clipboard.set_text("b")
    assert monitor.tick().provenance.kind == ProvenanceKind.REMOTE_DEVICE

    clock.advance(5)
    clipboard.set_text("c")
    assert monitor.tick().provenance.kind == ProvenanceKind.LOCAL


def test_provenance_continuity_marker_is_remote(monitor, clipboard):
    clipboard.set(
        Representation(format_tag="public.utf8-plain-text", payload="from phone"),
        Representation(format_tag="com.apple.continuity.marker", payload=b"1"),
    )
    entry = monitor.tick()
    assert entry.provenance.is_remote
    assert entry.provenance.device_name is None


def test_start_requires_a_loop(monitor):
    with pytest.raises(RuntimeError):
        monitor.start()
    assert not monitor.is_running


def test_polling_on_event_loop(db_path, repository, signal):
    settings = ClipboardSettings(poll_interval_ms=10, database_path=db_path)
    clipboard = MemoryClipboard()
    store = HistoryStore(settings)
    monitor = ClipboardMonitor(clipboard, store, repository, settings, signal)

    async def scenario():
        monitor.start()
        assert monitor.is_running
        clipboard.set_text("polled")
        for _ in range(100):
            await asyncio.sleep(0.01)
            if len(store):
                break
        monitor.stop()

    asyncio.run(scenario())
    assert not monitor.is_running
    assert [e.content.content for e in store] == ["polled"]
