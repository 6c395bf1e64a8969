from clipstack.events import Signal


def test_emit_calls_receivers_in_order():
    calls = []
    signal = Signal("test")
    signal.connect(lambda: calls.append("first"))
    signal.connect(lambda: calls.append("second"))
    signal.emit()
    assert calls == ["first", "second"]
    assert signal.emitted == 1


def test_connect_is_idempotent_and_usable_as_decorator():
    calls = []
    signal = Signal("test")

    @signal.connect
    def receiver():
        calls.append(1)

    signal.connect(receiver)
    signal.emit()
    assert calls == [1]
    assert len(signal) == 1


def test_disconnect():
    calls = []
    signal = Signal("test")

    def receiver():
        calls.append(1)

    signal.connect(receiver)
    assert signal.disconnect(receiver) is True
    assert signal.disconnect(receiver) is False
    signal.emit()
    assert calls == []


def test_raising_receiver_is_isolated(caplog):
    calls = []
    signal = Signal("test")

    def broken():
        raise ValueError("boom")

    signal.connect(broken)
    signal.connect(lambda: calls.append(1))
    signal.emit()

    assert calls == [1]
    assert "boom" in caplog.text
