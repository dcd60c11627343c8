import os
import queue
import threading

from ticker_dash.app.events import InputEvent, event_for_key
from ticker_dash.app.input_pump import InputPump, StdinKeySource, split_keys


class ScriptedKeySource:
    def __init__(self, *batches: list[str]) -> None:
        self._batches = list(batches)
        self.timeouts: list[float] = []

    def read_keys(self, timeout: float) -> list[str]:
        self.timeouts.append(timeout)
        if self._batches:
            return self._batches.pop(0)
        return ["q"]


class FailingKeySource:
    def read_keys(self, timeout: float) -> list[str]:
        raise OSError("stdin gone")


def drain(channel: "queue.Queue[InputEvent]") -> list[InputEvent]:
    events = []
    while not channel.empty():
        events.append(channel.get_nowait())
    return events


def test_pump_forwards_events_in_order_and_stops_on_quit() -> None:
    channel: queue.Queue[InputEvent] = queue.Queue()
    source = ScriptedKeySource(["\x1b[C"], [], ["x", "\x1b[D"], ["j", "q", "j"])
    pump = InputPump(channel, source, poll_interval=0.01)

    pump.start()
    pump.join(timeout=2)

    assert not pump.is_alive()
    assert pump.stopped
    assert drain(channel) == [
        InputEvent.NEXT,
        InputEvent.TICK,
        InputEvent.PREVIOUS,
        InputEvent.NEXT,
        InputEvent.QUIT,
    ]
    assert set(source.timeouts) == {0.01}


def test_pump_requests_quit_when_keyboard_read_fails() -> None:
    channel: queue.Queue[InputEvent] = queue.Queue()
    pump = InputPump(channel, FailingKeySource(), poll_interval=0.01)

    pump.start()
    pump.join(timeout=2)

    assert drain(channel) == [InputEvent.QUIT]


def test_stop_ends_the_pump() -> None:
    channel: queue.Queue[InputEvent] = queue.Queue()

    class IdleSource:
        def read_keys(self, timeout: float) -> list[str]:
            return []

    pump = InputPump(channel, IdleSource(), poll_interval=0.01)
    pump.start()
    pump.stop()
    pump.join(timeout=2)

    assert not pump.is_alive()
    assert all(event is InputEvent.TICK for event in drain(channel))


def test_split_keys_keeps_escape_sequences_together() -> None:
    assert split_keys("j\x1b[Ck") == ["j", "\x1b[C", "k"]
    assert split_keys("\x1b") == ["\x1b"]


def test_key_bindings() -> None:
    assert event_for_key("q") is InputEvent.QUIT
    assert event_for_key("\x03") is InputEvent.QUIT
    assert event_for_key("\x1bOC") is InputEvent.NEXT
    assert event_for_key("\x1b[A") is InputEvent.PREVIOUS
    assert event_for_key("z") is None


def test_stdin_source_joins_escape_sequence_split_across_reads() -> None:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"\x1b")
        timer = threading.Timer(0.05, os.write, args=(write_fd, b"[C"))
        timer.start()
        keys = StdinKeySource(read_fd, escape_timeout=1.0).read_keys(1.0)
        timer.join()
    finally:
        os.close(read_fd)
        os.close(write_fd)

    assert keys == ["\x1b[C"]
    assert [event_for_key(key) for key in keys] == [InputEvent.NEXT]


def test_stdin_source_lone_escape_still_quits() -> None:
    read_fd, write_fd = os.pipe()
    try:
        os.write(write_fd, b"\x1b")
        keys = StdinKeySource(read_fd, escape_timeout=0.01).read_keys(1.0)
    finally:
        os.close(read_fd)
        os.close(write_fd)

    assert keys == ["\x1b"]
    assert event_for_key(keys[0]) is InputEvent.QUIT
