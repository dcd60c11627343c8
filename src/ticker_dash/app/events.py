from __future__ import annotations

from enum import Enum


class InputEvent(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    QUIT = "quit"
    TICK = "tick"


KEY_BINDINGS: dict[str, InputEvent] = {
    "q": InputEvent.QUIT,
    "Q": InputEvent.QUIT,
    "\x1b": InputEvent.QUIT,  # Esc
    "\x03": InputEvent.QUIT,  # Ctrl-C
    "\x1b[C": InputEvent.NEXT,  # right arrow
    "\x1b[B": InputEvent.NEXT,  # down arrow
    "\t": InputEvent.NEXT,
    "l": InputEvent.NEXT,
    "j": InputEvent.NEXT,
    "n": InputEvent.NEXT,
    "\x1b[D": InputEvent.PREVIOUS,  # left arrow
    "\x1b[A": InputEvent.PREVIOUS,  # up arrow
    "h": InputEvent.PREVIOUS,
    "k": InputEvent.PREVIOUS,
    "p": InputEvent.PREVIOUS,
}


def event_for_key(key: str) -> InputEvent | None:
    event = KEY_BINDINGS.get(key)
    if event is None and key.startswith("\x1bO") and len(key) == 3:
        # application cursor mode sends ESC O x instead of ESC [ x
        event = KEY_BINDINGS.get("\x1b[" + key[2])
    return event
