from __future__ import annotations

import logging
import os
import queue
import select
import sys
import threading
from typing import Protocol

from ticker_dash.app.events import InputEvent, event_for_key

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.2
ESCAPE_TIMEOUT = 0.05


class KeySource(Protocol):
    def read_keys(self, timeout: float) -> list[str]:
        """Returns the keys pressed within ``timeout`` seconds, or [] on timeout."""
        ...


class StdinKeySource:
    def __init__(self, fd: int | None = None, escape_timeout: float = ESCAPE_TIMEOUT) -> None:
        self._fd = sys.stdin.fileno() if fd is None else fd
        self._escape_timeout = escape_timeout

    def read_keys(self, timeout: float) -> list[str]:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return []
        data = os.read(self._fd, 64)
        if not data:
            raise EOFError("stdin closed")
        chunk = data.decode("utf-8", errors="ignore")
        # sequências ESC [ x podem chegar em leituras separadas (ssh, links lentos)
        while _incomplete_escape(chunk):
            ready, _, _ = select.select([self._fd], [], [], self._escape_timeout)
            if not ready:
                break
            more = os.read(self._fd, 64)
            if not more:
                break
            chunk += more.decode("utf-8", errors="ignore")
        return split_keys(chunk)


def _incomplete_escape(chunk: str) -> bool:
    return chunk.endswith(("\x1b", "\x1b[", "\x1bO"))


def split_keys(chunk: str) -> list[str]:
    """Separa um bloco lido do terminal em teclas, mantendo sequências ESC [ x juntas."""
    keys: list[str] = []
    i = 0
    while i < len(chunk):
        if chunk[i] == "\x1b" and i + 2 < len(chunk) and chunk[i + 1] in "[O":
            keys.append(chunk[i : i + 3])
            i += 3
            continue
        keys.append(chunk[i])
        i += 1
    return keys


class InputPump(threading.Thread):
    """
    Thread de leitura do teclado. Consulta a fonte de teclas a cada
    ``poll_interval`` segundos e publica eventos no canal; nunca toca no
    estado do painel.
    """

    def __init__(
        self,
        channel: queue.Queue[InputEvent],
        source: KeySource,
        poll_interval: float = POLL_INTERVAL,
    ) -> None:
        super().__init__(name="input-pump", daemon=True)
        self._channel = channel
        self._source = source
        self._poll_interval = poll_interval
        self._stop_event = threading.Event()

    def stop(self) -> None:
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def run(self) -> None:
        logger.debug("Input pump started | interval=%ss", self._poll_interval)
        while not self._stop_event.is_set():
            try:
                keys = self._source.read_keys(self._poll_interval)
            except (OSError, EOFError, ValueError) as exc:
                logger.error("Keyboard read failed; requesting quit | error=%s", exc)
                self._channel.put(InputEvent.QUIT)
                break

            if self._stop_event.is_set():
                break

            if not keys:
                self._channel.put(InputEvent.TICK)
                continue

            for key in keys:
                event = event_for_key(key)
                if event is None:
                    logger.debug("Unbound key ignored | key=%r", key)
                    continue
                self._channel.put(event)
                if event is InputEvent.QUIT:
                    self._stop_event.set()
                    break
        logger.debug("Input pump stopped")
