from __future__ import annotations

import logging
import queue
from typing import Callable

from ticker_dash.app.events import InputEvent
from ticker_dash.app.state import DashboardState
from ticker_dash.domain.errors import UnknownError

logger = logging.getLogger(__name__)


class RenderLoop:
    """
    Consome eventos do canal na ordem de chegada, aplica cada um ao estado
    e redesenha somente após uma mudança efetiva. Roda na thread principal.
    """

    def __init__(
        self,
        state: DashboardState,
        channel: queue.Queue[InputEvent],
        draw: Callable[[DashboardState], None],
    ) -> None:
        self._state = state
        self._channel = channel
        self._draw = draw
        self.frames = 0

    @property
    def state(self) -> DashboardState:
        return self._state

    def run(self) -> DashboardState:
        self._redraw()
        while self._state.running:
            event = self._receive()
            changed = self._state.apply(event)
            if not self._state.running:
                logger.debug("Quit received | frames=%s", self.frames)
                break
            if changed:
                self._redraw()
        return self._state

    def _receive(self) -> InputEvent:
        try:
            return self._channel.get()
        except KeyboardInterrupt:
            return InputEvent.QUIT
        except Exception as exc:
            raise UnknownError("failed to receive input event") from exc

    def _redraw(self) -> None:
        self._draw(self._state)
        self.frames += 1
