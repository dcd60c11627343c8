from __future__ import annotations

import logging
import os
import sys
import termios
import tty
from types import TracebackType

from rich.console import Console, RenderableType
from rich.live import Live

from ticker_dash.domain.errors import TerminalError

logger = logging.getLogger(__name__)


class TerminalSession:
    """
    Coloca o terminal em modo de painel: entrada sem eco e sem buffer de
    linha (modo cbreak, sinais desativados) e tela alternativa via rich.
    Tudo é restaurado na saída do bloco ``with``, inclusive em caminhos de erro.
    """

    def __init__(self, console: Console | None = None, fd: int | None = None) -> None:
        self._console = console or Console()
        self._fd = fd
        self._saved_attrs: list | None = None
        self._live: Live | None = None

    @property
    def fd(self) -> int:
        if self._fd is None:
            self._fd = sys.stdin.fileno()
        return self._fd

    def __enter__(self) -> TerminalSession:
        fd = self.fd
        if not os.isatty(fd):
            raise TerminalError("stdin is not a terminal")

        try:
            self._saved_attrs = termios.tcgetattr(fd)
            tty.setcbreak(fd, termios.TCSANOW)
            attrs = termios.tcgetattr(fd)
            attrs[tty.LFLAG] &= ~(termios.ECHO | termios.ISIG)
            termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except termios.error as exc:
            self._best_effort_restore()
            raise TerminalError("could not enable raw input mode") from exc

        try:
            self._live = Live(
                console=self._console,
                screen=True,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            self._live.start()
        except Exception as exc:
            self._live = None
            self._best_effort_restore()
            raise TerminalError("could not enter alternate screen") from exc

        logger.debug("Terminal session started | fd=%s", fd)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        failure: BaseException | None = None

        if self._live is not None:
            try:
                self._live.stop()
            except Exception as stop_exc:
                logger.exception("Failed to leave alternate screen")
                failure = stop_exc
            finally:
                self._live = None

        try:
            self._restore_input()
        except termios.error as restore_exc:
            logger.exception("Failed to restore terminal attributes")
            failure = failure or restore_exc

        logger.debug("Terminal session closed")
        if failure is not None and exc is None:
            raise TerminalError("could not restore terminal") from failure

    def update(self, renderable: RenderableType) -> None:
        if self._live is None:
            raise TerminalError("terminal session is not active")
        self._live.update(renderable, refresh=True)

    def _restore_input(self) -> None:
        if self._saved_attrs is None:
            return
        attrs, self._saved_attrs = self._saved_attrs, None
        termios.tcsetattr(self.fd, termios.TCSADRAIN, attrs)

    def _best_effort_restore(self) -> None:
        try:
            self._restore_input()
        except termios.error:
            logger.exception("Best-effort terminal restore failed")
