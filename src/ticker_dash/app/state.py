from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from ticker_dash.app.events import InputEvent
from ticker_dash.domain.models import Quote


class AppStatus(Enum):
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class DashboardState:
    """Estado do painel. Só o loop de renderização altera esta instância."""

    quotes: tuple[Quote, ...] = ()
    selected: int | None = field(init=False)
    status: AppStatus = field(init=False, default=AppStatus.RUNNING)

    def __post_init__(self) -> None:
        self.quotes = tuple(self.quotes)
        self.selected = 0 if self.quotes else None

    @classmethod
    def from_quotes(cls, quotes: Sequence[Quote]) -> DashboardState:
        return cls(quotes=tuple(quotes))

    @property
    def running(self) -> bool:
        return self.status is AppStatus.RUNNING

    @property
    def selected_quote(self) -> Quote | None:
        if self.selected is None:
            return None
        return self.quotes[self.selected]

    def next(self) -> bool:
        if self.selected is None or not self.quotes:
            return False
        previous = self.selected
        self.selected = (self.selected + 1) % len(self.quotes)
        return self.selected != previous

    def previous(self) -> bool:
        if self.selected is None or not self.quotes:
            return False
        before = self.selected
        self.selected = (self.selected - 1 + len(self.quotes)) % len(self.quotes)
        return self.selected != before

    def quit(self) -> bool:
        if self.status is AppStatus.TERMINATED:
            return False
        self.status = AppStatus.TERMINATED
        return True

    def apply(self, event: InputEvent) -> bool:
        """Aplica um evento e informa se houve mudança de estado."""
        if event is InputEvent.NEXT:
            return self.next()
        if event is InputEvent.PREVIOUS:
            return self.previous()
        if event is InputEvent.QUIT:
            return self.quit()
        return False
