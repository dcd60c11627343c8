"""Renderables rich do painel de cotações."""

from __future__ import annotations

import math
from typing import Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ticker_dash.app.state import DashboardState
from ticker_dash.domain.models import Quote

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"
CHART_WIDTH = 60
BLINK_THRESHOLD = 5.0
HELP_TEXT = "←/→ trocar símbolo   q sair   (use --log-file para não sujar a tela com logs)"


def fmt_price(val: float | None) -> str:
    if val is None or not math.isfinite(val):
        return "—"
    return f"${val:,.2f}"


def fmt_pct(val: float | None) -> Text:
    if val is None or not math.isfinite(val):
        return Text("—", style="dim")
    color = "red" if val < 0 else "green"
    prefix = "" if val < 0 else "+"
    style = f"bold {color}"
    if abs(val) > BLINK_THRESHOLD:
        style += " blink"
    return Text(f"{prefix}{val:.2f} %", style=style)


def sparkline(points: Sequence[float], width: int = CHART_WIDTH) -> str:
    values = [p for p in points if math.isfinite(p)]
    if not values or width <= 0:
        return ""
    if len(values) > width:
        values = _resample(values, width)
    lo, hi = min(values), max(values)
    span = hi - lo
    if span == 0:
        return SPARK_BLOCKS[len(SPARK_BLOCKS) // 2] * len(values)
    top = len(SPARK_BLOCKS) - 1
    return "".join(SPARK_BLOCKS[round((v - lo) / span * top)] for v in values)


def _resample(values: list[float], width: int) -> list[float]:
    size = len(values) / width
    buckets = []
    for i in range(width):
        chunk = values[int(i * size) : max(int((i + 1) * size), int(i * size) + 1)]
        buckets.append(sum(chunk) / len(chunk))
    return buckets


def build_symbol_bar(state: DashboardState) -> Text:
    bar = Text()
    for idx, quote in enumerate(state.quotes):
        if idx:
            bar.append(" │ ", style="dim")
        if idx == state.selected:
            bar.append(f" {quote.symbol} ", style="bold black on yellow")
        else:
            bar.append(f" {quote.symbol} ", style="white")
    if not state.quotes:
        bar.append("nenhuma cotação carregada", style="dim")
    return bar


def build_quote_info(quote: Quote) -> RenderableType:
    header = Table.grid(expand=True)
    header.add_column(justify="left")
    header.add_column(justify="right")
    header.add_row(Text(quote.symbol, style="bold bright_yellow"), fmt_pct(quote.percent_change))

    body = Table(expand=True, box=None, show_header=False, padding=(0, 1))
    body.add_column("field", style="white")
    body.add_column("value", justify="right")
    body.add_row("Price", fmt_price(quote.price))
    body.add_row("Previous Close", fmt_price(quote.previous_close))
    body.add_row("Open", fmt_price(quote.open))
    body.add_row("High", fmt_price(quote.high))
    body.add_row("Low", fmt_price(quote.low))

    return Group(header, Text("─" * 30, style="dim"), body)


def build_quote_chart(quote: Quote, width: int = CHART_WIDTH) -> RenderableType:
    color = "green" if quote.price >= quote.previous_close else "red"
    line = sparkline(quote.price_points, width)
    if not line:
        return Text("sem pontos de preço", style="dim")
    caption = Text(
        f"{len(quote.price_points)} pontos | fech. anterior {fmt_price(quote.previous_close)}",
        style="dim",
    )
    return Group(Text(line, style=color), caption)


def build_quote_panel(quote: Quote) -> Panel:
    grid = Table.grid(expand=True, padding=(0, 2))
    grid.add_column(max_width=35)
    grid.add_column(ratio=3)
    grid.add_row(build_quote_info(quote), build_quote_chart(quote))
    return Panel(grid, border_style="blue")


def build_dashboard(state: DashboardState) -> RenderableType:
    quote = state.selected_quote
    if quote is None:
        main: RenderableType = Panel(Text("Nenhuma cotação disponível.", style="dim"))
    else:
        main = build_quote_panel(quote)
    return Group(
        Panel(build_symbol_bar(state), title="[bold]TICKER[/bold]", border_style="bright_white"),
        main,
        Text(HELP_TEXT, style="dim"),
    )


def build_quotes_table(quotes: Sequence[Quote]) -> Table:
    table = Table(expand=False, padding=(0, 1))
    table.add_column("Symbol", style="bold white")
    table.add_column("Price", justify="right")
    table.add_column("Chg%", justify="right")
    table.add_column("Prev Close", justify="right")
    table.add_column("Open", justify="right")
    table.add_column("High", justify="right")
    table.add_column("Low", justify="right")
    table.add_column("Chart", no_wrap=True)
    for quote in quotes:
        table.add_row(
            quote.symbol,
            fmt_price(quote.price),
            fmt_pct(quote.percent_change),
            fmt_price(quote.previous_close),
            fmt_price(quote.open),
            fmt_price(quote.high),
            fmt_price(quote.low),
            sparkline(quote.price_points, 24),
        )
    return table
