import math

from rich.console import Console

from ticker_dash.app.state import DashboardState
from ticker_dash.domain.models import Quote
from ticker_dash.ui.dashboard import (
    build_dashboard,
    build_quotes_table,
    fmt_pct,
    fmt_price,
    sparkline,
)


def render_text(renderable) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def make_quote(symbol: str = "PLUG", previous_close: float = 4.0) -> Quote:
    return Quote(
        symbol=symbol,
        high=5.0,
        low=4.4,
        open=4.5,
        price=5.0,
        previous_close=previous_close,
        price_points=(4.5, 4.6, 4.7),
    )


def test_fmt_price_handles_non_finite() -> None:
    assert fmt_price(1234.5) == "$1,234.50"
    assert fmt_price(math.nan) == "—"
    assert fmt_price(math.inf) == "—"


def test_fmt_pct_sign_and_non_finite() -> None:
    assert fmt_pct(25.0).plain == "+25.00 %"
    assert fmt_pct(-1.5).plain == "-1.50 %"
    assert fmt_pct(math.nan).plain == "—"
    assert "blink" in str(fmt_pct(25.0).style)
    assert "blink" not in str(fmt_pct(1.0).style)


def test_sparkline_scales_and_resamples() -> None:
    assert sparkline([1.0, 2.0, 3.0]) == "▁▅█"
    assert sparkline([]) == ""
    assert sparkline([2.0, 2.0]) == "▅▅"
    assert len(sparkline([float(i) for i in range(200)], width=40)) == 40


def test_dashboard_shows_selected_quote() -> None:
    state = DashboardState.from_quotes([make_quote("PLUG"), make_quote("NFLX")])
    state.next()
    text = render_text(build_dashboard(state))
    assert "NFLX" in text
    assert "Previous Close" in text
    assert "+25.00 %" in text


def test_dashboard_with_zero_previous_close_does_not_crash() -> None:
    state = DashboardState.from_quotes([make_quote(previous_close=0.0)])
    text = render_text(build_dashboard(state))
    assert "PLUG" in text


def test_empty_dashboard_renders_placeholder() -> None:
    text = render_text(build_dashboard(DashboardState.from_quotes([])))
    assert "Nenhuma cotação" in text


def test_quotes_table_lists_every_symbol() -> None:
    text = render_text(build_quotes_table([make_quote("PLUG"), make_quote("NFLX")]))
    assert "PLUG" in text and "NFLX" in text


def test_footer_points_to_log_file_option() -> None:
    text = render_text(build_dashboard(DashboardState.from_quotes([make_quote()])))
    assert "--log-file" in text
