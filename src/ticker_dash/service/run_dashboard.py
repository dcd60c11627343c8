import logging
import queue

from rich.console import Console

from ticker_dash.app.events import InputEvent
from ticker_dash.app.input_pump import InputPump, KeySource, StdinKeySource
from ticker_dash.app.render_loop import RenderLoop
from ticker_dash.app.state import DashboardState
from ticker_dash.app.terminal import TerminalSession
from ticker_dash.config import Settings
from ticker_dash.infrastructure.yahoo.chart_client import FetchReport, YahooChartClient
from ticker_dash.ui.dashboard import build_dashboard, build_quotes_table

logger = logging.getLogger(__name__)


def run_dashboard(
    settings: Settings,
    client: YahooChartClient | None = None,
    session: TerminalSession | None = None,
    key_source: KeySource | None = None,
) -> FetchReport:
    logger.info(
        "Iniciando painel | símbolos=%s | política_abertura=%s",
        ",".join(settings.symbols),
        settings.open_policy.value,
    )

    own_client = client is None
    if client is None:
        client = YahooChartClient(
            timeout=settings.timeout,
            open_policy=settings.open_policy,
            artifacts_dir=settings.artifacts_dir,
        )
    try:
        report = client.fetch_quotes(settings.symbols)
    finally:
        if own_client:
            client.close()

    for error in report.errors:
        logger.error(
            "Falha ao obter cotação | símbolo=%s | tipo=%s | mensagem=%s | detalhe=%s",
            error.symbol,
            type(error).__name__,
            error.message,
            error.detail or "",
        )
    logger.info("Cotações obtidas | ok=%s | falhas=%s", len(report.quotes), len(report.errors))

    if not report.quotes:
        logger.warning("Nenhuma cotação disponível; painel não será aberto")
        return report

    if not settings.dashboard:
        Console().print(build_quotes_table(report.quotes))
        return report

    state = DashboardState.from_quotes(report.quotes)
    run_session(
        state,
        session=session or TerminalSession(),
        key_source=key_source,
        poll_interval=settings.poll_interval,
    )
    return report


def run_session(
    state: DashboardState,
    session: TerminalSession,
    key_source: KeySource | None = None,
    poll_interval: float = 0.2,
) -> DashboardState:
    channel: queue.Queue[InputEvent] = queue.Queue()

    with session as term:
        pump = InputPump(channel, key_source or StdinKeySource(term.fd), poll_interval)
        pump.start()
        try:
            loop = RenderLoop(state, channel, lambda s: term.update(build_dashboard(s)))
            loop.run()
        finally:
            pump.stop()
            pump.join(timeout=poll_interval * 2 + 0.5)

    logger.info("Painel encerrado | quadros=%s", loop.frames)
    return state
