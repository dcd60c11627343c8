import pytest
from pydantic import ValidationError

from ticker_dash import cli
from ticker_dash.config import Settings
from ticker_dash.domain.errors import MissingData, TerminalError
from ticker_dash.domain.models import OpenPolicy
from ticker_dash.infrastructure.yahoo.chart_client import FetchReport


def test_parser_defaults() -> None:
    args = cli.build_parser().parse_args(["PLUG", "NFLX"])
    assert args.symbols == ["PLUG", "NFLX"]
    assert args.open_policy == "first"
    assert args.dashboard is True


def test_parser_requires_a_symbol() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_settings_normalize_symbols() -> None:
    settings = Settings(symbols=[" plug", "^gspc"], open_policy="last")
    assert settings.symbols == ["PLUG", "^GSPC"]
    assert settings.open_policy is OpenPolicy.LAST


def test_settings_reject_blank_symbol() -> None:
    with pytest.raises(ValidationError):
        Settings(symbols=["PLUG", "  "])


def test_main_exits_non_zero_when_a_symbol_fails(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.argv", ["ticker-dash", "ZZZZ", "--no-dashboard"])
    monkeypatch.setattr(cli, "setup_logging", lambda level, log_file=None: None)
    monkeypatch.setattr(
        cli,
        "run_dashboard",
        lambda settings: FetchReport(errors=[MissingData("ZZZZ", "No data found")]),
    )

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert "ZZZZ: No data found" in capsys.readouterr().err


def test_main_reports_terminal_errors(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.argv", ["ticker-dash", "PLUG"])
    monkeypatch.setattr(cli, "setup_logging", lambda level, log_file=None: None)

    def boom(settings):
        raise TerminalError("stdin is not a terminal")

    monkeypatch.setattr(cli, "run_dashboard", boom)

    with pytest.raises(SystemExit) as excinfo:
        cli.main()

    assert excinfo.value.code == 1
    assert "stdin is not a terminal" in capsys.readouterr().err


def test_main_succeeds_when_all_symbols_load(monkeypatch) -> None:
    monkeypatch.setattr("sys.argv", ["ticker-dash", "PLUG"])
    monkeypatch.setattr(cli, "setup_logging", lambda level, log_file=None: None)
    monkeypatch.setattr(cli, "run_dashboard", lambda settings: FetchReport())

    cli.main()


def test_settings_log_level_matches_cli_default() -> None:
    args = cli.build_parser().parse_args(["PLUG"])
    assert Settings(symbols=["PLUG"]).log_level == args.log_level == "WARNING"
