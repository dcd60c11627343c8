import argparse
import sys

from pydantic import ValidationError

from ticker_dash.config import Settings
from ticker_dash.domain.errors import TickerError
from ticker_dash.domain.models import OpenPolicy
from ticker_dash.logging_conf import setup_logging
from ticker_dash.service.run_dashboard import run_dashboard


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticker-dash",
        description="Painel de cotações no terminal. Busca o gráfico intradiário do Yahoo Finance para cada símbolo.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "symbols",
        nargs="+",
        help="Um ou mais símbolos (ex: 'PLUG', 'NFLX', '^GSPC').",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Define o nível de detalhamento dos logs de execução.",
    )

    parser.add_argument(
        "--log-file",
        default=None,
        help="Grava os logs neste arquivo em vez de stderr (recomendado com o painel).",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="Timeout em segundos de cada requisição HTTP.",
    )

    parser.add_argument(
        "--open-policy",
        default=OpenPolicy.FIRST.value,
        choices=[policy.value for policy in OpenPolicy],
        help="Qual amostra da sessão usar como preço de abertura.",
    )

    parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Salva respostas que falharem no parsing neste diretório.",
    )

    parser.add_argument(
        "--dashboard",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Abre o painel interativo (use --no-dashboard para só imprimir a tabela).",
    )

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    try:
        settings = Settings(
            symbols=args.symbols,
            log_level=args.log_level,
            log_file=args.log_file,
            timeout=args.timeout,
            open_policy=args.open_policy,
            artifacts_dir=args.artifacts_dir,
            dashboard=args.dashboard,
        )
    except ValidationError as exc:
        parser.error(str(exc))

    setup_logging(settings.log_level, settings.log_file)

    try:
        report = run_dashboard(settings)
    except TickerError as exc:
        print(f"❌ Error: {exc}", file=sys.stderr)
        sys.exit(1)

    for error in report.errors:
        print(f"❌ Error: {error}", file=sys.stderr)
    if report.errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
