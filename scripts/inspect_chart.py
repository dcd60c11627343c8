#!/usr/bin/env python3
from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

from ticker_dash.domain.errors import QuoteError
from ticker_dash.infrastructure.yahoo.chart_client import YahooChartClient
from ticker_dash.infrastructure.yahoo.quote_builder import build_quote

SERIES_KEYS = ("open", "high", "low", "close")


def main() -> None:
    if len(sys.argv) != 2:
        raise SystemExit("usage: inspect_chart.py SYMBOL|path/to/chart.json")

    target = sys.argv[1]
    client = YahooChartClient()
    path = Path(target)
    if path.exists():
        symbol = path.stem
        body = path.read_bytes()
        print(f"File: {path}")
    else:
        symbol = target
        body = client.fetch_raw(symbol)
        print(f"Symbol: {symbol} | bytes={len(body)}")

    payload = json.loads(body)
    chart = payload.get("chart") if isinstance(payload, dict) else None
    if not isinstance(chart, dict):
        print(f"No 'chart' key. Top-level keys: {_safe_keys(payload)}")
        return

    print(f"chart.error: {chart.get('error')!r}")
    results = chart.get("result") or []
    print(f"chart.result: {_describe_value(results)}")
    if results and isinstance(results[0], dict):
        meta = results[0].get("meta") or {}
        print(f"meta keys: {_safe_keys(meta)}")
        quotes = (results[0].get("indicators") or {}).get("quote") or []
        print(f"indicators.quote: {_describe_value(quotes)}")
        if quotes and isinstance(quotes[0], dict):
            for key in SERIES_KEYS:
                print(f"- {key} | {_describe_series(quotes[0].get(key))}")

    try:
        quote = build_quote(client.parse_feed(symbol, body))
        print(
            f"build_quote() -> price={quote.price} prev_close={quote.previous_close} "
            f"high={quote.high} low={quote.low} open={quote.open} "
            f"change={quote.percent_change:.2f}% points={len(quote.price_points)}"
        )
    except QuoteError as exc:
        print(f"build_quote() failed: {exc}")


def _describe_series(node: Any) -> str:
    if not isinstance(node, list):
        return f"type={type(node).__name__}"
    numbers = sum(1 for item in node if isinstance(item, (int, float)) and not isinstance(item, bool))
    nulls = sum(1 for item in node if item is None)
    nested = [item for item in node if isinstance(item, list)]
    deep = sum(1 for item in nested for inner in item if isinstance(inner, list))
    other = len(node) - numbers - nulls - len(nested)
    return (
        f"len={len(node)} numbers={numbers} nulls={nulls} "
        f"nested={len(nested)} deep={deep} other={other}"
    )


def _describe_value(value: Any) -> str:
    if isinstance(value, list):
        detail = f"list len={len(value)}"
        if value and isinstance(value[0], dict):
            keys = list(value[0].keys())[:12]
            detail += f" keys={keys}"
        return detail
    if isinstance(value, dict):
        keys = list(value.keys())[:12]
        return f"dict keys={keys}"
    return f"type={type(value).__name__}"


def _safe_keys(data: Any, limit: int = 40) -> list[str]:
    if not isinstance(data, dict):
        return []
    return list(data.keys())[:limit]


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise
