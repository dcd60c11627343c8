from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import quote as url_quote

import requests
from pydantic import ValidationError

from ticker_dash.domain.errors import HttpError, MissingData, ParseFailure, QuoteError
from ticker_dash.domain.models import OpenPolicy, Quote
from ticker_dash.infrastructure.yahoo.chart_model import (
    ChartEnvelope,
    ChartResponse,
    provider_error_message,
)
from ticker_dash.infrastructure.yahoo.quote_builder import build_quote

logger = logging.getLogger(__name__)

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"

CHART_PARAMS = {
    "region": "US",
    "lang": "en-US",
    "includePrePost": "true",
    "interval": "2m",
    "range": "1d",
    "corsDomain": "finance.yahoo.com",
    ".tsrc": "finance",
}


@dataclass(frozen=True)
class FetchReport:
    quotes: list[Quote] = field(default_factory=list)
    errors: list[QuoteError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


class YahooChartClient:
    def __init__(
        self,
        user_agent: str = "Mozilla/5.0",
        timeout: float = 10,
        open_policy: OpenPolicy = OpenPolicy.FIRST,
        artifacts_dir: str | Path | None = None,
    ) -> None:
        self._timeout = timeout
        self._open_policy = open_policy
        self._artifacts_dir = Path(artifacts_dir) if artifacts_dir else None
        self._session = requests.Session()
        self._session.headers.update(
            {
                "User-Agent": user_agent or "Mozilla/5.0",
                "Accept": "application/json,text/plain,*/*",
                "Accept-Language": "en-US,en;q=0.9",
            }
        )

    def fetch_raw(self, symbol: str) -> bytes:
        url = chart_url(symbol)
        try:
            response = self._session.get(url, params=CHART_PARAMS, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.warning("Chart request failed | symbol=%s | error=%s", symbol, exc)
            raise HttpError(symbol, "Request Failure", detail=str(exc)) from exc

        if response.status_code != 200:
            logger.warning(
                "Chart request rejected | symbol=%s | status=%s", symbol, response.status_code
            )
            cause = requests.HTTPError(
                f"{response.status_code} {response.reason} for url: {response.url}",
                response=response,
            )
            raise HttpError(
                symbol, "Request Failure", detail=f"status={response.status_code}"
            ) from cause
        return response.content

    def get_quote(self, symbol: str) -> Quote:
        symbol = (symbol or "").strip()
        if not symbol:
            raise ValueError("symbol must be a non-empty string")

        body = self.fetch_raw(symbol)
        feed = self.parse_feed(symbol, body)
        quote = build_quote(feed, self._open_policy)
        logger.debug(
            "Quote built | symbol=%s | price=%s | points=%s",
            quote.symbol,
            quote.price,
            len(quote.price_points),
        )
        return quote

    def parse_feed(self, symbol: str, body: bytes) -> ChartResponse:
        try:
            payload = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            self._save_parse_artifact(symbol, body, str(exc))
            raise ParseFailure(symbol, "Parse Failure", detail=str(exc)) from exc

        try:
            envelope = ChartEnvelope.model_validate(payload)
        except ValidationError as exc:
            self._save_parse_artifact(symbol, body, str(exc))
            raise ParseFailure(symbol, "Parse Failure", detail=_short_error(exc)) from exc

        if envelope.chart.error is not None:
            message = provider_error_message(envelope.chart.error)
            logger.warning("Provider reported error | symbol=%s | error=%s", symbol, message)
            raise MissingData(symbol, message)

        try:
            return ChartResponse.model_validate(payload)
        except ValidationError as exc:
            self._save_parse_artifact(symbol, body, str(exc))
            raise ParseFailure(symbol, "Parse Failure", detail=_short_error(exc)) from exc

    def fetch_quotes(self, symbols: list[str]) -> FetchReport:
        report = FetchReport()
        for symbol in symbols:
            try:
                report.quotes.append(self.get_quote(symbol))
            except QuoteError as exc:
                report.errors.append(exc)
            except ValueError as exc:
                error = QuoteError(symbol, "Invalid Symbol", detail=str(exc))
                error.__cause__ = exc
                report.errors.append(error)
        return report

    def close(self) -> None:
        self._session.close()

    def _save_parse_artifact(self, symbol: str, body: bytes, error: str) -> None:
        if self._artifacts_dir is None:
            return
        self._artifacts_dir.mkdir(parents=True, exist_ok=True)
        ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
        out = self._artifacts_dir / f"chart_parse_fail_{_safe_name(symbol)}_{ts}.json"
        payload: dict[str, Any] = {
            "url": chart_url(symbol),
            "params": CHART_PARAMS,
            "error": error,
            "body_snippet": body[:2000].decode("utf-8", errors="replace"),
        }
        out.write_text(json.dumps(payload, ensure_ascii=True, indent=2), encoding="utf-8")
        logger.info("Parse artifact saved | symbol=%s | path=%s", symbol, out)


def chart_url(symbol: str) -> str:
    return CHART_URL.format(symbol=url_quote(symbol, safe=""))


def _short_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"{loc}: {first.get('msg', '')} ({len(errors)} error(s))"


def _safe_name(symbol: str) -> str:
    return "".join(ch if ch.isalnum() else "_" for ch in symbol)
