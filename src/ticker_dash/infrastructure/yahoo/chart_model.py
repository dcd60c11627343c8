from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ticker_dash.infrastructure.yahoo.series import normalize_series


class _FeedModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class QuoteSeries(_FeedModel):
    open: list[float] = Field(default_factory=list)
    high: list[float] = Field(default_factory=list)
    low: list[float] = Field(default_factory=list)
    close: list[float] = Field(default_factory=list)

    @field_validator("open", "high", "low", "close", mode="before")
    @classmethod
    def _flatten(cls, value: Any) -> list[float]:
        return normalize_series(value)


class Indicators(_FeedModel):
    quote: list[QuoteSeries] = Field(..., min_length=1)


class Meta(_FeedModel):
    symbol: str
    regular_market_price: float = Field(..., alias="regularMarketPrice", strict=True)
    previous_close: float = Field(..., alias="previousClose", strict=True)
    currency: str | None = None
    timezone: str | None = None
    exchange_name: str | None = Field(default=None, alias="exchangeName")


class ChartResult(_FeedModel):
    meta: Meta
    indicators: Indicators


class Chart(_FeedModel):
    result: list[ChartResult] = Field(..., min_length=1)
    error: Any | None = None


class ChartResponse(_FeedModel):
    chart: Chart


class ChartStatus(_FeedModel):
    """Envelope mínimo usado só para checar o campo de erro do provedor."""

    error: Any | None = None


class ChartEnvelope(_FeedModel):
    chart: ChartStatus


def provider_error_message(error: Any) -> str:
    if isinstance(error, dict):
        for key in ("description", "code"):
            value = error.get(key)
            if value:
                return str(value)
    if isinstance(error, str):
        return error
    return json.dumps(error, ensure_ascii=True)
