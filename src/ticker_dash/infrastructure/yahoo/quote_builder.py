from __future__ import annotations

import math
from functools import reduce
from typing import Iterable

from ticker_dash.domain.models import OpenPolicy, Quote
from ticker_dash.infrastructure.yahoo.chart_model import ChartResponse


def build_quote(feed: ChartResponse, open_policy: OpenPolicy = OpenPolicy.FIRST) -> Quote:
    """Converte um envelope de chart já validado no Quote canônico.

    Usa sempre o primeiro resultado e a primeira série: para uma consulta de
    um único símbolo o provedor devolve exatamente um de cada.
    """
    result = feed.chart.result[0]
    meta = result.meta
    series = result.indicators.quote[0]

    return Quote(
        symbol=meta.symbol,
        high=fold_max(series.high),
        low=fold_min(series.low),
        open=_pick_open(series.open, open_policy),
        price=meta.regular_market_price,
        previous_close=meta.previous_close,
        price_points=tuple(series.open),
    )


def fold_max(values: Iterable[float]) -> float:
    return reduce(_fmax, values, math.nan)


def fold_min(values: Iterable[float]) -> float:
    return reduce(_fmin, values, math.nan)


def _fmax(acc: float, value: float) -> float:
    if math.isnan(acc):
        return value
    if math.isnan(value):
        return acc
    return value if value > acc else acc


def _fmin(acc: float, value: float) -> float:
    if math.isnan(acc):
        return value
    if math.isnan(value):
        return acc
    return value if value < acc else acc


def _pick_open(samples: list[float], policy: OpenPolicy) -> float:
    if not samples:
        return 0.0
    if policy is OpenPolicy.LAST:
        return samples[-1]
    return samples[0]
