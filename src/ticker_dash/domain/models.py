from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class OpenPolicy(str, Enum):
    FIRST = "first"
    LAST = "last"


@dataclass(frozen=True, slots=True)
class Quote:
    symbol: str
    high: float
    low: float
    open: float
    price: float
    previous_close: float
    price_points: tuple[float, ...] = ()

    @property
    def percent_change(self) -> float:
        """
        Variação percentual do preço atual contra o fechamento anterior.
        Com previous_close == 0 o resultado segue a divisão IEEE (nan/inf).
        """
        ratio = _ieee_div(self.previous_close - self.price, self.previous_close)
        return -ratio * 100.0


def _ieee_div(numerator: float, denominator: float) -> float:
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
