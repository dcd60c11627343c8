from __future__ import annotations

from typing import Any

from ticker_dash.domain.errors import DecodeError


def normalize_series(node: Any) -> list[float]:
    """
    Achata uma série numérica do Yahoo em uma lista simples de floats.

    O provedor às vezes devolve ``null`` no lugar de amostras ausentes e,
    em granularidade intradiária, sub-listas de números. Nulos são
    descartados sem placeholder; sub-listas são achatadas em exatamente um
    nível. Qualquer outro formato levanta DecodeError.
    """
    if node is None:
        return []
    if not isinstance(node, list):
        raise DecodeError(f"expected a list, got {type(node).__name__}")

    values: list[float] = []
    for item in node:
        if item is None:
            continue
        if isinstance(item, list):
            values.extend(_unwrap_num(inner) for inner in item)
            continue
        if _is_number(item):
            values.append(float(item))
            continue
        raise DecodeError("unexpected type")
    return values


def _unwrap_num(value: Any) -> float:
    if not _is_number(value):
        raise DecodeError(f"expected a number inside nested array, got {type(value).__name__}")
    return float(value)


def _is_number(value: Any) -> bool:
    # bool is an int subclass but JSON true/false are not numbers
    return isinstance(value, (int, float)) and not isinstance(value, bool)
