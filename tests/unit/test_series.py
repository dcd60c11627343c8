import pytest

from ticker_dash.domain.errors import DecodeError
from ticker_dash.infrastructure.yahoo.series import normalize_series


def test_flat_numbers_are_kept_in_order() -> None:
    assert normalize_series([1, 2.5, 3]) == [1.0, 2.5, 3.0]


def test_nulls_are_dropped_without_placeholder() -> None:
    assert normalize_series([None, 1.0, None, None, 2.0]) == [1.0, 2.0]


def test_nested_arrays_are_flattened_one_level() -> None:
    node = [4.5, None, [4.6, 4.7], 4.8, [], [4.9]]
    assert normalize_series(node) == [4.5, 4.6, 4.7, 4.8, 4.9]


def test_null_node_is_empty_series() -> None:
    assert normalize_series(None) == []
    assert normalize_series([]) == []


@pytest.mark.parametrize("item", ["4.5", True, {"v": 1}])
def test_unexpected_element_type_is_rejected(item) -> None:
    with pytest.raises(DecodeError, match="unexpected type"):
        normalize_series([1.0, item])


def test_second_level_nesting_is_rejected() -> None:
    with pytest.raises(DecodeError):
        normalize_series([1.0, [2.0, [3.0]]])


def test_null_inside_nested_array_is_rejected() -> None:
    with pytest.raises(DecodeError):
        normalize_series([[1.0, None]])


def test_non_list_node_is_rejected() -> None:
    with pytest.raises(DecodeError):
        normalize_series({"open": [1.0]})


def test_decode_error_is_value_error() -> None:
    # pydantic only wraps ValueError/AssertionError raised inside validators
    assert issubclass(DecodeError, ValueError)
