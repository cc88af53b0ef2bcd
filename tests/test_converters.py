import datetime
import decimal
import enum

import pytest

from formbind.converters import (
    converter_for,
    identity,
    to_bool,
    to_date,
    to_datetime,
    to_decimal,
    to_enum,
    to_float,
    to_int,
)
from formbind.exceptions import ConversionError


class Color(enum.Enum):
    RED = "red"
    GREEN = "green"


class Size(enum.IntEnum):
    SMALL = 1
    LARGE = 2


class Slug:
    def __init__(self, value: str) -> None:
        self.value = value.lower()


def test_identity() -> None:
    assert identity("") == ""
    assert identity(" Hello ") == " Hello "


def test_to_int() -> None:
    assert to_int("42") == 42
    assert to_int("-7") == -7
    assert to_int(" 5 ") == 5

    with pytest.raises(ValueError, match="invalid literal"):
        to_int("thirty")

    with pytest.raises(ValueError):
        to_int("4.5")


def test_to_float() -> None:
    assert to_float("1.5") == 1.5

    with pytest.raises(ValueError):
        to_float("one")


def test_to_decimal() -> None:
    assert to_decimal("19.99") == decimal.Decimal("19.99")
    assert to_decimal(" 3 ") == decimal.Decimal(3)

    with pytest.raises(ConversionError, match="invalid decimal literal: 'cheap'"):
        to_decimal("cheap")


@pytest.mark.parametrize("value", ["on", "ON", "true", "True", "1", "yes", " yes "])
def test_to_bool_true(value: str) -> None:
    assert to_bool(value) is True


@pytest.mark.parametrize("value", ["off", "false", "FALSE", "0", "no", " no "])
def test_to_bool_false(value: str) -> None:
    assert to_bool(value) is False


def test_to_bool_invalid() -> None:
    with pytest.raises(ConversionError, match="got 'maybe'"):
        to_bool("maybe")


def test_to_bool_empty_is_invalid() -> None:
    with pytest.raises(ConversionError, match="got ''"):
        to_bool("")


def test_conversion_error_is_value_error() -> None:
    assert issubclass(ConversionError, ValueError)


def test_to_date() -> None:
    assert to_date("2024-02-29") == datetime.date(2024, 2, 29)

    with pytest.raises(ValueError):
        to_date("2023-02-29")

    with pytest.raises(ValueError):
        to_date("yesterday")


def test_to_datetime() -> None:
    # What a datetime-local input submits.
    assert to_datetime("2024-05-01T13:45") == datetime.datetime(2024, 5, 1, 13, 45)

    with pytest.raises(ValueError):
        to_datetime("later")


def test_to_enum_by_value() -> None:
    convert = to_enum(Color)
    assert convert("red") is Color.RED
    assert convert.__name__ == "to_Color"


def test_to_enum_by_name() -> None:
    assert to_enum(Color)("GREEN") is Color.GREEN


def test_to_enum_int_values() -> None:
    convert = to_enum(Size)
    assert convert("2") is Size.LARGE
    assert convert("SMALL") is Size.SMALL


def test_to_enum_invalid() -> None:
    with pytest.raises(ConversionError, match="'blue' is not a valid Color"):
        to_enum(Color)("blue")


@pytest.mark.parametrize(
    ("tp", "expected"),
    [
        (str, identity),
        (int, to_int),
        (bool, to_bool),
        (float, to_float),
        (decimal.Decimal, to_decimal),
        (datetime.date, to_date),
        (datetime.datetime, to_datetime),
    ],
)
def test_converter_for_builtin(tp: type, expected: object) -> None:
    assert converter_for(tp) is expected


def test_converter_for_enum() -> None:
    assert converter_for(Color)("green") is Color.GREEN


def test_converter_for_callable_type() -> None:
    convert = converter_for(Slug)
    assert convert is Slug
    assert convert("Hello").value == "hello"


def test_converter_for_unsupported() -> None:
    with pytest.raises(TypeError):
        converter_for(42)
