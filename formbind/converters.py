"""Stock conversions from a submitted string to a Python value.

A converter is any callable taking a single ``str`` and returning the
converted value.  It signals bad input by raising ``ValueError`` (or
``TypeError``/``ArithmeticError``, which some parsers use); the binder turns
that into an :class:`~formbind.exceptions.InvalidValueError` whose reason is
``str()`` of the exception.
"""

from __future__ import annotations

import datetime
import decimal
import enum
from typing import TYPE_CHECKING

from .exceptions import ConversionError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable
    from typing import Any, TypeVar

    E = TypeVar("E", bound=enum.Enum)

    Converter = Callable[[str], Any]


# These match what browsers send for a checked box without a value
# attribute ("on"), plus the usual spellings.
TRUE_VALUES = frozenset(("on", "true", "1", "yes"))
FALSE_VALUES = frozenset(("off", "false", "0", "no"))


def identity(value: str) -> str:
    return value


def to_int(value: str) -> int:
    return int(value, 10)


def to_float(value: str) -> float:
    return float(value)


def to_decimal(value: str) -> decimal.Decimal:
    try:
        return decimal.Decimal(value.strip())
    except decimal.InvalidOperation:
        # The decimal module's own message is just the signal class name.
        raise ConversionError(f"invalid decimal literal: {value!r}") from None


def to_bool(value: str) -> bool:
    """
    Parses a checkbox-style boolean.  Matching is case-insensitive and
    ignores surrounding whitespace.
    """
    v = value.strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    raise ConversionError(f"expected one of {sorted(TRUE_VALUES | FALSE_VALUES)!r}, got {value!r}")


def to_date(value: str) -> datetime.date:
    return datetime.date.fromisoformat(value)


def to_datetime(value: str) -> datetime.datetime:
    return datetime.datetime.fromisoformat(value)


def to_enum(enum_cls: type[E]) -> Callable[[str], E]:
    """
    Returns a converter for the given enum.  A submitted string matches a
    member whose value renders to the same string, or failing that, a member
    with that name.
    """

    def convert(value: str) -> E:
        for member in enum_cls:
            if str(member.value) == value:
                return member
        try:
            return enum_cls[value]
        except KeyError:
            raise ConversionError(f"{value!r} is not a valid {enum_cls.__name__}") from None

    convert.__name__ = f"to_{enum_cls.__name__}"
    return convert


_BY_TYPE: dict[Any, Converter] = {
    str: identity,
    bool: to_bool,
    int: to_int,
    float: to_float,
    decimal.Decimal: to_decimal,
    datetime.datetime: to_datetime,
    datetime.date: to_date,
}


def converter_for(tp: Any) -> Converter:
    """
    Picks the stock converter for a type annotation.  Enums get
    :func:`to_enum`, and any other class is used as its own parser, so a
    class accepting a single string argument works out of the box.
    """
    conv = _BY_TYPE.get(tp)
    if conv is not None:
        return conv

    if isinstance(tp, type):
        if issubclass(tp, enum.Enum):
            return to_enum(tp)
        return tp

    raise TypeError(f"No converter available for {tp!r}")
