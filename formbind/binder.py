from __future__ import annotations

import logging
from enum import IntEnum
from typing import TYPE_CHECKING

from .converters import identity
from .exceptions import BindError, BindErrors, DuplicateDescriptorError, InvalidValueError, MissingFieldError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable
    from typing import Any, TypedDict

    from .converters import Converter

    class BinderConfig(TypedDict, total=False):
        COLLECT_ERRORS: bool
        EMPTY_AS_MISSING: bool

    RecordFactory = Callable[..., Any]


# Get logger for this module.
logger = logging.getLogger(__name__)


# Exceptions a converter may raise to say "this string is not valid".
# Anything else escaping a converter is a bug and propagates untouched.
CONVERSION_ERRORS = (ValueError, TypeError, ArithmeticError)


class Cardinality(IntEnum):
    """How many values a field expects."""

    REQUIRED = 0
    OPTIONAL = 1
    REQUIRED_MANY = 2
    OPTIONAL_MANY = 3

    @property
    def is_many(self) -> bool:
        return self in (Cardinality.REQUIRED_MANY, Cardinality.OPTIONAL_MANY)

    @property
    def is_required(self) -> bool:
        return self in (Cardinality.REQUIRED, Cardinality.REQUIRED_MANY)


class FieldDescriptor:
    """
    Describes one field of a target record: the form key it is read from,
    how many values it takes, and how a single string is converted.
    Descriptors are immutable once created.
    """

    __slots__ = ("_name", "_cardinality", "_convert")

    def __init__(
        self, name: str, cardinality: Cardinality = Cardinality.REQUIRED, convert: Converter = identity
    ) -> None:
        if not isinstance(name, str) or not name:
            raise ValueError("name must be a non-empty string, not %r" % (name,))
        if not callable(convert):
            raise TypeError("convert must be callable, not %r" % (convert,))
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_cardinality", Cardinality(cardinality))
        object.__setattr__(self, "_convert", convert)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __reduce__(self) -> tuple[type[FieldDescriptor], tuple[str, Cardinality, Converter]]:
        return (self.__class__, (self.name, self.cardinality, self.convert))

    @property
    def name(self) -> str:
        return self._name

    @property
    def cardinality(self) -> Cardinality:
        return self._cardinality

    @property
    def convert(self) -> Converter:
        return self._convert

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldDescriptor):
            return (
                self.name == other.name
                and self.cardinality == other.cardinality
                and self.convert == other.convert
            )
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.name, self.cardinality))

    def __repr__(self) -> str:
        conv = getattr(self.convert, "__name__", repr(self.convert))
        return f"{self.__class__.__name__}(name={self.name!r}, cardinality={self.cardinality.name}, convert={conv})"


def check_descriptors(descriptors: Iterable[FieldDescriptor]) -> tuple[FieldDescriptor, ...]:
    """
    Validates a descriptor list and freezes it into a tuple, keeping the
    given order.  Raises :class:`DuplicateDescriptorError` on the first name
    seen twice.
    """
    seen: set[str] = set()
    result = []
    for d in descriptors:
        if not isinstance(d, FieldDescriptor):
            raise TypeError("Expected a FieldDescriptor, got %r" % (d,))
        if d.name in seen:
            raise DuplicateDescriptorError(d.name)
        seen.add(d.name)
        result.append(d)
    return tuple(result)


def group_pairs(pairs: Iterable[tuple[str, str]]) -> dict[str, list[str]]:
    """
    Groups raw form pairs by key.  Values for each key stay in the order
    they were submitted, and a key only appears if it had at least one pair.
    Keys nobody asks for are kept as-is.
    """
    groups: dict[str, list[str]] = {}
    for key, value in pairs:
        groups.setdefault(key, []).append(value)
    return groups


def _drop_empty(groups: dict[str, list[str]]) -> dict[str, list[str]]:
    result = {}
    for key, values in groups.items():
        values = [v for v in values if v != ""]
        if values:
            result[key] = values
    return result


def _convert(descriptor: FieldDescriptor, raw: str) -> Any:
    try:
        return descriptor.convert(raw)
    except CONVERSION_ERRORS as e:
        raise InvalidValueError(descriptor.name, raw, str(e) or e.__class__.__name__) from e


def resolve_field(descriptor: FieldDescriptor, groups: dict[str, list[str]]) -> Any:
    """
    Resolves a single descriptor against grouped pairs.

    Scalars take the first submitted value; any extra values are ignored.
    Multi-valued fields convert every value in submission order and stop at
    the first one that fails.  A missing optional scalar is None and a
    missing optional multi-value field is an empty list.
    """
    card = descriptor.cardinality
    values = groups.get(descriptor.name)

    if not values:
        if card.is_required:
            raise MissingFieldError(descriptor.name)
        elif card.is_many:
            return []
        else:
            return None

    if card.is_many:
        return [_convert(descriptor, v) for v in values]

    if len(values) > 1:
        logger.debug("Ignoring %d extra value(s) for scalar field %r", len(values) - 1, descriptor.name)
    return _convert(descriptor, values[0])


class Binder:
    """
    Binds flat form pairs to a record described by an ordered list of
    :class:`FieldDescriptor`.

    The descriptor list is checked once, here, so a duplicate name fails
    when the binder is built rather than on the first request.  A binder
    holds no per-call state and can be shared between threads.

    :param descriptors: The fields of the target record, in declaration
                        order.  The order decides which error is reported
                        when several fields are bad.
    :param factory: Called with every resolved field as a keyword argument
                    to build the result.  If None, the result is a dict.
    :param config: Configuration options, see :attr:`DEFAULT_CONFIG`.
    """

    #: Default configuration.  COLLECT_ERRORS resolves every field and raises
    #: a single BindErrors instead of stopping at the first failure.
    #: EMPTY_AS_MISSING treats empty-string values as if they weren't sent.
    DEFAULT_CONFIG: BinderConfig = {
        "COLLECT_ERRORS": False,
        "EMPTY_AS_MISSING": False,
    }

    def __init__(
        self,
        descriptors: Iterable[FieldDescriptor],
        factory: RecordFactory | None = None,
        config: BinderConfig = {},
    ) -> None:
        self.logger = logging.getLogger(__name__)

        unknown = set(config) - set(self.DEFAULT_CONFIG)
        if unknown:
            raise ValueError("Unknown config option(s): %s" % ", ".join(sorted(unknown)))

        self.config: BinderConfig = self.DEFAULT_CONFIG.copy()
        self.config.update(config)

        self.descriptors = check_descriptors(descriptors)
        self.factory = factory

    @property
    def field_names(self) -> list[str]:
        return [d.name for d in self.descriptors]

    def bind(self, pairs: Iterable[tuple[str, str]]) -> Any:
        """
        Binds the given pairs, returning the record or raising a
        :class:`BindError`.
        """
        groups = group_pairs(pairs)
        if self.config["EMPTY_AS_MISSING"]:
            groups = _drop_empty(groups)

        collect = self.config["COLLECT_ERRORS"]
        values: dict[str, Any] = {}
        errors: list[BindError] = []

        for descriptor in self.descriptors:
            try:
                values[descriptor.name] = resolve_field(descriptor, groups)
            except BindError as e:
                self.logger.debug("Field %r failed: %s", descriptor.name, e)
                if not collect:
                    self.logger.warning("Bind failed on field %r", descriptor.name)
                    raise
                errors.append(e)

        if errors:
            self.logger.warning("Bind failed on %d field(s): %r", len(errors), [e.name for e in errors])
            raise BindErrors(errors)

        if self.factory is None:
            return values
        return self.factory(**values)

    def __repr__(self) -> str:
        return "{}(fields={!r}, factory={!r})".format(self.__class__.__name__, self.field_names, self.factory)


def bind(
    pairs: Iterable[tuple[str, str]],
    descriptors: Iterable[FieldDescriptor],
    factory: RecordFactory | None = None,
    config: BinderConfig = {},
) -> Any:
    """
    One-shot form of :meth:`Binder.bind`.  Build a :class:`Binder` once and
    reuse it when binding the same record shape repeatedly.
    """
    return Binder(descriptors, factory=factory, config=config).bind(pairs)

