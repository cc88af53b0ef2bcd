"""Ways of producing descriptor lists.

The binder only needs an ordered sequence of :class:`FieldDescriptor`; how
that sequence is built is up to the caller.  This module offers two ways:
reflecting over a dataclass's annotations, and registering fields by hand
with :class:`SchemaBuilder`.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import types
import typing
from typing import TYPE_CHECKING

from .binder import Binder, Cardinality, FieldDescriptor, check_descriptors
from .converters import converter_for, identity
from .exceptions import DuplicateDescriptorError, SchemaError

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Callable, Iterable
    from typing import Any, TypeVar

    from .binder import BinderConfig
    from .converters import Converter

    T = TypeVar("T")


# Key under which per-field options live in dataclasses.field(metadata=...).
METADATA_KEY = "formbind"

_UNION_ORIGINS = (typing.Union, types.UnionType)
_SEQUENCE_ORIGINS = (list, collections.abc.Sequence)

logger = logging.getLogger(__name__)


class SchemaBuilder:
    """
    Collects descriptors one field at a time.  Each registration method
    returns the builder so calls can be chained::

        descriptors = (
            SchemaBuilder()
            .required("name")
            .optional("age", convert=to_int)
            .optional_many("interests")
            .build()
        )

    Registering the same name twice raises :class:`DuplicateDescriptorError`
    immediately.
    """

    def __init__(self) -> None:
        self._descriptors: list[FieldDescriptor] = []
        self._names: set[str] = set()

    def add(self, name: str, cardinality: Cardinality, convert: Converter = identity) -> SchemaBuilder:
        if name in self._names:
            raise DuplicateDescriptorError(name)
        self._descriptors.append(FieldDescriptor(name, cardinality, convert))
        self._names.add(name)
        return self

    def required(self, name: str, convert: Converter = identity) -> SchemaBuilder:
        return self.add(name, Cardinality.REQUIRED, convert)

    def optional(self, name: str, convert: Converter = identity) -> SchemaBuilder:
        return self.add(name, Cardinality.OPTIONAL, convert)

    def required_many(self, name: str, convert: Converter = identity) -> SchemaBuilder:
        return self.add(name, Cardinality.REQUIRED_MANY, convert)

    def optional_many(self, name: str, convert: Converter = identity) -> SchemaBuilder:
        return self.add(name, Cardinality.OPTIONAL_MANY, convert)

    def build(self) -> tuple[FieldDescriptor, ...]:
        return tuple(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return "{}(fields={!r})".format(self.__class__.__name__, [d.name for d in self._descriptors])


def _unwrap_optional(tp: Any) -> tuple[Any, bool]:
    if typing.get_origin(tp) in _UNION_ORIGINS:
        args = typing.get_args(tp)
        rest = [a for a in args if a is not type(None)]
        if len(rest) == 1 and len(args) == 2:
            return rest[0], True
    return tp, False


def _unwrap_sequence(tp: Any) -> tuple[Any, bool]:
    if tp is list:
        return str, True
    if typing.get_origin(tp) in _SEQUENCE_ORIGINS:
        args = typing.get_args(tp)
        return (args[0] if args else str), True
    return tp, False


def _has_default(f: dataclasses.Field[Any]) -> bool:
    return f.default is not dataclasses.MISSING or f.default_factory is not dataclasses.MISSING


def _form_fields(cls: type) -> list[dataclasses.Field[Any]]:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise SchemaError(f"{cls!r} is not a dataclass")
    return [f for f in dataclasses.fields(cls) if f.init]


def _form_name(f: dataclasses.Field[Any]) -> str:
    return f.metadata.get(METADATA_KEY, {}).get("name", f.name)


def descriptor_for_field(f: dataclasses.Field[Any], tp: Any) -> FieldDescriptor:
    """
    Works out the descriptor for one dataclass field from its resolved type.

    ``Optional[T]`` and any field with a default become optional.  A
    ``list[T]`` field is multi-valued, and optional when it is
    ``Optional[list[T]]`` or has a default.
    """
    options = f.metadata.get(METADATA_KEY, {})

    inner, is_optional = _unwrap_optional(tp)
    inner, is_many = _unwrap_sequence(inner)
    is_optional = is_optional or _has_default(f)

    if is_many:
        cardinality = Cardinality.OPTIONAL_MANY if is_optional else Cardinality.REQUIRED_MANY
    else:
        cardinality = Cardinality.OPTIONAL if is_optional else Cardinality.REQUIRED

    convert = options.get("convert")
    if convert is None:
        try:
            convert = converter_for(inner)
        except TypeError as e:
            raise SchemaError(f"Field {f.name!r}: {e}") from None

    return FieldDescriptor(_form_name(f), cardinality, convert)


def descriptors_from_dataclass(cls: type) -> tuple[FieldDescriptor, ...]:
    """
    Returns the descriptors for a dataclass, in field declaration order.

    Per-field overrides go in the field's metadata::

        @dataclass
        class Signup:
            accepted: bool = field(metadata={"formbind": {"name": "accept-terms"}})

    ``name`` changes the form key the field is read from and ``convert``
    replaces the converter chosen from the annotation.
    """
    fields = _form_fields(cls)
    try:
        hints = typing.get_type_hints(cls)
    except NameError as e:
        raise SchemaError(f"Can't resolve annotations of {cls.__name__}: {e}") from e

    descriptors = check_descriptors(descriptor_for_field(f, hints[f.name]) for f in fields)
    logger.debug("Built %d descriptor(s) for %s", len(descriptors), cls.__name__)
    return descriptors


def dataclass_factory(cls: type[T]) -> Callable[..., T]:
    """
    Returns a record factory for :class:`Binder` that builds ``cls`` from
    values keyed by form name.

    A field with a default that was absent from the form (resolved to None
    or an empty list) is left out, so the dataclass default applies.
    """
    fields = _form_fields(cls)
    attr_names = {_form_name(f): f.name for f in fields}
    defaulted = {_form_name(f) for f in fields if _has_default(f)}

    def factory(**values: Any) -> T:
        kwargs = {}
        for key, value in values.items():
            if key in defaulted and (value is None or value == []):
                continue
            kwargs[attr_names[key]] = value
        return cls(**kwargs)

    factory.__name__ = f"make_{cls.__name__}"
    return factory


def binder_for(cls: type[T], config: BinderConfig = {}) -> Binder:
    """Returns a :class:`Binder` producing instances of the dataclass ``cls``."""
    return Binder(descriptors_from_dataclass(cls), factory=dataclass_factory(cls), config=config)


def webform(cls: type[T] | None = None, *, config: BinderConfig = {}) -> Any:
    """
    Class decorator that makes a dataclass bindable from form pairs.

    The descriptors are worked out once, when the class is decorated, so a
    broken schema fails at import time.  The class gains a
    ``from_pairs(pairs)`` classmethod and a ``__form_descriptors__``
    attribute::

        @webform
        @dataclass
        class Contact:
            name: str
            email: Optional[str]
            interests: list[str] = field(default_factory=list)

        contact = Contact.from_pairs([("name", "Alice")])

    May also be used as ``@webform(config={...})``.
    """

    def decorator(klass: type[T]) -> type[T]:
        binder = binder_for(klass, config=config)
        klass.__form_binder__ = binder  # type: ignore[attr-defined]
        klass.__form_descriptors__ = binder.descriptors  # type: ignore[attr-defined]
        klass.from_pairs = classmethod(_from_pairs)  # type: ignore[attr-defined]
        return klass

    if cls is None:
        return decorator
    return decorator(cls)


def _from_pairs(klass: type[T], pairs: Iterable[tuple[str, str]]) -> T:
    return klass.__form_binder__.bind(pairs)  # type: ignore[attr-defined, no-any-return]
