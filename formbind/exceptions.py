from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Sequence


class FormBindError(ValueError):
    """Base error class for everything raised by formbind."""


class BindError(FormBindError):
    """This exception (or a subclass) is raised when a set of form pairs
    cannot be bound to the requested record.

    Bind errors describe bad input, not bad code, so callers are expected to
    catch them and report them back to whoever submitted the form.
    """

    #: The name of the field that failed, or None when several did.
    name: str | None = None


class MissingFieldError(BindError):
    """A required field (scalar or multi-valued) had no pairs in the input."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Missing required field: '{name}'")
        self.name = name


class InvalidValueError(BindError):
    """A value was present but its conversion failed.

    ``raw_value`` is the exact string that was submitted and ``reason`` is
    whatever the underlying conversion reported.
    """

    def __init__(self, name: str, raw_value: str, reason: str) -> None:
        super().__init__(f"Invalid value for field '{name}': {raw_value!r} ({reason})")
        self.name = name
        self.raw_value = raw_value
        self.reason = reason


class BindErrors(BindError):
    """Raised instead of a single error when the binder is configured to
    collect every failure.  The individual errors are kept in field
    declaration order.
    """

    def __init__(self, errors: Sequence[BindError]) -> None:
        self.errors = tuple(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    @property
    def names(self) -> list[str | None]:
        return [e.name for e in self.errors]


class SchemaError(FormBindError):
    """A descriptor list could not be assembled.  This always indicates a
    programming mistake and is raised at construction time, never while
    binding.
    """


class DuplicateDescriptorError(SchemaError):
    """Two descriptors in the same list share a name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Duplicate field descriptor: '{name}'")
        self.name = name


class ConversionError(FormBindError):
    """Raised by the stock converters when a string can't be parsed.  The
    binder wraps it into an :class:`InvalidValueError`.
    """
