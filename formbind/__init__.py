__version__ = "0.1.0"

from .binder import (
    Binder,
    Cardinality,
    FieldDescriptor,
    bind,
    check_descriptors,
    group_pairs,
    resolve_field,
)
from .exceptions import (
    BindError,
    BindErrors,
    ConversionError,
    DuplicateDescriptorError,
    FormBindError,
    InvalidValueError,
    MissingFieldError,
    SchemaError,
)
from .schema import (
    SchemaBuilder,
    binder_for,
    dataclass_factory,
    descriptors_from_dataclass,
    webform,
)

__all__ = (
    "BindError",
    "BindErrors",
    "Binder",
    "Cardinality",
    "ConversionError",
    "DuplicateDescriptorError",
    "FieldDescriptor",
    "FormBindError",
    "InvalidValueError",
    "MissingFieldError",
    "SchemaBuilder",
    "SchemaError",
    "bind",
    "binder_for",
    "check_descriptors",
    "dataclass_factory",
    "descriptors_from_dataclass",
    "group_pairs",
    "resolve_field",
    "webform",
)
