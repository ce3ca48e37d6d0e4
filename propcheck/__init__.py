"""propcheck — declarative prop validation with exact, readable diagnostics.

Usage:
    from propcheck import prop_types, String, struct

    validators = prop_types(struct({"name": String}))
    for prop, validator in validators.items():
        validator(props, prop, "<Greeting>")  # raises PropValidationError
"""

from propcheck import descriptors
from propcheck.checker import check
from propcheck.decorators import props
from propcheck.descriptors import (
    UNDEFINED,
    Any,
    Array,
    Boolean,
    Date,
    DictOf,
    Error,
    Function,
    Integer,
    Irreducible,
    Kind,
    ListOf,
    Maybe,
    Nil,
    Number,
    Object,
    RegExp,
    String,
    Struct,
    Subtype,
    TypeDescriptor,
    UnionOf,
    dict_of,
    enums,
    irreducible,
    list_of,
    maybe,
    struct,
    subtype,
    union,
)
from propcheck.engine import (
    ValidationEngine,
    prop_types,
    validate_field,
    validate_props,
    validation_engine,
)
from propcheck.errors import (
    ErrorCode,
    PropValidationError,
    RefinementMismatchError,
    SchemaDefinitionError,
    TypeMismatchError,
    UnexpectedPropertyError,
)
from propcheck.framework import Element, FrameworkElement, FrameworkNode, create_element
from propcheck.log import configure_logging
from propcheck.models import ValidationReport, Violation
from propcheck.schema import RESERVED_KEYS, STRICT_KEY, SUBTYPE_KEY, PropSchema, compile_schema

# tcomb-style alias for the descriptor namespace
t = descriptors

__all__ = [
    "t",
    "descriptors",
    "check",
    "props",
    "UNDEFINED",
    "Any",
    "Array",
    "Boolean",
    "Date",
    "DictOf",
    "Error",
    "Function",
    "Integer",
    "Irreducible",
    "Kind",
    "ListOf",
    "Maybe",
    "Nil",
    "Number",
    "Object",
    "RegExp",
    "String",
    "Struct",
    "Subtype",
    "TypeDescriptor",
    "UnionOf",
    "dict_of",
    "enums",
    "irreducible",
    "list_of",
    "maybe",
    "struct",
    "subtype",
    "union",
    "ValidationEngine",
    "prop_types",
    "validate_field",
    "validate_props",
    "validation_engine",
    "ErrorCode",
    "PropValidationError",
    "RefinementMismatchError",
    "SchemaDefinitionError",
    "TypeMismatchError",
    "UnexpectedPropertyError",
    "Element",
    "FrameworkElement",
    "FrameworkNode",
    "create_element",
    "configure_logging",
    "ValidationReport",
    "Violation",
    "RESERVED_KEYS",
    "STRICT_KEY",
    "SUBTYPE_KEY",
    "PropSchema",
    "compile_schema",
]
