"""Schema registration boundary.

Normalizes whatever the caller registers into a ``PropSchema``:

    struct({...})                    plain struct
    subtype(struct({...}), pred)     struct refined by a whole-props predicate
    {"name": String, ...}            raw mapping, wrapped in an implicit struct

Two reserved control keys travel in the same props bag as real data. They
are never declared, never checked as data and never reported as extra.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from propcheck.config import get_settings
from propcheck.descriptors import Struct, Subtype, is_descriptor, struct
from propcheck.errors import SchemaDefinitionError

STRICT_KEY = "__strict__"
SUBTYPE_KEY = "__subtype__"
RESERVED_KEYS = frozenset({STRICT_KEY, SUBTYPE_KEY})


@dataclass(frozen=True, eq=False)
class PropSchema:
    """A compiled schema: the struct to check field by field, plus options."""

    struct: Struct
    refinement: Optional[Subtype] = None
    strict: bool = True

    @property
    def fields(self) -> Mapping:
        return self.struct.fields

    @property
    def display_name(self) -> str:
        return (self.refinement or self.struct).describe()

    def extra_keys(self, props: Mapping) -> list:
        """Keys of ``props`` that are neither declared nor reserved, sorted."""
        return sorted(
            (k for k in props if k not in self.struct.fields and k not in RESERVED_KEYS),
            key=str,
        )

    def data(self, props: Mapping) -> dict:
        """``props`` without the reserved control keys."""
        return {k: v for k, v in props.items() if k not in RESERVED_KEYS}


SchemaLike = Union[PropSchema, Struct, Subtype, Mapping]


def compile_schema(schema: SchemaLike, strict: Optional[bool] = None) -> PropSchema:
    """Normalize a registered schema.

    Args:
        schema: A struct, a struct refined by ``subtype()``, a raw
            field -> descriptor mapping, or an already compiled schema
        strict: Reject undeclared props. Defaults to the struct's own
            ``strict`` flag, then ``Settings.STRICT``.

    Returns:
        PropSchema ready to be checked any number of times
    """
    if isinstance(schema, PropSchema):
        if strict is None or strict == schema.strict:
            return schema
        return PropSchema(struct=schema.struct, refinement=schema.refinement, strict=strict)

    refinement = None
    if isinstance(schema, Subtype):
        refinement = schema
        base = schema.base
        if not isinstance(base, Struct):
            raise SchemaDefinitionError(
                f"A refined schema must narrow a struct, got {base.describe()}"
            )
    elif isinstance(schema, Struct):
        base = schema
    elif isinstance(schema, Mapping) and not is_descriptor(schema):
        base = struct(schema)
    else:
        raise SchemaDefinitionError(
            f"Expected a struct, a refined struct or a mapping of props, got {schema!r}"
        )

    reserved = RESERVED_KEYS.intersection(base.fields)
    if reserved:
        raise SchemaDefinitionError(
            f"Reserved keys cannot be declared as props: {', '.join(sorted(reserved))}"
        )

    if strict is None:
        strict = base.strict if base.strict is not None else get_settings().STRICT

    return PropSchema(struct=base, refinement=refinement, strict=bool(strict))


def is_reserved(key: Any) -> bool:
    return key in RESERVED_KEYS
