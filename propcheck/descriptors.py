"""Type Descriptor Model — the closed set of descriptor kinds.

A descriptor is an immutable description of an expected value shape. The
variants are:

    Irreducible  primitive predicate with a display name
    Struct       ordered field -> descriptor mapping, optionally strict
    Subtype      base descriptor narrowed by a predicate over the whole value
    ListOf       every element conforms to one descriptor
    DictOf       every key / value conforms to a domain / codomain
    UnionOf      at least one candidate conforms, tried in declaration order
    Maybe        None or absent, or the wrapped descriptor

Descriptors are built once when a schema is defined and reused across any
number of checks. ``describe()`` is for messages only; descriptors compare by
identity.

Usage:
    from propcheck.descriptors import String, Number, struct, maybe

    User = struct({"name": String, "age": maybe(Number)})
    User.describe()  # '{name: String, age: ?Number}'
"""

import datetime
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any as AnyValue, Callable, ClassVar, Iterable, Optional, Union

from propcheck.errors import SchemaDefinitionError
from propcheck.models import ValidationReport

Predicate = Callable[[AnyValue], bool]


class _Undefined:
    """Marks a prop that is absent from the props bag."""

    _instance: ClassVar[Optional["_Undefined"]] = None

    def __new__(cls) -> "_Undefined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "undefined"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class Kind(str, Enum):
    """Descriptor variant tag."""

    IRREDUCIBLE = "irreducible"
    STRUCT = "struct"
    SUBTYPE = "subtype"
    LIST = "list"
    DICT = "dict"
    UNION = "union"
    MAYBE = "maybe"


def predicate_name(predicate: Predicate) -> str:
    """Display name of a predicate: ``display_name``, then ``__name__``."""
    name = getattr(predicate, "display_name", None) or getattr(predicate, "__name__", None)
    return name if isinstance(name, str) and name else repr(predicate)


class _Descriptor:
    """Behaviour shared by every variant."""

    kind: ClassVar[Kind]

    def describe(self) -> str:
        raise NotImplementedError

    def check(self, value: AnyValue) -> ValidationReport:
        from propcheck.checker import check

        return check(self, value)

    def is_valid(self, value: AnyValue) -> bool:
        return self.check(value).valid

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


@dataclass(frozen=True, eq=False, repr=False)
class Irreducible(_Descriptor):
    name: str
    predicate: Predicate

    kind: ClassVar[Kind] = Kind.IRREDUCIBLE

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True, eq=False, repr=False)
class Struct(_Descriptor):
    fields: Mapping
    name: Optional[str] = None
    strict: Optional[bool] = None

    kind: ClassVar[Kind] = Kind.STRUCT

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def describe(self) -> str:
        if self.name:
            return self.name
        inner = ", ".join(f"{key}: {desc.describe()}" for key, desc in self.fields.items())
        return "{" + inner + "}"


@dataclass(frozen=True, eq=False, repr=False)
class Subtype(_Descriptor):
    base: "TypeDescriptor"
    predicate: Predicate
    name: Optional[str] = None

    kind: ClassVar[Kind] = Kind.SUBTYPE

    def describe(self) -> str:
        if self.name:
            return self.name
        return "{" + f"{self.base.describe()} | {predicate_name(self.predicate)}" + "}"


@dataclass(frozen=True, eq=False, repr=False)
class ListOf(_Descriptor):
    element: "TypeDescriptor"
    name: Optional[str] = None

    kind: ClassVar[Kind] = Kind.LIST

    def describe(self) -> str:
        return self.name or f"Array<{self.element.describe()}>"


@dataclass(frozen=True, eq=False, repr=False)
class DictOf(_Descriptor):
    domain: "TypeDescriptor"
    codomain: "TypeDescriptor"
    name: Optional[str] = None

    kind: ClassVar[Kind] = Kind.DICT

    def describe(self) -> str:
        if self.name:
            return self.name
        return "{[key: " + self.domain.describe() + "]: " + self.codomain.describe() + "}"


@dataclass(frozen=True, eq=False, repr=False)
class UnionOf(_Descriptor):
    candidates: tuple = field(default=())
    name: Optional[str] = None

    kind: ClassVar[Kind] = Kind.UNION

    def __post_init__(self):
        object.__setattr__(self, "candidates", tuple(self.candidates))

    def describe(self) -> str:
        return self.name or " | ".join(c.describe() for c in self.candidates)


@dataclass(frozen=True, eq=False, repr=False)
class Maybe(_Descriptor):
    inner: "TypeDescriptor"
    name: Optional[str] = None

    kind: ClassVar[Kind] = Kind.MAYBE

    def describe(self) -> str:
        return self.name or f"?{self.inner.describe()}"


TypeDescriptor = Union[Irreducible, Struct, Subtype, ListOf, DictOf, UnionOf, Maybe]

DESCRIPTOR_TYPES = (Irreducible, Struct, Subtype, ListOf, DictOf, UnionOf, Maybe)


def is_descriptor(value: AnyValue) -> bool:
    return isinstance(value, DESCRIPTOR_TYPES)


# ── Constructors ──


def _require_descriptor(value: AnyValue, what: str) -> None:
    if not is_descriptor(value):
        raise SchemaDefinitionError(f"{what} must be a type descriptor, got {value!r}")


def _require_predicate(predicate: AnyValue, what: str) -> None:
    if not callable(predicate):
        raise SchemaDefinitionError(f"{what} must be callable, got {predicate!r}")


def irreducible(name: str, predicate: Predicate) -> Irreducible:
    """Leaf descriptor accepting whatever ``predicate`` accepts."""
    if not isinstance(name, str) or not name:
        raise SchemaDefinitionError("Irreducible descriptors need a non-empty name")
    _require_predicate(predicate, f"Predicate of {name}")
    return Irreducible(name=name, predicate=predicate)


def struct(fields: Mapping, name: Optional[str] = None, strict: Optional[bool] = None) -> Struct:
    """Descriptor for a mapping with a fixed, ordered set of named fields.

    ``strict`` rejects undeclared keys. Left as None, a nested struct is open
    and a registered schema falls back to ``Settings.STRICT``.
    """
    if not isinstance(fields, Mapping):
        raise SchemaDefinitionError(f"Struct fields must be a mapping, got {fields!r}")
    for key, desc in fields.items():
        _require_descriptor(desc, f"Field {key!r}")
    return Struct(fields=fields, name=name, strict=strict)


def subtype(base: TypeDescriptor, predicate: Predicate, name: Optional[str] = None) -> Subtype:
    """Narrow ``base`` to the values for which ``predicate`` returns true."""
    _require_descriptor(base, "Subtype base")
    _require_predicate(predicate, "Subtype predicate")
    return Subtype(base=base, predicate=predicate, name=name)


def list_of(element: TypeDescriptor, name: Optional[str] = None) -> ListOf:
    _require_descriptor(element, "List element")
    return ListOf(element=element, name=name)


def dict_of(domain: TypeDescriptor, codomain: TypeDescriptor, name: Optional[str] = None) -> DictOf:
    _require_descriptor(domain, "Dict domain")
    _require_descriptor(codomain, "Dict codomain")
    return DictOf(domain=domain, codomain=codomain, name=name)


def union(candidates: Iterable[TypeDescriptor], name: Optional[str] = None) -> UnionOf:
    """Descriptor matching the first conforming candidate, in declaration order."""
    candidates = tuple(candidates)
    if not candidates:
        raise SchemaDefinitionError("A union needs at least one candidate")
    for i, candidate in enumerate(candidates):
        _require_descriptor(candidate, f"Union candidate #{i + 1}")
    return UnionOf(candidates=candidates, name=name)


def maybe(inner: TypeDescriptor, name: Optional[str] = None) -> Maybe:
    _require_descriptor(inner, "Maybe inner type")
    return Maybe(inner=inner, name=name)


def enums(values: Iterable[AnyValue], name: Optional[str] = None) -> Irreducible:
    """Irreducible accepting exactly the listed values."""
    allowed = tuple(values)
    if not allowed:
        raise SchemaDefinitionError("enums() needs at least one value")
    display = name or " | ".join(repr(v) for v in allowed)
    # bool is an int subclass; keep True from matching 1
    return irreducible(
        display,
        lambda x: any(x == v and type(x) is type(v) for v in allowed),
    )


# ── Built-in irreducibles ──


def _is_number(x: AnyValue) -> bool:
    # ints never go through float: they may exceed its range
    if isinstance(x, bool):
        return False
    return isinstance(x, int) or (isinstance(x, float) and math.isfinite(x))


Any = irreducible("Any", lambda x: True)
Nil = irreducible("Nil", lambda x: x is None or x is UNDEFINED)
String = irreducible("String", lambda x: isinstance(x, str))
Number = irreducible("Number", _is_number)
Integer = irreducible("Integer", lambda x: _is_number(x) and (isinstance(x, int) or x.is_integer()))
Boolean = irreducible("Boolean", lambda x: isinstance(x, bool))
Array = irreducible("Array", lambda x: isinstance(x, (list, tuple)))
Object = irreducible("Object", lambda x: isinstance(x, Mapping))
Function = irreducible("Function", callable)
Date = irreducible("Date", lambda x: isinstance(x, datetime.date))
RegExp = irreducible("RegExp", lambda x: isinstance(x, re.Pattern))
Error = irreducible("Error", lambda x: isinstance(x, BaseException))
