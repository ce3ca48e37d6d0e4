"""Structural conformance check over the descriptor kinds.

``check()`` walks a value alongside its descriptor and collects every
violation with its path from the root. It never mutates either side and
keeps no state between calls.
"""

from collections.abc import Mapping
from typing import Any, Callable

from propcheck.descriptors import (
    UNDEFINED,
    DictOf,
    Irreducible,
    Kind,
    ListOf,
    Maybe,
    Nil,
    Struct,
    Subtype,
    TypeDescriptor,
    UnionOf,
    is_descriptor,
)
from propcheck.errors import SchemaDefinitionError
from propcheck.models import ValidationReport, Violation

Path = tuple


def check(descriptor: TypeDescriptor, value: Any) -> ValidationReport:
    """Check ``value`` against ``descriptor``.

    Returns:
        ValidationReport in traversal order (empty if the value conforms)
    """
    if not is_descriptor(descriptor):
        raise SchemaDefinitionError(f"Cannot check against {descriptor!r}: not a type descriptor")
    return ValidationReport.build(_collect(descriptor, value, ()))


def _collect(descriptor: TypeDescriptor, value: Any, path: Path) -> list[Violation]:
    checker = _CHECKERS.get(descriptor.kind)
    if checker is None:
        raise SchemaDefinitionError(f"Unsupported descriptor kind: {descriptor.kind!r}")
    return checker(descriptor, value, path)


def _check_irreducible(desc: Irreducible, value: Any, path: Path) -> list[Violation]:
    if desc.predicate(value):
        return []
    return [Violation(path=path, expected=desc, actual=value)]


def _check_struct(desc: Struct, value: Any, path: Path) -> list[Violation]:
    if not isinstance(value, Mapping):
        return [Violation(path=path, expected=desc, actual=value)]

    violations: list[Violation] = []
    for key, field_desc in desc.fields.items():
        violations.extend(_collect(field_desc, value.get(key, UNDEFINED), path + (key,)))

    if desc.strict:
        extra = sorted((k for k in value if k not in desc.fields), key=str)
        for key in extra:
            violations.append(Violation(path=path + (key,), expected=Nil, actual=value[key]))

    return violations


def _check_subtype(desc: Subtype, value: Any, path: Path) -> list[Violation]:
    violations = _collect(desc.base, value, path)
    if violations:
        return violations
    if desc.predicate(value):
        return []
    return [Violation(path=path, expected=desc, actual=value)]


def _check_list(desc: ListOf, value: Any, path: Path) -> list[Violation]:
    if not isinstance(value, (list, tuple)):
        return [Violation(path=path, expected=desc, actual=value)]

    violations: list[Violation] = []
    for i, item in enumerate(value):
        violations.extend(_collect(desc.element, item, path + (i,)))
    return violations


def _check_dict(desc: DictOf, value: Any, path: Path) -> list[Violation]:
    if not isinstance(value, Mapping):
        return [Violation(path=path, expected=desc, actual=value)]

    violations: list[Violation] = []
    for key, item in value.items():
        violations.extend(_collect(desc.domain, key, path + (key,)))
        violations.extend(_collect(desc.codomain, item, path + (key,)))
    return violations


def _check_union(desc: UnionOf, value: Any, path: Path) -> list[Violation]:
    reports = []
    for candidate in desc.candidates:
        violations = _collect(candidate, value, path)
        if not violations:
            return []
        reports.append(ValidationReport.build(violations))
    return [Violation(path=path, expected=desc, actual=value, candidates=tuple(reports))]


def _check_maybe(desc: Maybe, value: Any, path: Path) -> list[Violation]:
    if value is None or value is UNDEFINED:
        return []
    return _collect(desc.inner, value, path)


_CHECKERS: dict[Kind, Callable[[Any, Any, Path], list[Violation]]] = {
    Kind.IRREDUCIBLE: _check_irreducible,
    Kind.STRUCT: _check_struct,
    Kind.SUBTYPE: _check_subtype,
    Kind.LIST: _check_list,
    Kind.DICT: _check_dict,
    Kind.UNION: _check_union,
    Kind.MAYBE: _check_maybe,
}
