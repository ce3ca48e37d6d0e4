"""Diagnostic Formatter — renders failures into fixed-format messages.

The three message shapes are a stable contract; callers assert on them
byte for byte:

    (a) type mismatch of one prop, with the numbered violation list
    (b) refinement mismatch of the whole props bag, with the serialized props
    (c) additional props, with the sorted extra keys
"""

import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Iterable

from propcheck.descriptors import UNDEFINED, TypeDescriptor, is_descriptor, predicate_name
from propcheck.models import ValidationReport, Violation


def stringify(value: Any) -> str:
    """Render a value the way every message shows it.

    Strings are quoted, booleans are ``true``/``false``, lists bracketed,
    containers indented by two spaces, an absent value is ``undefined``.
    """
    if value is UNDEFINED:
        return "undefined"
    return json.dumps(_jsonable(value), indent=2, ensure_ascii=False, default=str)


def _jsonable(value: Any) -> Any:
    if value is UNDEFINED:
        return None
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if is_descriptor(value):
        return value.describe()
    if isinstance(value, Mapping):
        return {
            _json_key(k): _jsonable(v) for k, v in value.items() if v is not UNDEFINED
        }
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return [_jsonable(v) for v in sorted(value, key=repr)]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {
            f.name: _jsonable(getattr(value, f.name)) for f in dataclasses.fields(value)
        }
    if callable(value):
        return f"[Function {predicate_name(value)}]"
    return value


def _json_key(key: Any) -> Any:
    if isinstance(key, (str, int, float, bool)) or key is None:
        return key
    return str(key)


def format_path(path: Iterable[Any]) -> str:
    return "/" + "/".join(str(step) for step in path)


def format_violation(violation: Violation) -> str:
    """``Invalid value <actual> supplied to [/path: ]<Expected>``."""
    expected = violation.expected.describe()
    to = f"{format_path(violation.path)}: {expected}" if violation.path else expected
    return f"Invalid value {stringify(violation.actual)} supplied to {to}"


def format_type_mismatch(
    field: str,
    label: str,
    descriptor: TypeDescriptor,
    report: ValidationReport,
) -> str:
    """Message shape (a): one prop failed its descriptor."""
    lines = "\n".join(
        f" {i}. {format_violation(v)}" for i, v in enumerate(report.violations, start=1)
    )
    return (
        f'Invalid prop "{field}" supplied to {label}, should be a {descriptor.describe()}.\n\n'
        f"Detected errors ({len(report)}):\n\n"
        f"{lines}\n\n"
    )


def format_refinement_mismatch(props: Mapping, label: str, descriptor: TypeDescriptor) -> str:
    """Message shape (b): the props bag has the right shape but fails the refinement."""
    return (
        f"Invalid props:\n\n{stringify(props)}\n\n"
        f"supplied to {label}, should be a {descriptor.describe()} subtype."
    )


def format_additional_props(keys: Iterable[Any], label: str) -> str:
    """Message shape (c): props not declared by a strict schema."""
    return (
        f"Invalid additional prop(s):\n\n{stringify(sorted(keys, key=str))}\n\n"
        f"supplied to {label}."
    )
