"""Attach a schema to a component declaration."""

from typing import Callable, Optional, TypeVar

from propcheck.engine import validation_engine
from propcheck.schema import SchemaLike

T = TypeVar("T")


def props(schema: SchemaLike, *, strict: Optional[bool] = None) -> Callable[[T], T]:
    """Class or function decorator registering ``schema`` on a component.

    Sets ``__prop_schema__`` (the compiled schema) and ``prop_types`` (the
    per-prop validators) on the decorated object and returns it.

    Usage:
        @props({"name": String})
        class Greeting:
            ...
    """
    compiled = validation_engine.compile(schema, strict=strict)

    def decorator(component: T) -> T:
        component.__prop_schema__ = compiled
        component.prop_types = validation_engine.prop_types(compiled)
        return component

    return decorator
