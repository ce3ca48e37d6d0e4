"""Pre-defined descriptors for UI framework values.

``FrameworkElement`` accepts a single element; ``FrameworkNode`` accepts
anything renderable: a string, a number, an element, or a (nested) list of
those. Hosts with their own element class build the same pair with
``element_type()`` / ``node_type()``.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from propcheck.descriptors import Irreducible, irreducible


@dataclass(frozen=True)
class Element:
    """A framework element: a tag or component type plus its props."""

    type: Any
    props: Mapping = field(default_factory=dict)
    key: Optional[str] = None


def create_element(type: Any, props: Optional[Mapping] = None, *children: Any) -> Element:
    """Build an ``Element``; positional children land in ``props["children"]``."""
    props = dict(props or {})
    key = props.pop("key", None)
    if len(children) == 1:
        props["children"] = children[0]
    elif children:
        props["children"] = list(children)
    return Element(type=type, props=props, key=key)


def element_type(name: str, is_element: Callable[[Any], bool]) -> Irreducible:
    return irreducible(name, is_element)


def node_type(name: str, is_element: Callable[[Any], bool]) -> Irreducible:
    """Irreducible for renderable nodes built on an element predicate."""

    def is_node(x: Any) -> bool:
        if isinstance(x, bool):
            return False
        if isinstance(x, (str, int, float)) or is_element(x):
            return True
        if isinstance(x, (list, tuple)):
            return all(is_node(item) for item in x)
        return False

    return irreducible(name, is_node)


def is_element(x: Any) -> bool:
    return isinstance(x, Element)


FrameworkElement = element_type("FrameworkElement", is_element)
FrameworkNode = node_type("FrameworkNode", is_element)
