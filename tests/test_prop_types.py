"""End-to-end behaviour of the per-prop validators."""

from __future__ import annotations

import pytest

import propcheck
from propcheck import (
    FrameworkElement,
    FrameworkNode,
    RefinementMismatchError,
    String,
    TypeMismatchError,
    UnexpectedPropertyError,
    create_element,
    prop_types,
    struct,
    subtype,
)
from tests.conftest import LABEL, run_prop_types


def starts_with_a(x: dict) -> bool:
    return x["name"].startswith("a")


starts_with_a.display_name = "startsWithA"


class TestExports:
    def test_exports_descriptor_namespace(self) -> None:
        assert propcheck.t is propcheck.descriptors

    def test_exports_prop_types_function(self) -> None:
        assert callable(propcheck.prop_types)

    def test_exports_decorator(self) -> None:
        assert callable(propcheck.props)

    def test_framework_element_is_irreducible(self) -> None:
        assert FrameworkElement.kind == "irreducible"

    def test_framework_node_is_irreducible(self) -> None:
        assert FrameworkNode.kind == "irreducible"


class TestPropTypes:
    def test_checks_bad_values(self) -> None:
        validators = prop_types(struct({"name": String}))
        assert list(validators) == ["name", "__strict__"]
        with pytest.raises(TypeMismatchError) as exc_info:
            run_prop_types(validators, {})
        assert str(exc_info.value) == (
            'Invalid prop "name" supplied to <displayName>, should be a String.\n\n'
            "Detected errors (1):\n\n"
            " 1. Invalid value undefined supplied to String\n\n"
        )
        run_prop_types(validators, {"name": "a"})

    def test_accepts_a_mapping_instead_of_a_struct(self) -> None:
        validators = prop_types({"name": String})
        with pytest.raises(TypeMismatchError) as exc_info:
            run_prop_types(validators, {})
        assert str(exc_info.value) == (
            'Invalid prop "name" supplied to <displayName>, should be a String.\n\n'
            "Detected errors (1):\n\n"
            " 1. Invalid value undefined supplied to String\n\n"
        )
        run_prop_types(validators, {"name": "a"})

    def test_reserved_keys_are_never_additional(self) -> None:
        validators = prop_types({"name": String})
        run_prop_types(validators, {"name": "a", "__strict__": None, "__subtype__": None})

    def test_checks_a_subtype(self) -> None:
        schema = subtype(struct({"name": String}), starts_with_a)
        validators = prop_types(schema)
        assert list(validators) == ["name", "__strict__", "__subtype__"]
        with pytest.raises(RefinementMismatchError) as exc_info:
            run_prop_types(validators, {"name": "b"})
        assert str(exc_info.value) == (
            'Invalid props:\n\n{\n  "name": "b"\n}\n\n'
            "supplied to <displayName>, should be a {{name: String} | startsWithA} subtype."
        )
        run_prop_types(validators, {"name": "a"})

    def test_subtype_stays_silent_when_base_shape_fails(self) -> None:
        schema = subtype(struct({"name": String}), starts_with_a)
        validator = prop_types(schema)["__subtype__"]
        validator({"name": 1}, "__subtype__", LABEL)

    def test_checks_additional_props(self) -> None:
        validators = prop_types({"name": String})
        with pytest.raises(UnexpectedPropertyError) as exc_info:
            run_prop_types(validators, {"name": "a", "surname": "b"})
        assert str(exc_info.value) == (
            'Invalid additional prop(s):\n\n[\n  "surname"\n]\n\nsupplied to <displayName>.'
        )
        assert exc_info.value.extra_props == ["surname"]

    def test_reports_all_additional_props_in_one_message(self) -> None:
        validators = prop_types({"name": String})
        with pytest.raises(UnexpectedPropertyError) as exc_info:
            run_prop_types(validators, {"name": "a", "zeta": 1, "alpha": 2})
        assert str(exc_info.value) == (
            'Invalid additional prop(s):\n\n[\n  "alpha",\n  "zeta"\n]\n\nsupplied to <displayName>.'
        )

    def test_opt_out_of_additional_props_check(self) -> None:
        validators = prop_types({"name": String}, strict=False)
        assert list(validators) == ["name"]
        run_prop_types(validators, {"name": "a", "surname": "b"})

    def test_lenient_struct_accepts_additional_props(self) -> None:
        validators = prop_types(struct({"name": String}, strict=False))
        assert list(validators) == ["name"]
        run_prop_types(validators, {"name": "a", "x": 1})

    def test_huge_int_gets_a_verdict(self) -> None:
        run_prop_types(prop_types({"n": propcheck.Number}), {"n": 10**400})
        run_prop_types(prop_types({"n": propcheck.Integer}), {"n": 10**400})
        with pytest.raises(TypeMismatchError):
            run_prop_types(prop_types({"n": propcheck.Integer}), {"n": 0.5})

    def test_messages_are_identical_across_runs(self) -> None:
        validators = prop_types({"name": String, "tags": propcheck.list_of(String)})
        messages = []
        for _ in range(2):
            with pytest.raises(TypeMismatchError) as exc_info:
                run_prop_types(validators, {"name": "a", "tags": ["x", 1, None]})
            messages.append(exc_info.value.message)
        assert messages[0] == messages[1]
        assert messages[0] == (
            'Invalid prop "tags" supplied to <displayName>, should be a Array<String>.\n\n'
            "Detected errors (2):\n\n"
            " 1. Invalid value 1 supplied to /1: String\n"
            " 2. Invalid value null supplied to /2: String\n\n"
        )


class TestFrameworkTypes:
    def test_checks_elements(self) -> None:
        validators = prop_types({"el": FrameworkElement})
        with pytest.raises(TypeMismatchError) as exc_info:
            run_prop_types(validators, {"el": "a"})
        assert str(exc_info.value) == (
            'Invalid prop "el" supplied to <displayName>, should be a FrameworkElement.\n\n'
            "Detected errors (1):\n\n"
            ' 1. Invalid value "a" supplied to FrameworkElement\n\n'
        )
        run_prop_types(validators, {"el": create_element("div")})

    def test_checks_nodes(self) -> None:
        validators = prop_types({"el": FrameworkNode})
        with pytest.raises(TypeMismatchError) as exc_info:
            run_prop_types(validators, {"el": True})
        assert str(exc_info.value) == (
            'Invalid prop "el" supplied to <displayName>, should be a FrameworkNode.\n\n'
            "Detected errors (1):\n\n"
            " 1. Invalid value true supplied to FrameworkNode\n\n"
        )

    @pytest.mark.parametrize(
        "node",
        [
            "a",
            1,
            create_element("div"),
            ["a", create_element("div")],
            [1, create_element("div")],
            [create_element("div"), create_element("a")],
        ],
    )
    def test_accepts_renderable_nodes(self, node: object) -> None:
        run_prop_types(prop_types({"el": FrameworkNode}), {"el": node})
