"""Tests for schema normalization at the registration boundary."""

from __future__ import annotations

import pytest

from propcheck.config import get_settings
from propcheck.descriptors import Number, String, list_of, struct, subtype
from propcheck.errors import SchemaDefinitionError
from propcheck.schema import STRICT_KEY, SUBTYPE_KEY, PropSchema, compile_schema


def has_name(props: dict) -> bool:
    return bool(props["name"])


class TestCompileSchema:
    def test_struct(self) -> None:
        user = struct({"name": String})
        compiled = compile_schema(user)
        assert compiled.struct is user
        assert compiled.refinement is None
        assert compiled.strict is True

    def test_raw_mapping_becomes_struct(self) -> None:
        compiled = compile_schema({"name": String, "age": Number})
        assert list(compiled.fields) == ["name", "age"]
        assert compiled.display_name == "{name: String, age: Number}"

    def test_refined_struct(self) -> None:
        refined = subtype(struct({"name": String}), has_name)
        compiled = compile_schema(refined)
        assert compiled.refinement is refined
        assert compiled.struct is refined.base
        assert compiled.display_name == "{{name: String} | has_name}"

    def test_refinement_must_narrow_a_struct(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            compile_schema(subtype(String, bool))

    def test_rejects_other_descriptors(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            compile_schema(list_of(String))  # type: ignore[arg-type]

    def test_rejects_reserved_field_names(self) -> None:
        with pytest.raises(SchemaDefinitionError, match=STRICT_KEY):
            compile_schema({STRICT_KEY: String})

    def test_rejects_non_descriptor_values(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            compile_schema({"name": "String"})

    def test_compiled_schema_is_reused(self) -> None:
        compiled = compile_schema({"name": String})
        assert compile_schema(compiled) is compiled
        assert compile_schema(compiled, strict=True) is compiled

    def test_compiled_schema_strictness_can_be_overridden(self) -> None:
        compiled = compile_schema({"name": String})
        lenient = compile_schema(compiled, strict=False)
        assert isinstance(lenient, PropSchema)
        assert lenient.strict is False
        assert lenient.struct is compiled.struct

    def test_struct_strict_flag_is_honoured(self) -> None:
        assert compile_schema(struct({"name": String}, strict=False)).strict is False
        assert compile_schema(struct({"name": String}, strict=True)).strict is True

    def test_struct_strict_flag_wins_over_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROPCHECK_STRICT", "false")
        get_settings.cache_clear()
        assert compile_schema(struct({"name": String}, strict=True)).strict is True
        assert compile_schema(struct({"name": String})).strict is False

    def test_explicit_argument_wins_over_struct_flag(self) -> None:
        assert compile_schema(struct({"name": String}, strict=False), strict=True).strict is True

    def test_refined_struct_uses_base_strict_flag(self) -> None:
        refined = subtype(struct({"name": String}, strict=False), has_name)
        assert compile_schema(refined).strict is False

    def test_strict_default_comes_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROPCHECK_STRICT", "false")
        get_settings.cache_clear()
        assert compile_schema({"name": String}).strict is False


class TestPropSchema:
    def test_extra_keys_skip_declared_and_reserved(self) -> None:
        compiled = compile_schema({"name": String})
        props = {"name": "a", "z": 1, "b": 2, STRICT_KEY: None, SUBTYPE_KEY: None}
        assert compiled.extra_keys(props) == ["b", "z"]

    def test_data_drops_reserved_keys(self) -> None:
        compiled = compile_schema({"name": String})
        assert compiled.data({"name": "a", STRICT_KEY: None}) == {"name": "a"}
