"""Validation Engine — checks a props bag against a registered schema.

This is the main entry point. A schema is compiled once into per-prop
validators following the host convention: each validator is called with the
full props bag, the prop name and a display label, and raises on failure.

Usage:
    from propcheck import prop_types, String

    validators = prop_types({"name": String})
    for prop, validator in validators.items():
        validator(props, prop, "UserCard")

Besides one validator per declared prop, the compiled mapping holds one
validator per reserved key: ``__strict__`` reports every undeclared prop in a
single message, ``__subtype__`` applies the refinement to the whole bag.
"""

from collections.abc import Mapping
from typing import Any, Callable, Optional

from propcheck.checker import check
from propcheck.config import get_settings
from propcheck.descriptors import UNDEFINED, TypeDescriptor
from propcheck.errors import (
    PropValidationError,
    RefinementMismatchError,
    TypeMismatchError,
    UnexpectedPropertyError,
)
from propcheck.formatter import (
    format_additional_props,
    format_refinement_mismatch,
    format_type_mismatch,
)
from propcheck.log import get_logger
from propcheck.models import ValidationReport
from propcheck.schema import STRICT_KEY, SUBTYPE_KEY, PropSchema, SchemaLike, compile_schema

logger = get_logger(__name__)

PropValidator = Callable[[Mapping, str, str], None]


class ValidationEngine:
    """Validates props bags and renders failures.

    Design principles:
        - Deterministic: same schema + props → same message
        - Pure: never mutates the schema or the props
        - Fail fast: each validator raises its first failure immediately
    """

    def __init__(self, message_prefix: Optional[str] = None):
        """Initialize the engine.

        Args:
            message_prefix: Prepended to every message. If None, uses
                ``Settings.MESSAGE_PREFIX`` at raise time.
        """
        self.message_prefix = message_prefix

    def compile(self, schema: SchemaLike, strict: Optional[bool] = None) -> PropSchema:
        return compile_schema(schema, strict=strict)

    def check(self, descriptor: TypeDescriptor, value: Any) -> ValidationReport:
        """Structured check with no raising: the report lists every violation."""
        return check(descriptor, value)

    def prop_types(self, schema: SchemaLike, strict: Optional[bool] = None) -> dict[str, PropValidator]:
        """Build the per-prop validators for a schema.

        Returns:
            Declared props in declaration order, then ``__strict__`` if the
            schema is strict, then ``__subtype__`` if it is refined.
        """
        compiled = self.compile(schema, strict=strict)
        validators = {name: self._field_validator(compiled) for name in self._prop_names(compiled)}

        logger.debug(
            "prop_types_built",
            schema=compiled.display_name,
            props=list(validators),
            strict=compiled.strict,
        )
        return validators

    def validate_field(self, schema: SchemaLike, field: str, props: Mapping, label: str) -> None:
        """Validate one prop of ``props``.

        Args:
            schema: Registered schema (compiled or not)
            field: Prop name, or one of the reserved keys
            props: The full props bag
            label: Display label used in messages (e.g. the component name)

        Raises:
            TypeMismatchError: The prop does not conform to its descriptor
            RefinementMismatchError: ``__subtype__`` and the refinement rejects the props
            UnexpectedPropertyError: Strict schema and undeclared props are present
        """
        compiled = self.compile(schema)
        if not isinstance(props, Mapping):
            raise TypeError(f"props must be a mapping, got {type(props).__name__}")

        if field == STRICT_KEY:
            if compiled.strict:
                self._check_additional(compiled, props, label)
            return

        if field == SUBTYPE_KEY:
            if compiled.refinement is not None:
                self._check_refinement(compiled, props, label)
            return

        descriptor = compiled.fields.get(field)
        if descriptor is None:
            if compiled.strict:
                self._check_additional(compiled, props, label)
            return

        value = props.get(field, UNDEFINED)
        report = check(descriptor, value)
        if not report.valid:
            self._raise(
                TypeMismatchError,
                format_type_mismatch(field, label, descriptor, report),
                label=label,
                field=field,
                report=report,
                value=value,
            )

    def validate_props(self, schema: SchemaLike, props: Mapping, label: str) -> None:
        """Run every validator of ``schema`` in order, raising the first failure."""
        compiled = self.compile(schema)
        for name in self._prop_names(compiled):
            self.validate_field(compiled, name, props, label)

    def is_valid(self, schema: SchemaLike, props: Mapping) -> bool:
        try:
            self.validate_props(schema, props, "<anonymous>")
        except PropValidationError:
            return False
        return True

    # ── Consolidated checks ──

    def _check_additional(self, compiled: PropSchema, props: Mapping, label: str) -> None:
        extra = compiled.extra_keys(props)
        if extra:
            self._raise(
                UnexpectedPropertyError,
                format_additional_props(extra, label),
                label=label,
                extra_props=extra,
            )

    def _check_refinement(self, compiled: PropSchema, props: Mapping, label: str) -> None:
        data = compiled.data(props)
        # the per-prop validators own base shape failures
        for name, descriptor in compiled.fields.items():
            if not check(descriptor, data.get(name, UNDEFINED)).valid:
                return

        refinement = compiled.refinement
        if not refinement.predicate(data):
            self._raise(
                RefinementMismatchError,
                format_refinement_mismatch(data, label, refinement),
                label=label,
                value=data,
            )

    # ── Helpers ──

    @staticmethod
    def _prop_names(compiled: PropSchema) -> list[str]:
        names = list(compiled.fields)
        if compiled.strict:
            names.append(STRICT_KEY)
        if compiled.refinement is not None:
            names.append(SUBTYPE_KEY)
        return names

    def _field_validator(self, compiled: PropSchema) -> PropValidator:
        def validator(props: Mapping, prop_name: str, label: str) -> None:
            self.validate_field(compiled, prop_name, props, label)

        return validator

    def _raise(self, error_cls: type, message: str, **details: Any) -> None:
        prefix = self.message_prefix
        if prefix is None:
            prefix = get_settings().MESSAGE_PREFIX
        error = error_cls(prefix + message, **details)

        event: dict[str, Any] = {"code": error.code.value, "label": error.label}
        if isinstance(error, TypeMismatchError):
            event.update(field=error.field, violations=len(error.report))
        elif isinstance(error, UnexpectedPropertyError):
            event.update(extra_props=error.extra_props)
        logger.debug("prop_validation_failed", **event)
        raise error


# Module-level singleton
validation_engine = ValidationEngine()

prop_types = validation_engine.prop_types
validate_field = validation_engine.validate_field
validate_props = validation_engine.validate_props
