"""Error taxonomy for prop validation.

Every failure is raised immediately as a single exception carrying both the
rendered message and the structured data it was rendered from.
"""

from enum import Enum
from typing import Any, Optional, Sequence

from propcheck.models import ValidationReport


class ErrorCode(str, Enum):
    """Which of the three message shapes a failure uses."""

    TYPE_MISMATCH = "TYPE_MISMATCH"                # shape (a)
    REFINEMENT_MISMATCH = "REFINEMENT_MISMATCH"    # shape (b)
    UNEXPECTED_PROPERTY = "UNEXPECTED_PROPERTY"    # shape (c)


class SchemaDefinitionError(ValueError):
    """Raised when a descriptor or schema is malformed."""


class PropValidationError(Exception):
    """A props bag failed its schema."""

    code: ErrorCode

    def __init__(
        self,
        message: str,
        *,
        label: str = "",
        field: Optional[str] = None,
        report: Optional[ValidationReport] = None,
        extra_props: Sequence[str] = (),
        value: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.label = label
        self.field = field
        self.report = report if report is not None else ValidationReport.empty()
        self.extra_props = list(extra_props)
        self.value = value

    def __str__(self) -> str:
        return self.message

    def __reduce__(self):
        # the report references descriptors, whose predicates may not pickle
        state = {k: v for k, v in self.__dict__.items() if k != "report"}
        return (type(self), (self.message,), state)


class TypeMismatchError(PropValidationError):
    code = ErrorCode.TYPE_MISMATCH


class RefinementMismatchError(PropValidationError):
    code = ErrorCode.REFINEMENT_MISMATCH


class UnexpectedPropertyError(PropValidationError):
    code = ErrorCode.UNEXPECTED_PROPERTY
