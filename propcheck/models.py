"""Validation models — violation records and the report structure.

Reports are built fresh for every check and never shared between calls.
"""

from typing import Any, Iterator

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """A single non-conforming value found during a check."""

    model_config = {"frozen": True}

    path: tuple[Any, ...] = Field(
        default=(),
        description="Field names / indices from the checked root to the value",
    )
    expected: Any = Field(description="The TypeDescriptor the value failed")
    actual: Any = Field(default=None, description="The value that failed")
    candidates: tuple["ValidationReport", ...] = Field(
        default=(),
        description="Per-candidate reports, only set when a union failed",
    )


class ValidationReport(BaseModel):
    """Ordered violations produced by one check. Empty means the value conforms."""

    model_config = {"frozen": True}

    violations: tuple[Violation, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.violations

    def __len__(self) -> int:
        return len(self.violations)

    def __iter__(self) -> Iterator[Violation]:  # type: ignore[override]
        return iter(self.violations)

    @classmethod
    def build(cls, violations: list[Violation]) -> "ValidationReport":
        """Build a report from violations in the order they were found."""
        if not violations:
            return cls.empty()
        return cls(violations=tuple(violations))

    @classmethod
    def empty(cls) -> "ValidationReport":
        return _EMPTY_REPORT


Violation.model_rebuild()

_EMPTY_REPORT = ValidationReport()
