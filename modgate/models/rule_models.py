"""
Rule Engine Data Models — Violations, classifications and the validation report.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

SEVERITY_MAX = 10


class Classification(str, Enum):
    ABI_COMPATIBILITY = "AbiCompatibility"
    RESOURCE_LIMIT = "ResourceLimit"
    SECURITY = "Security"

    @property
    def label(self) -> str:
        return _CLASSIFICATION_LABELS[self]


_CLASSIFICATION_LABELS: dict[Classification, str] = {
    Classification.ABI_COMPATIBILITY: "ABI Compatibility",
    Classification.RESOURCE_LIMIT: "Resource Limit",
    Classification.SECURITY: "Security",
}


class FailureDetail(BaseModel):
    """Expectation vs. reality for one failing checkfile property."""

    actual: str
    expected: str
    severity: int = Field(..., ge=0, le=SEVERITY_MAX)
    classification: Classification


class RuleViolation(BaseModel):
    """A failing check emitted by a single rule, keyed by its property path."""

    path: str = Field(..., description="Dot-separated checkfile path, e.g. 'imports.include.env::abort'")
    expected: str
    actual: str
    severity: int
    classification: Classification

    def to_detail(self) -> FailureDetail:
        return FailureDetail(
            actual=self.actual,
            expected=self.expected,
            severity=max(0, min(SEVERITY_MAX, self.severity)),
            classification=self.classification,
        )


class Report(BaseModel):
    """
    Failing checks only, keyed by the dot-separated path to the checkfile
    property. Keys are kept in sorted order.
    """

    fails: dict[str, FailureDetail] = Field(default_factory=dict)

    @classmethod
    def from_violations(cls, violations: list[RuleViolation]) -> "Report":
        fails: dict[str, FailureDetail] = {}
        for v in violations:
            fails[v.path] = v.to_detail()
        return cls(fails=dict(sorted(fails.items())))

    def has_failures(self) -> bool:
        return bool(self.fails)

    @property
    def exit_code(self) -> int:
        return 1 if self.fails else 0

    @property
    def max_severity(self) -> int:
        return max((f.severity for f in self.fails.values()), default=0)
