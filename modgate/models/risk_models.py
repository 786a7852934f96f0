"""
Risk Data Models — Complexity risk buckets and their configured bounds.

The risk is purely related to computational resource usage as measured by the
cyclomatic complexity of the module's code, not to security.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

U32_MAX = 4_294_967_295


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_ORDER[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, RiskLevel):
            return NotImplemented
        return self.rank >= other.rank


_RISK_ORDER: dict[RiskLevel, int] = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}


class RiskThresholds(BaseModel):
    """Inclusive upper complexity bound of each risk level."""

    model_config = ConfigDict(frozen=True)

    low: int = Field(default=2500, ge=0, le=U32_MAX)
    medium: int = Field(default=50_000, ge=0, le=U32_MAX)
    high: int = Field(default=U32_MAX, ge=0, le=U32_MAX)

    @model_validator(mode="after")
    def _check_increasing(self) -> "RiskThresholds":
        if not self.low < self.medium < self.high:
            raise ValueError(
                f"risk bounds must be strictly increasing, got "
                f"low={self.low} medium={self.medium} high={self.high}"
            )
        return self

    def bound(self, level: RiskLevel) -> int:
        return {
            RiskLevel.LOW: self.low,
            RiskLevel.MEDIUM: self.medium,
            RiskLevel.HIGH: self.high,
        }[level]
