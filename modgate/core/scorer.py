"""
modgate — Severity scoring for bounded checks.

All severities are clamped to 0..10.

    overage  →  ceil((actual - limit) / limit × 10)   (exports.max)
    ratio    →  floor(actual / limit)                  (size.max, complexity.max_risk)

A limit of 0 is treated as 1 so the score stays defined.
"""

from __future__ import annotations

from enum import Enum

from modgate.models.rule_models import SEVERITY_MAX


class Scaling(str, Enum):
    OVERAGE = "overage"
    RATIO = "ratio"


def clamp(severity: int) -> int:
    return max(0, min(SEVERITY_MAX, severity))


def severity(actual: int, limit: int, scaling: Scaling) -> int:
    """Severity of `actual` measured against `limit`."""
    divisor = limit if limit > 0 else 1
    if scaling is Scaling.OVERAGE:
        overage = max(0, actual - limit)
        return clamp(-(-overage * 10 // divisor))
    return clamp(actual // divisor)
