"""
Risk Classifier — Maps a complexity score to a Low / Medium / High bucket.
"""

from __future__ import annotations

from modgate.config import current_thresholds
from modgate.models.risk_models import RiskLevel, RiskThresholds


def classify(score: int, thresholds: RiskThresholds | None = None) -> RiskLevel:
    """Smallest risk level whose bound is >= score."""
    bounds = thresholds or current_thresholds()
    if score <= bounds.low:
        return RiskLevel.LOW
    if score <= bounds.medium:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def bound(level: RiskLevel, thresholds: RiskThresholds | None = None) -> int:
    """Inclusive upper complexity bound of `level`."""
    bounds = thresholds or current_thresholds()
    return bounds.bound(level)
