"""
Size Rule — Bounds the module's size in bytes.
"""

from __future__ import annotations

from modgate.core.facts import FactIndex
from modgate.core.scorer import Scaling, severity
from modgate.core.sizes import format_size, parse_size
from modgate.models.checkfile_models import Check
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Classification, RuleViolation

RULE_ID = "size"


def check(
    rules: Check, facts: FactIndex, thresholds: RiskThresholds
) -> list[RuleViolation]:
    if rules.size is None or rules.size.max is None:
        return []

    limit = parse_size(rules.size.max)
    actual = facts.module.size
    if actual <= limit:
        return []

    return [
        RuleViolation(
            path="size.max",
            expected=f"<= {rules.size.max}",
            actual=format_size(actual),
            severity=severity(actual, limit, Scaling.RATIO),
            classification=Classification.RESOURCE_LIMIT,
        )
    ]
