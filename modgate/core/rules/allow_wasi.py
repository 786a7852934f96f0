"""
WASI Rule — Fails when `allow_wasi: false` and the module imports from the
reserved system interface namespace.
"""

from __future__ import annotations

from modgate.core.facts import FactIndex
from modgate.models.checkfile_models import Check
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Classification, RuleViolation

RULE_ID = "allow_wasi"


def check(
    rules: Check, facts: FactIndex, thresholds: RiskThresholds
) -> list[RuleViolation]:
    if rules.allow_wasi is None:
        return []

    allowed = rules.allow_wasi
    actual = facts.uses_wasi
    if allowed or not actual:
        return []

    return [
        RuleViolation(
            path="allow_wasi",
            expected=str(allowed).lower(),
            actual=str(actual).lower(),
            severity=10,
            classification=Classification.ABI_COMPATIBILITY,
        )
    ]
