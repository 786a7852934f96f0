"""
Exports Rule — Validates the functions a module exports.

Unlike imports, `exports.include` is a required set: every declared export must
be present, while extra exports are not a failure. `exports.max` bounds the
export count.
"""

from __future__ import annotations

from modgate.core.facts import FactIndex
from modgate.core.rules.common import check_signature, exist
from modgate.core.scorer import Scaling, severity
from modgate.models.checkfile_models import Check
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Classification, RuleViolation

RULE_ID = "exports"


def check(
    rules: Check, facts: FactIndex, thresholds: RiskThresholds
) -> list[RuleViolation]:
    exports = rules.exports
    if exports is None:
        return []

    violations: list[RuleViolation] = []

    if exports.max is not None:
        count = len(facts.exports)
        if count > exports.max:
            violations.append(
                RuleViolation(
                    path="exports.max",
                    expected=f"<= {exports.max}",
                    actual=str(count),
                    severity=severity(count, exports.max, Scaling.OVERAGE),
                    classification=Classification.SECURITY,
                )
            )

    for fn in exports.include or []:
        path = f"exports.include.{fn.name}"
        actual_ty = facts.exports.get(fn.name)
        if actual_ty is None:
            violations.append(
                RuleViolation(
                    path=path,
                    expected=exist(True),
                    actual=exist(False),
                    severity=10,
                    classification=Classification.ABI_COMPATIBILITY,
                )
            )
            continue
        violations.extend(check_signature(path, actual_ty, fn.params, fn.results))

    for fn in exports.exclude or []:
        path = f"exports.exclude.{fn.name}"
        actual_ty = facts.exports.get(fn.name)
        if actual_ty is None:
            continue
        violations.extend(check_signature(path, actual_ty, fn.params, fn.results))
        violations.append(
            RuleViolation(
                path=path,
                expected=exist(False),
                actual=exist(True),
                severity=5,
                classification=Classification.ABI_COMPATIBILITY,
            )
        )

    return violations
