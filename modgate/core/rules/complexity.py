"""
Complexity Rule — Bounds the module's cyclomatic complexity by risk level.

Only `complexity.max_risk` is supported; `max_score` is accepted by the
checkfile schema but rejected here.
"""

from __future__ import annotations

from modgate.core.errors import CheckfileSchemaError, ModuleFactError
from modgate.core.facts import FactIndex
from modgate.core.risk_classifier import classify
from modgate.core.scorer import Scaling, severity
from modgate.models.checkfile_models import Check, Complexity
from modgate.models.risk_models import RiskLevel, RiskThresholds
from modgate.models.rule_models import Classification, RuleViolation

RULE_ID = "complexity"


def max_risk(complexity: Complexity) -> RiskLevel:
    """The requested risk bound, or raise if the rule is not one we can evaluate."""
    if complexity.max_risk is None and complexity.max_score is None:
        raise CheckfileSchemaError("No complexity check found.")
    if complexity.max_score is not None:
        raise CheckfileSchemaError(
            "Only `complexity.max_risk` is currently supported."
        )
    return complexity.max_risk


def check(
    rules: Check, facts: FactIndex, thresholds: RiskThresholds
) -> list[RuleViolation]:
    if rules.complexity is None:
        return []

    risk = max_risk(rules.complexity)
    score = facts.module.complexity
    if score is None:
        raise ModuleFactError(
            "Could not determine module complexity, please remove the "
            "complexity parameter from your checkfile."
        )

    limit = thresholds.bound(risk)
    if score <= limit:
        return []

    return [
        RuleViolation(
            path="complexity.max_risk",
            expected=f"<= {risk.value}",
            actual=classify(score, thresholds).value,
            severity=severity(score, limit, Scaling.RATIO),
            classification=Classification.RESOURCE_LIMIT,
        )
    ]
