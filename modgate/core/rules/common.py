"""
Shared helpers for checkfile rules.
"""

from __future__ import annotations

from typing import Sequence

from modgate.models.module_models import FunctionType, ValType
from modgate.models.rule_models import Classification, RuleViolation

SIGNATURE_SEVERITY = 8


def exist(present: bool) -> str:
    return "included" if present else "excluded"


def render_types(types: Sequence[ValType]) -> str:
    return "[" + ", ".join(t.value for t in types) + "]"


def check_signature(
    path: str,
    actual: FunctionType,
    params: Sequence[ValType] | None,
    results: Sequence[ValType] | None,
) -> list[RuleViolation]:
    """Compare declared params/results with the actual signature, side by side."""
    violations: list[RuleViolation] = []

    for side, expected, found in (
        ("params", params, actual.params),
        ("results", results, actual.results),
    ):
        if expected is None or tuple(expected) == tuple(found):
            continue
        violations.append(
            RuleViolation(
                path=f"{path}.{side}",
                expected=render_types(expected),
                actual=render_types(found),
                severity=SIGNATURE_SEVERITY,
                classification=Classification.ABI_COMPATIBILITY,
            )
        )

    return violations
