"""
Rule Engine — Evaluates a checkfile against a module's fact sheet.

Runs every registered rule group against the module and collects the failing
checks into a Report. Rules are pure functions — no I/O, no randomness.
Fatal errors (bad checkfile, missing facts) propagate to the caller; rule
failures never raise.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from modgate.config import current_thresholds
from modgate.core.facts import FactIndex, build_index
from modgate.core.rules import allow_wasi, complexity, exports, imports, size
from modgate.core.sizes import parse_size
from modgate.models.checkfile_models import Check, Validation
from modgate.models.module_models import Module
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Report, RuleViolation

logger = logging.getLogger("modgate.engine")

# Type for a rule check function
RuleCheckFn = Callable[[Check, FactIndex, RiskThresholds], list[RuleViolation]]

# Registry of all checkfile rule groups
RULE_REGISTRY: dict[str, RuleCheckFn] = {
    allow_wasi.RULE_ID: allow_wasi.check,
    imports.RULE_ID: imports.check,
    exports.RULE_ID: exports.check,
    size.RULE_ID: size.check,
    complexity.RULE_ID: complexity.check,
}


class RuleEngine:
    """
    Checkfile rule engine.

    Each rule group is independent; all present groups run, and the report
    is keyed by property path so identical inputs give identical reports.
    """

    def __init__(self, rules: dict[str, RuleCheckFn] | None = None) -> None:
        self.rules = rules or RULE_REGISTRY

    def run(
        self,
        validation: Validation | Check,
        module: Module,
        thresholds: RiskThresholds | None = None,
    ) -> Report:
        """
        Validate a module against a checkfile.

        Args:
            validation: Parsed checkfile (the whole document or its `validate` body).
            module: Fact sheet of the module under test.
            thresholds: Complexity risk bounds; read from the environment if omitted.

        Returns:
            Report containing only the failing checks.

        Raises:
            CheckfileSchemaError: the checkfile asks for something unsupported.
            ModuleFactError: a check needs a fact the module does not carry.
        """
        rules = validation.check if isinstance(validation, Validation) else validation
        bounds = thresholds or current_thresholds()
        _preflight(rules)

        start = time.monotonic()
        facts = build_index(module)
        violations: list[RuleViolation] = []

        for rule_id, check_fn in self.rules.items():
            found = check_fn(rules, facts, bounds)
            if found:
                logger.debug(f"Rule '{rule_id}' produced {len(found)} failure(s)")
            violations.extend(found)

        report = Report.from_violations(violations)
        elapsed = (time.monotonic() - start) * 1000
        logger.info(
            f"Validated module {module.hash or '<unhashed>'}: "
            f"{len(report.fails)} failure(s) in {elapsed:.2f}ms"
        )
        return report


def _preflight(rules: Check) -> None:
    """Reject a malformed checkfile before any rule is evaluated."""
    if rules.size is not None and rules.size.max is not None:
        parse_size(rules.size.max)
    if rules.complexity is not None:
        complexity.max_risk(rules.complexity)


def validate(
    validation: Validation | Check,
    module: Module,
    thresholds: RiskThresholds | None = None,
) -> Report:
    """Evaluate `validation` against `module` with the default rule set."""
    return RuleEngine().run(validation, module, thresholds)
