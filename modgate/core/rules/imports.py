"""
Imports Rule — Validates the functions and namespaces a module imports.

`imports.include` is a whitelist over what the module actually imports: every
import must be declared, while declared imports the module does not use are fine.
`imports.exclude` and `imports.namespace.exclude` are blacklists.
`imports.namespace.include` is a required set of namespaces (and functions).
"""

from __future__ import annotations

from modgate.core.facts import FactIndex
from modgate.core.rules.common import check_signature, exist
from modgate.models.checkfile_models import Check, ImportItem, NamespaceItem
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Classification, RuleViolation

RULE_ID = "imports"


def check(
    rules: Check, facts: FactIndex, thresholds: RiskThresholds
) -> list[RuleViolation]:
    imports = rules.imports
    if imports is None:
        return []

    violations: list[RuleViolation] = []

    if imports.include is not None:
        violations.extend(_check_include(imports.include, facts))

    if imports.exclude is not None:
        violations.extend(_check_exclude(imports.exclude, facts))

    if imports.namespace is not None:
        if imports.namespace.include is not None:
            violations.extend(_check_namespace_include(imports.namespace.include, facts))
        if imports.namespace.exclude is not None:
            violations.extend(_check_namespace_exclude(imports.namespace.exclude, facts))

    return violations


def _check_include(include: list[ImportItem], facts: FactIndex) -> list[RuleViolation]:
    violations: list[RuleViolation] = []

    for (namespace, name), actual_ty in facts.imports.items():
        path = f"imports.include.{namespace}::{name}"
        declared = next((item for item in include if item.matches(namespace, name)), None)

        if declared is None:
            violations.append(
                RuleViolation(
                    path=path,
                    expected=exist(False),
                    actual=exist(True),
                    severity=8,
                    classification=Classification.ABI_COMPATIBILITY,
                )
            )
            continue

        violations.extend(
            check_signature(path, actual_ty, declared.params, declared.results)
        )

    return violations


def _check_exclude(exclude: list[ImportItem], facts: FactIndex) -> list[RuleViolation]:
    violations: list[RuleViolation] = []

    for item in exclude:
        path = f"imports.exclude.{item.path()}"
        actual_ty = facts.find_import(item.namespace, item.name)
        present = actual_ty is not None

        if not present:
            continue

        violations.extend(check_signature(path, actual_ty, item.params, item.results))
        violations.append(
            RuleViolation(
                path=path,
                expected=exist(False),
                actual=exist(present),
                severity=5,
                classification=Classification.ABI_COMPATIBILITY,
            )
        )

    return violations


def _check_namespace_include(
    include: list[NamespaceItem], facts: FactIndex
) -> list[RuleViolation]:
    violations: list[RuleViolation] = []

    for ns in include:
        present = ns.name in facts.namespaces
        if not present:
            violations.append(
                RuleViolation(
                    path=f"imports.namespace.include.{ns.name}",
                    expected=exist(True),
                    actual=exist(present),
                    severity=8,
                    classification=Classification.ABI_COMPATIBILITY,
                )
            )

        for fn in ns.functions:
            path = f"imports.namespace.include.{ns.name}::{fn.name}"
            actual_ty = facts.find_import(ns.name, fn.name)
            if actual_ty is None:
                violations.append(
                    RuleViolation(
                        path=path,
                        expected=exist(True),
                        actual=exist(False),
                        severity=8,
                        classification=Classification.ABI_COMPATIBILITY,
                    )
                )
                continue
            violations.extend(check_signature(path, actual_ty, fn.params, fn.results))

    return violations


def _check_namespace_exclude(
    exclude: list[NamespaceItem], facts: FactIndex
) -> list[RuleViolation]:
    violations: list[RuleViolation] = []

    for ns in exclude:
        present = ns.name in facts.namespaces
        if present:
            violations.append(
                RuleViolation(
                    path=f"imports.namespace.exclude.{ns.name}",
                    expected=exist(False),
                    actual=exist(present),
                    severity=10,
                    classification=Classification.ABI_COMPATIBILITY,
                )
            )

        for fn in ns.functions:
            path = f"imports.namespace.exclude.{ns.name}::{fn.name}"
            actual_ty = facts.find_import(ns.name, fn.name)
            if actual_ty is None:
                continue
            violations.extend(check_signature(path, actual_ty, fn.params, fn.results))
            violations.append(
                RuleViolation(
                    path=path,
                    expected=exist(False),
                    actual=exist(True),
                    severity=10,
                    classification=Classification.ABI_COMPATIBILITY,
                )
            )

    return violations
