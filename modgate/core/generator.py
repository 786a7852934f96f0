"""
Checkfile Generator — Builds the most permissive checkfile a module satisfies.

The result declares every import, namespace and export the module has, caps the
export count and size at their current values, and caps complexity at the
module's current risk level. Used to bootstrap a checkfile and by the differ.
"""

from __future__ import annotations

from modgate.config import current_thresholds
from modgate.core.facts import WASI_NAMESPACE
from modgate.core.risk_classifier import classify
from modgate.core.sizes import format_size
from modgate.models.checkfile_models import (
    Check,
    Complexity,
    Exports,
    FunctionItem,
    ImportItem,
    Imports,
    Namespace,
    NamespaceItem,
    Size,
    Validation,
)
from modgate.models.module_models import Module
from modgate.models.risk_models import RiskThresholds


def generate_checkfile(
    module: Module, thresholds: RiskThresholds | None = None
) -> Validation:
    namespaces = module.get_import_namespaces()

    imports = Imports(
        include=[
            ImportItem.of(
                imp.function.name,
                namespace=imp.namespace,
                params=list(imp.function.signature.params),
                results=list(imp.function.signature.results),
            )
            for imp in module.imports
        ]
    )
    if namespaces:
        imports.namespace = Namespace(
            include=[NamespaceItem(name) for name in namespaces]
        )

    exports = Exports(
        include=[
            FunctionItem.of(
                exp.function.name,
                params=list(exp.function.signature.params),
                results=list(exp.function.signature.results),
            )
            for exp in module.exports
        ],
        max=len({exp.function.name for exp in module.exports}),
    )

    complexity = None
    if module.complexity is not None:
        bounds = thresholds or current_thresholds()
        complexity = Complexity(max_risk=classify(module.complexity, bounds))

    check = Check(
        allow_wasi=True if WASI_NAMESPACE in namespaces else None,
        imports=imports,
        exports=exports,
        size=Size(max=format_size(module.size)),
        complexity=complexity,
    )
    return Validation(check=check)
