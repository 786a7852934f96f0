"""
Fact Index — Lookup tables over a module's imports and exports.

Built once per evaluation and shared by every rule. Namespace + name is the
identity of an import; an export is identified by name alone.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from modgate.models.module_models import FunctionType, Module

WASI_NAMESPACE = "wasi_snapshot_preview1"


@dataclass(frozen=True)
class FactIndex:
    module: Module
    imports: dict[tuple[str, str], FunctionType] = field(default_factory=dict)
    imports_by_name: dict[str, FunctionType] = field(default_factory=dict)
    exports: dict[str, FunctionType] = field(default_factory=dict)
    namespaces: frozenset[str] = frozenset()

    def find_import(self, namespace: str | None, name: str) -> FunctionType | None:
        """Look up an import; without a namespace any namespace matches."""
        if namespace is None:
            return self.imports_by_name.get(name)
        return self.imports.get((namespace, name))

    @property
    def uses_wasi(self) -> bool:
        return WASI_NAMESPACE in self.namespaces


def build_index(module: Module) -> FactIndex:
    imports: dict[tuple[str, str], FunctionType] = {}
    for imp in module.imports:
        imports[(imp.namespace, imp.function.name)] = imp.function.signature
    imports = dict(sorted(imports.items()))

    # Iterates in (namespace, name) order, so the last namespace wins a name clash
    imports_by_name = {name: ty for (_, name), ty in imports.items()}

    exports: dict[str, FunctionType] = {}
    for exp in module.exports:
        exports[exp.function.name] = exp.function.signature

    return FactIndex(
        module=module,
        imports=imports,
        imports_by_name=imports_by_name,
        exports=dict(sorted(exports.items())),
        namespaces=frozenset(module.get_import_namespaces()),
    )
