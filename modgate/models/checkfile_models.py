"""
Checkfile Data Models — The declarative policy a module is validated against.

Every level forbids unknown keys, so a malformed or newer checkfile fails to
parse instead of being partially honoured. Rule items accept either a bare name
or a detailed mapping.
"""

from __future__ import annotations

from typing import Union

from pydantic import BaseModel, ConfigDict, Field, RootModel

from modgate.models.module_models import ValType
from modgate.models.risk_models import RiskLevel


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid")


# ── Rule items ──


class ImportDetail(_Strict):
    namespace: str | None = None
    name: str
    params: list[ValType] | None = None
    results: list[ValType] | None = None


class FunctionDetail(_Strict):
    name: str
    params: list[ValType] | None = None
    results: list[ValType] | None = None


class ImportItem(RootModel[Union[str, ImportDetail]]):
    """An import rule: `name` or `{namespace, name, params, results}`."""

    @classmethod
    def of(
        cls,
        name: str,
        namespace: str | None = None,
        params: list[ValType] | None = None,
        results: list[ValType] | None = None,
    ) -> "ImportItem":
        if namespace is None and params is None and results is None:
            return cls(name)
        return cls(
            ImportDetail(namespace=namespace, name=name, params=params, results=results)
        )

    @property
    def name(self) -> str:
        return self.root if isinstance(self.root, str) else self.root.name

    @property
    def namespace(self) -> str | None:
        return None if isinstance(self.root, str) else self.root.namespace

    @property
    def params(self) -> list[ValType] | None:
        return None if isinstance(self.root, str) else self.root.params

    @property
    def results(self) -> list[ValType] | None:
        return None if isinstance(self.root, str) else self.root.results

    def matches(self, namespace: str, name: str) -> bool:
        """A bare item matches `name` in any namespace."""
        if self.name != name:
            return False
        return self.namespace is None or self.namespace == namespace

    def path(self) -> str:
        if self.namespace is None:
            return self.name
        return f"{self.namespace}::{self.name}"


class FunctionItem(RootModel[Union[str, FunctionDetail]]):
    """An export (or namespace function) rule: `name` or `{name, params, results}`."""

    @classmethod
    def of(
        cls,
        name: str,
        params: list[ValType] | None = None,
        results: list[ValType] | None = None,
    ) -> "FunctionItem":
        if params is None and results is None:
            return cls(name)
        return cls(FunctionDetail(name=name, params=params, results=results))

    @property
    def name(self) -> str:
        return self.root if isinstance(self.root, str) else self.root.name

    @property
    def params(self) -> list[ValType] | None:
        return None if isinstance(self.root, str) else self.root.params

    @property
    def results(self) -> list[ValType] | None:
        return None if isinstance(self.root, str) else self.root.results


class NamespaceDetail(_Strict):
    name: str
    functions: list[FunctionItem] = Field(default_factory=list)


class NamespaceItem(RootModel[Union[str, NamespaceDetail]]):
    """A namespace rule: `name` or `{name, functions}`."""

    @property
    def name(self) -> str:
        return self.root if isinstance(self.root, str) else self.root.name

    @property
    def functions(self) -> list[FunctionItem]:
        return [] if isinstance(self.root, str) else self.root.functions


# ── Rule groups ──


class Namespace(_Strict):
    include: list[NamespaceItem] | None = None
    exclude: list[NamespaceItem] | None = None


class Imports(_Strict):
    include: list[ImportItem] | None = None
    exclude: list[ImportItem] | None = None
    namespace: Namespace | None = None


class Exports(_Strict):
    include: list[FunctionItem] | None = None
    exclude: list[FunctionItem] | None = None
    max: int | None = Field(default=None, ge=0)


class Size(_Strict):
    max: str | None = Field(default=None, description="Human readable size, e.g. '4 MiB'")


class Complexity(_Strict):
    max_risk: RiskLevel | None = None
    max_score: int | None = Field(default=None, ge=0)


class Check(_Strict):
    url: str | None = Field(
        default=None, description="Remote location of the checkfile to use instead"
    )
    allow_wasi: bool | None = None
    imports: Imports | None = None
    exports: Exports | None = None
    size: Size | None = None
    complexity: Complexity | None = None


class Validation(_Strict):
    """Top-level checkfile document: `validate: {...}`."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    check: Check = Field(..., alias="validate")
