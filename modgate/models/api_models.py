"""
API Request/Response Models — Public contract of the HTTP endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from modgate.models.module_models import Module
from modgate.models.rule_models import Report

AuditOutcome = Literal["pass", "fail", "all"]


class ValidateRequest(BaseModel):
    """Request body for /validate."""

    module: Module
    checkfile: str = Field(..., min_length=1, description="Checkfile YAML document")


class ValidateResponse(BaseModel):
    message: str = "validation_complete"
    passed: bool
    report: Report


class GenerateRequest(BaseModel):
    module: Module


class GenerateResponse(BaseModel):
    checkfile: str = Field(..., description="Generated checkfile YAML document")


class DiffRequest(BaseModel):
    a: Module
    b: Module
    with_context: bool = False
    color: bool = False


class DiffResponse(BaseModel):
    diff: str
    identical: bool


class AuditRequest(BaseModel):
    """Request body for /audit: one checkfile against many modules."""

    modules: list[Module] = Field(default_factory=list)
    checkfile: str = Field(..., min_length=1)
    outcome: AuditOutcome = "all"


class AuditResponse(BaseModel):
    reports: dict[str, Report] = Field(
        default_factory=dict, description="Module hash -> report"
    )


class AuditEntry(BaseModel):
    """Audit metadata for a single validation."""

    module_hash: str
    failures: int
    max_severity: int = 0
    passed: bool
    remote_url: str | None = None
    duration_ms: float = 0.0
