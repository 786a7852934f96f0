"""
Validation Routes — POST /validate, POST /audit, GET /audit/log

Validate one module, or many modules, against a checkfile. Checkfile and
fact errors are mapped to HTTP errors by the application's exception handlers.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query

from modgate.api.dependencies import get_audit_logger, get_check_worker
from modgate.audit.logger import AuditLogger
from modgate.models.api_models import (
    AuditRequest,
    AuditResponse,
    ValidateRequest,
    ValidateResponse,
)
from modgate.workers.check_worker import CheckWorker

logger = logging.getLogger("modgate.api.validate")

router = APIRouter()


@router.post("/validate", response_model=ValidateResponse)
async def validate_module(
    request: ValidateRequest,
    worker: CheckWorker = Depends(get_check_worker),
):
    """Validate a module's fact sheet against a checkfile."""
    report = await worker.validate(request.module, request.checkfile)
    return ValidateResponse(passed=not report.has_failures(), report=report)


@router.post("/audit", response_model=AuditResponse)
async def audit_modules(
    request: AuditRequest,
    worker: CheckWorker = Depends(get_check_worker),
):
    """Validate many modules against one checkfile, filtered by outcome."""
    if not request.modules:
        logger.info("Audit requested with no modules")
        return AuditResponse()

    reports = await worker.audit(request.modules, request.checkfile, request.outcome)
    return AuditResponse(reports=reports)


@router.get("/audit/log")
async def audit_log(
    count: int = Query(default=50, ge=1, le=1000),
    module_hash: str | None = None,
    audit_logger: AuditLogger = Depends(get_audit_logger),
):
    """Most recent audit entries, newest last."""
    return {"entries": audit_logger.read_recent(count=count, module_hash=module_hash)}
