"""
FastAPI Dependencies — Shared singletons injected via Depends().
"""

from __future__ import annotations

from functools import lru_cache

from modgate.audit.logger import AuditLogger
from modgate.workers.check_worker import CheckWorker


@lru_cache
def get_audit_logger() -> AuditLogger:
    """Shared audit logger singleton."""
    return AuditLogger()


@lru_cache
def get_check_worker() -> CheckWorker:
    """Shared check worker singleton."""
    return CheckWorker(audit_logger=get_audit_logger())
