"""
Audit Logger — Structured JSON-lines audit trail.

Records every validation with: timestamp, module hash, failure count, highest
severity, pass/fail, the remote checkfile URL if one was used, and duration.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from modgate.config import settings
from modgate.models.api_models import AuditEntry

logger = logging.getLogger("modgate.audit")


class AuditLogger:
    """Writes structured audit entries to a JSON-lines file."""

    def __init__(self, log_path: str | None = None, enabled: bool | None = None) -> None:
        self.log_path = Path(log_path or settings.audit_log_path)
        self.enabled = settings.audit_enabled if enabled is None else enabled

    def log(self, entry: AuditEntry) -> None:
        """Append an audit entry to the log file."""
        if not self.enabled:
            return

        record = {
            "timestamp": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
            **entry.model_dump(),
        }

        try:
            with open(self.log_path, "a") as f:
                f.write(json.dumps(record) + "\n")
        except OSError as e:
            logger.error(f"Failed to write audit log: {e}")

    def read_recent(self, count: int = 50, module_hash: str | None = None) -> list[dict]:
        """Most recent N audit entries, optionally for one module only."""
        if not self.log_path.exists():
            return []

        entries: list[dict] = []
        try:
            lines = self.log_path.read_text().splitlines()
        except OSError:
            return []

        for line in filter(None, (raw.strip() for raw in lines)):
            try:
                record = json.loads(line)
            except json.JSONDecodeError:
                logger.warning("Skipping corrupt audit log line")
                continue
            if module_hash is None or record.get("module_hash") == module_hash:
                entries.append(record)

        return entries[-count:]
