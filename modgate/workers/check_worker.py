"""
Check Worker — Async orchestrator shared by the HTTP API and the CLI.

Validation pipeline:
1. Parse the checkfile (strict schema)
2. Follow `validate.url` once, if set
3. Run the rule engine against the module's fact sheet
4. Record an audit entry
"""

from __future__ import annotations

import logging
import time

import httpx

from modgate.audit.logger import AuditLogger
from modgate.core.checkfile import dump_checkfile, parse_checkfile, resolve_remote
from modgate.core.diff import diff_modules
from modgate.core.generator import generate_checkfile
from modgate.core.rule_engine import RuleEngine
from modgate.models.api_models import AuditEntry, AuditOutcome
from modgate.models.checkfile_models import Validation
from modgate.models.module_models import Module
from modgate.models.risk_models import RiskThresholds
from modgate.models.rule_models import Report

logger = logging.getLogger("modgate.worker")


class CheckWorker:
    """Runs validations, audits, generation and diffs over in-memory fact sheets."""

    def __init__(
        self,
        audit_logger: AuditLogger | None = None,
        http_client: httpx.AsyncClient | None = None,
        thresholds: RiskThresholds | None = None,
    ) -> None:
        self.audit_logger = audit_logger
        self.http_client = http_client
        self.thresholds = thresholds
        self.rule_engine = RuleEngine()

    async def load(self, checkfile: str | bytes | Validation) -> Validation:
        """Parse a checkfile and resolve its remote indirection."""
        validation = (
            checkfile if isinstance(checkfile, Validation) else parse_checkfile(checkfile)
        )
        return await resolve_remote(validation, self.http_client)

    async def validate(self, module: Module, checkfile: str | bytes | Validation) -> Report:
        start = time.monotonic()
        original = (
            checkfile if isinstance(checkfile, Validation) else parse_checkfile(checkfile)
        )
        validation = await self.load(original)
        report = self.rule_engine.run(validation, module, self.thresholds)
        elapsed = (time.monotonic() - start) * 1000

        self._audit(module, report, original.check.url, elapsed)
        return report

    async def audit(
        self,
        modules: list[Module],
        checkfile: str | bytes | Validation,
        outcome: AuditOutcome = "all",
    ) -> dict[str, Report]:
        """
        Validate many modules against one checkfile.

        Args:
            modules: Fact sheets to check.
            checkfile: Checkfile text or parsed document; fetched remotely at most once.
            outcome: Keep only reports that "pass", that "fail", or "all".

        Returns:
            Mapping of module hash to report, in input order.
        """
        original = (
            checkfile if isinstance(checkfile, Validation) else parse_checkfile(checkfile)
        )
        validation = await self.load(original)

        reports: dict[str, Report] = {}
        for module in modules:
            start = time.monotonic()
            report = self.rule_engine.run(validation, module, self.thresholds)
            self._audit(module, report, original.check.url, (time.monotonic() - start) * 1000)

            failed = report.has_failures()
            if outcome == "all" or (outcome == "fail") == failed:
                reports[module.hash] = report

        logger.info(
            f"Audited {len(modules)} module(s), {len(reports)} matched outcome '{outcome}'"
        )
        return reports

    def generate(self, module: Module, header: bool = True) -> str:
        """Checkfile YAML that exactly admits `module`."""
        return dump_checkfile(generate_checkfile(module, self.thresholds), header=header)

    def diff(
        self, a: Module, b: Module, color: bool = False, with_context: bool = False
    ) -> str:
        return diff_modules(
            a, b, color=color, with_context=with_context, thresholds=self.thresholds
        )

    def _audit(
        self, module: Module, report: Report, remote_url: str | None, duration_ms: float
    ) -> None:
        if self.audit_logger is None:
            return
        self.audit_logger.log(
            AuditEntry(
                module_hash=module.hash,
                failures=len(report.fails),
                max_severity=report.max_severity,
                passed=not report.has_failures(),
                remote_url=remote_url,
                duration_ms=round(duration_ms, 2),
            )
        )
