"""
Module Differ — Line diff of the checkfiles generated for two modules.

Lines only in A are prefixed "- ", lines only in B "+ ", and unchanged lines
"  " when context is requested. An empty string means the two modules generate
identical checkfiles.
"""

from __future__ import annotations

import difflib

import click

from modgate.config import current_thresholds
from modgate.core.checkfile import dump_rules
from modgate.core.generator import generate_checkfile
from modgate.models.module_models import Module
from modgate.models.risk_models import RiskThresholds


def diff_text(a: str, b: str, color: bool = False, with_context: bool = False) -> str:
    a_lines = a.splitlines()
    b_lines = b.splitlines()
    matcher = difflib.SequenceMatcher(a=a_lines, b=b_lines, autojunk=False)

    output: list[str] = []
    changes = 0

    def emit(sign: str, line: str, fg: str | None) -> None:
        text = f"{sign}{line}"
        if color and fg:
            text = click.style(text, fg=fg)
        output.append(text + "\n")

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            if with_context:
                for line in a_lines[i1:i2]:
                    emit("  ", line, None)
            continue

        for line in a_lines[i1:i2]:
            changes += 1
            emit("- ", line, "red")
        for line in b_lines[j1:j2]:
            changes += 1
            emit("+ ", line, "green")

    if changes == 0:
        return ""
    return "".join(output)


def diff_modules(
    a: Module,
    b: Module,
    color: bool = False,
    with_context: bool = False,
    thresholds: RiskThresholds | None = None,
) -> str:
    """Diff the checkfiles generated for modules `a` and `b`."""
    bounds = thresholds or current_thresholds()
    a_text = dump_rules(generate_checkfile(a, bounds).check)
    b_text = dump_rules(generate_checkfile(b, bounds).check)
    return diff_text(a_text, b_text, color=color, with_context=with_context)
