"""
modgate CLI — validate, generate, diff and audit from the command line.

Module fact sheets are read from the JSON documents produced by the module
extractor; checkfiles are YAML.
"""

import asyncio
import functools
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from modgate.audit.logger import AuditLogger
from modgate.core.errors import ModgateError
from modgate.core.report_table import build_table, render_json, render_json_reports
from modgate.models.module_models import Module
from modgate.workers.check_worker import CheckWorker

console = Console()
logger = logging.getLogger("modgate.cli")

DEFAULT_CHECKFILE = "mod.yaml"


def handle_errors(func):
    """Print fatal errors and exit 1 instead of dumping a traceback."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ModgateError as e:
            console.print(f"Error: {e}", style="red", markup=False, highlight=False)
            sys.exit(1)
        except ValidationError as e:
            console.print(f"Invalid module facts: {e}", style="red", markup=False, highlight=False)
            sys.exit(1)
    return wrapper


def load_module(path: str) -> Module:
    return Module.model_validate_json(Path(path).read_text(encoding="utf-8"))


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enables verbose mode.')
@click.option('--quiet', '-q', is_flag=True, help='Enables quiet mode.')
@click.option('--audit-log', type=click.Path(dir_okay=False), default=None,
              help='Append a JSON-lines audit entry per validation to this file.')
@click.pass_context
def app(ctx, verbose, quiet, audit_log):
    """
    modgate — checkfile validation for binary program modules.
    """
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=logging.WARNING)

    audit_logger = AuditLogger(log_path=audit_log, enabled=True) if audit_log else None
    ctx.obj['WORKER'] = CheckWorker(audit_logger=audit_logger)


@app.command()
@click.option('--path', '-p', 'module_path', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Module fact sheet (JSON).')
@click.option('--check', '-c', 'check_path', default=DEFAULT_CHECKFILE, show_default=True,
              type=click.Path(exists=True, dir_okay=False), help='Checkfile (YAML).')
@click.option('--output-format', '-o', type=click.Choice(['table', 'json']), default='table',
              show_default=True)
@click.pass_context
@handle_errors
def validate(ctx, module_path, check_path, output_format):
    """Validate a module against a checkfile. Exits 1 if any check fails."""
    worker: CheckWorker = ctx.obj['WORKER']
    module = load_module(module_path)
    checkfile = Path(check_path).read_text(encoding="utf-8")

    report = asyncio.run(worker.validate(module, checkfile))

    if output_format == 'json':
        click.echo(render_json(report))
    elif report.has_failures():
        console.print(build_table(report))

    ctx.exit(report.exit_code)


@app.command()
@click.option('--path', '-p', 'module_path', required=True,
              type=click.Path(exists=True, dir_okay=False), help='Module fact sheet (JSON).')
@click.option('--output', '-o', 'output_path', default=DEFAULT_CHECKFILE, show_default=True,
              type=click.Path(dir_okay=False), help='Where to write the checkfile; "-" for stdout.')
@click.pass_context
@handle_errors
def generate(ctx, module_path, output_path):
    """Generate a checkfile that the module satisfies exactly."""
    worker: CheckWorker = ctx.obj['WORKER']
    text = worker.generate(load_module(module_path))

    if output_path == '-':
        click.echo(text, nl=False)
        return

    Path(output_path).write_text(text, encoding="utf-8")
    logger.info(f"Wrote checkfile to {output_path}")


@app.command()
@click.argument('module_a', type=click.Path(exists=True, dir_okay=False))
@click.argument('module_b', type=click.Path(exists=True, dir_okay=False))
@click.option('--with-context', is_flag=True, help='Also print unchanged lines.')
@click.option('--color/--no-color', default=None,
              help='Colorize the diff (default: only when writing to a terminal).')
@click.pass_context
@handle_errors
def diff(ctx, module_a, module_b, with_context, color):
    """Diff the checkfiles generated for two modules."""
    worker: CheckWorker = ctx.obj['WORKER']
    if color is None:
        color = sys.stdout.isatty()

    text = worker.diff(
        load_module(module_a), load_module(module_b), color=color, with_context=with_context
    )
    click.echo(text, nl=False, color=color)


@app.command()
@click.option('--check', '-c', 'check_path', default=DEFAULT_CHECKFILE, show_default=True,
              type=click.Path(exists=True, dir_okay=False), help='Checkfile (YAML).')
@click.option('--outcome', type=click.Choice(['pass', 'fail', 'all']), default='all',
              show_default=True, help='Which reports to show.')
@click.option('--output-format', '-o', type=click.Choice(['table', 'json']), default='table',
              show_default=True)
@click.argument('modules', nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.pass_context
@handle_errors
def audit(ctx, check_path, outcome, output_format, modules):
    """Validate many modules against one checkfile."""
    worker: CheckWorker = ctx.obj['WORKER']
    facts = [load_module(path) for path in modules]
    checkfile = Path(check_path).read_text(encoding="utf-8")

    reports = asyncio.run(worker.audit(facts, checkfile, outcome))

    if output_format == 'json':
        click.echo(render_json_reports(reports))
        return

    for i, (module_hash, report) in enumerate(reports.items()):
        if i:
            console.print()
        console.print(f"Report for module: {module_hash}", highlight=False)
        if report.has_failures():
            console.print(build_table(report))
        else:
            console.print("[green]PASS[/green]")


if __name__ == '__main__':
    app()
