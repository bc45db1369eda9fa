# SPDX-License-Identifier: HRUL-1.0
# Copyright (c) 2026 Gabriel Galán Pelayo
"""
Main ollama-audit CLI.

Usage:
  ollama-audit                       # audit with platform defaults
  ollama-audit -m /data/ollama       # explicit models directory
  ollama-audit -l server.log -l server-1.log --dedupe
  ollama-audit version
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from ollama_audit.i18n import t

app = typer.Typer(
    name="ollama-audit",
    help=t("app.description"),
)
console = Console()
logger = logging.getLogger("ollama_audit")


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


@app.callback(invoke_without_command=True)
def audit(
    ctx: typer.Context,
    models_dir: Path = typer.Option(
        None, "--models-dir", "-m", help=t("commands.audit.models_dir")
    ),
    log: list[Path] = typer.Option(None, "--log", "-l", help=t("commands.audit.log")),
    dedupe: bool = typer.Option(False, "--dedupe", help=t("commands.audit.dedupe")),
    verbose: bool = typer.Option(False, "--verbose", "-v", help=t("commands.audit.verbose")),
):
    """Report active, unlogged and deleted models."""
    if ctx.invoked_subcommand is not None:
        return

    from ollama_audit.config import AuditConfig
    from ollama_audit.exceptions import AuditError
    from ollama_audit.logs.correlator import correlate
    from ollama_audit.models.index import build_index
    from ollama_audit.report.tables import build_report, render_report

    _configure_logging(verbose)

    cfg = AuditConfig(models_dir_override=models_dir, log_paths=log or None, dedupe=dedupe)
    try:
        index = build_index(cfg.manifests_dir)
        usages = correlate(index, cfg.discover_logs(), dedupe=cfg.dedupe)
    except AuditError as e:
        console.print(f"[red]{t('cli.error')}[/] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(1)

    report = build_report(usages, index)
    if report.is_empty:
        logger.info("No models found under %s", cfg.manifests_dir)

    # Plain fixed-width text: no wrapping, markup, emoji or highlighting
    console.print(
        render_report(report),
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
    )


@app.command(help=t("commands.version.description"))
def version():
    from ollama_audit import __version__

    console.print(t("cli.version", version=__version__))


if __name__ == "__main__":
    app()
