"""
cli — tagtranslit command line (typer + rich).

Usage: tagtranslit [-n] [-t] [-r] [-m MappingFile] file(s) | folder(s)
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import load_config
from .errors import ConfigError, MapLoadError
from .logging_setup import setup_logging
from .processor import Outcome, TranslitContext, process_files
from .translit import load_map, resolve_map_path
from .walker import collect

console = Console(highlight=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, soft_wrap=True)

EPILOG = (
    "Examples:\n\n"
    "  tagtranslit Mp3File.mp3\n\n"
    "  tagtranslit \"~/Music/Rock\"\n\n"
    "  tagtranslit -n -r -m MyTranslitMap.xml Mp3File.mp3 ~/Music"
)

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool):
    if value:
        console.print(f"tagtranslit {__version__}")
        raise typer.Exit()


def _report(outcome: Outcome):
    path = escape(str(outcome.path))
    if not outcome.ok:
        console.print(f"[red]✗[/red] {path} - failed ({escape(outcome.message)})")
    elif outcome.renamed:
        console.print(f"[green]✓[/green] {path} → {escape(outcome.new_path.name)}")
    else:
        console.print(f"[green]✓[/green] {path}")


@app.command(no_args_is_help=True, epilog=EPILOG)
def main(
    paths: List[Path] = typer.Argument(..., help="Files and/or folders to process."),
    map_path: Optional[Path] = typer.Option(
        None, "-m", "--map",
        help="File with the transliteration map. Default.xml is used if omitted.",
    ),
    no_name: bool = typer.Option(False, "-n", "--name", help="Don't transliterate file names."),
    no_tag: bool = typer.Option(False, "-t", "--tag", help="Don't transliterate tags."),
    recursive: bool = typer.Option(False, "-r", "--recursive", help="Recursive folder processing."),
    config_path: Optional[Path] = typer.Option(None, "-c", "--config", help="YAML config file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit.",
    ),
):
    """Mp3 tag and file name transliterator: repairs cp1251 mojibake, then transliterates."""
    try:
        cfg = load_config(config_path)
        setup_logging(log_level or cfg.log_level)
        recovery = cfg.recovery_settings()
        table = load_map(resolve_map_path(map_path or cfg.default_map))
    except (ConfigError, MapLoadError) as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=2)

    ctx = TranslitContext(table=table, recovery=recovery, rename=not no_name, retag=not no_tag)
    files = collect(paths, recursive)
    if not files:
        console.print("[yellow]No files found.[/yellow]")
        raise typer.Exit(code=0)

    report = process_files(files, ctx, on_outcome=_report)

    failed = len(report.failures)
    if failed:
        console.print(f"\n[red]{failed} of {len(report.outcomes)} file(s) failed.[/red]")
    else:
        console.print(f"\n[green]Done: {len(report.outcomes)} file(s) processed.[/green]")
    raise typer.Exit(code=report.exit_code)
