"""Analyze command: run the engine over a declarations file."""

from pathlib import Path
from typing import Optional

import click
import typer
from rich.markup import escape

from ..analysis.engine import AnalysisEngine
from ..declarations.loader import load_declarations_file
from ..exceptions import ArchInsightError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import err_console, resolve_config


@app.command()
def analyze(
    declarations: Path = typer.Argument(
        ...,
        help="JSON file of declarations produced by a source parser",
    ),
    output_format: str = typer.Option(
        "rich",
        "--format",
        "-f",
        help="Output format: rich | json",
        click_type=click.Choice(["rich", "json"], case_sensitive=False),
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Debug logging, suggestions, packages and diagnostics",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        help="DDD role inclusion threshold (0.0-1.0)",
    ),
    raw_scores: bool = typer.Option(
        False,
        "--raw-scores",
        help="Include raw role scores for every declaration",
    ),
    diagnostics: bool = typer.Option(
        False,
        "--diagnostics",
        help="Include extraction and resolution diagnostics",
    ),
):
    """
    Analyze declarations: dependency graph, cycles, layers, pattern and DDD roles.

    [bold cyan]Examples:[/bold cyan]

      arch-insight analyze declarations.json

      arch-insight analyze declarations.json --format json --raw-scores

      arch-insight analyze declarations.json -t 0.5 --verbose
    """
    logger = setup_logging(verbose=verbose, quiet=quiet)

    try:
        settings = resolve_config(
            config=config,
            threshold=threshold,
            raw_scores=raw_scores,
            diagnostics=diagnostics or verbose,
            verbose=verbose,
            quiet=quiet,
        )
        decls, load_diagnostics = load_declarations_file(declarations)
        result = AnalysisEngine(settings).run(decls, upstream_diagnostics=load_diagnostics)

    except ArchInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1)

    formatter = get_formatter(output_format.lower(), verbose=verbose)
    if output_format.lower() == "json":
        typer.echo(formatter.format(result))
    else:
        formatter.render(result)
