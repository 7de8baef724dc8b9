"""CLI entry point for newsthreads."""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .errors import ConfigError
from .pipeline import Mode

console = Console(stderr=True)

MODES = [m.name.lower() for m in Mode]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@click.command()
@click.argument("mode", type=click.Choice(MODES))
@click.argument("data_dir", default="data", type=click.Path(file_okay=False, path_type=Path))
@click.option("--config", "-c", "config_path", default=None, help="Path to config file")
@click.option("--today", default=None, help="Reference date for freshness (YYYY-MM-DD)")
@click.option("--workers", "-w", type=int, default=None, help="Ingestion worker threads")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(mode, data_dir, config_path, today, workers, verbose):
    """Group HTML news articles into ranked threads.

    MODE is one of: languages, news, categories, threads, top.
    """
    from .output import build_output, dumps
    from .pipeline import Pipeline

    _setup_logging(verbose)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e))
    if today:
        config["today"] = today
    if workers:
        config["workers"] = workers

    if not data_dir.exists():
        console.print(f"[yellow]Data directory not found: {data_dir}[/]")

    try:
        pipeline = Pipeline(config)
    except (ConfigError, ValueError) as e:
        raise click.ClickException(str(e))

    console.print(f"[blue]Running '{mode}' over {data_dir}...[/]")
    result = pipeline.run(Mode.from_name(mode), data_dir)
    click.echo(dumps(build_output(result, config["entities"]["top_n"])))
    console.print(f"[green]✓ {len(result.documents)} document(s) in final stage[/]")


if __name__ == "__main__":
    cli()
