"""
Command-line interface for sedcluster.

Thin wrapper over ``DistanceService``; any ``SedError`` becomes exit status 1.
"""

import sys
from pathlib import Path

import click
from rich.console import Console

from . import __version__
from .config import ConfigManager, create_default_config_file, load_config
from .errors import SedError
from .service import DistanceService, artifact_exists
from .utils.logging_setup import setup_logging


console = Console()
err_console = Console(stderr=True)


def _fail(error: SedError):
    err_console.print(f"[red]✗ {error.message}[/red]")
    sys.exit(1)


@click.group(name="sedcluster")
@click.version_option(__version__, prog_name="sedcluster")
def cli():
    """Pairwise token edit distances for clustering."""
    pass


@cli.command(name="compute")
@click.argument("input_path", type=click.Path(dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Path to config file")
@click.option("--workers", type=int, default=None,
              help="Worker count (0 = one per CPU)")
@click.option("--processes", is_flag=True, default=False,
              help="Use processes instead of threads")
@click.option("--force", is_flag=True, default=False,
              help="Recompute even if OUTPUT_PATH exists")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Debug logging")
def compute(input_path, output_path, config_path, workers, processes, force, verbose):
    """Compute distances between the lines of INPUT_PATH into OUTPUT_PATH."""
    config = load_config(Path(config_path) if config_path else None)
    if workers is not None:
        config.workers = workers
    if processes:
        config.use_processes = True
    if force:
        config.reuse_existing = False
    if not config.validate():
        err_console.print("[red]✗ Configuration has validation errors[/red]")
        sys.exit(1)

    setup_logging(level="DEBUG" if verbose else config.log_level)

    service = DistanceService(input_path, output_path, config)
    try:
        computed = service.compute_and_persist()
    except SedError as e:
        _fail(e)

    if computed:
        console.print(f"[green]✓ Wrote {len(service.matrix)} distances to {output_path}[/green]")
    else:
        console.print(f"[yellow]{output_path} already exists, nothing to do[/yellow]")


@cli.command(name="get")
@click.argument("distance_path", type=click.Path(dir_okay=False))
@click.argument("i", type=int)
@click.argument("j", type=int)
def get(distance_path, i, j):
    """Print the distance between lines I and J stored in DISTANCE_PATH."""
    service = DistanceService(None, distance_path)
    try:
        distance = service.get_distance(i, j)
    except SedError as e:
        _fail(e)
    click.echo(repr(distance))


@cli.command(name="exists")
@click.argument("output_path", type=click.Path(dir_okay=False))
def exists(output_path):
    """Exit 0 if OUTPUT_PATH exists, 1 otherwise."""
    if artifact_exists(output_path):
        console.print(f"[green]{output_path} exists[/green]")
    else:
        console.print(f"[yellow]{output_path} does not exist[/yellow]")
        sys.exit(1)


@cli.group(name="config")
def config_group():
    """Manage sedcluster configuration."""
    pass


@config_group.command(name="init")
@click.option("--path", type=click.Path(), default=ConfigManager.DEFAULT_CONFIG_FILE,
              help="Path for config file")
def config_init(path):
    """Write a default configuration file."""
    config_path = Path(path)
    if config_path.exists():
        if not click.confirm(f"Config file {path} already exists. Overwrite?"):
            console.print("[yellow]Aborted[/yellow]")
            return
    create_default_config_file(config_path)
    console.print(f"[green]✓ Created config file at {path}[/green]")


@config_group.command(name="show")
@click.option("--path", type=click.Path(exists=True), help="Path to config file")
def config_show(path):
    """Display the current configuration."""
    ConfigManager(Path(path) if path else None).display()


def main():
    cli()


if __name__ == "__main__":
    main()
