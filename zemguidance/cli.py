"""
Command Line Interface for zemguidance.
"""

import sys
import json
import logging
from dataclasses import replace
from typing import Optional, Tuple
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from .core.config import ConfigurationError, load_config
from .guidance.algorithms.optimal_guidance import create_optimal_guidance_law


console = Console()


def setup_logging(verbose: bool = False, debug: bool = False):
    """Setup logging configuration."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", "-v", is_flag=True, help="Enable info logging")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def cli(verbose: bool, debug: bool):
    """zemguidance Optimal Guidance Law CLI"""
    setup_logging(verbose=verbose, debug=debug)


@cli.command()
@click.option("--zem", nargs=3, type=float, required=True, help="Zero-Effort-Miss vector X Y Z")
@click.option("--zev", nargs=3, type=float, required=True, help="Zero-Effort-Velocity vector X Y Z")
@click.option("--time-to-go", "-t", type=float, help="Time-to-go [s]")
@click.option("--zem-gain", type=float, help="Override the ZEM gain")
@click.option("--zev-gain", type=float, help="Override the ZEV gain")
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
def evaluate(
    zem: Tuple[float, float, float],
    zev: Tuple[float, float, float],
    time_to_go: Optional[float],
    zem_gain: Optional[float],
    zev_gain: Optional[float],
    config: Optional[str],
    as_json: bool
):
    """Evaluate the optimal guidance law for one ZEM/ZEV pair."""
    try:
        guidance_config = load_config(config)
        overrides = {"zem_gain": zem_gain, "zev_gain": zev_gain}
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if overrides:
            guidance_config = replace(guidance_config, **overrides)

        if time_to_go is None:
            time_to_go = guidance_config.time_to_go
        if time_to_go is None:
            raise click.UsageError("--time-to-go is required when the configuration has none")
        if time_to_go == 0:
            raise click.UsageError("--time-to-go must be non-zero")

        guidance_law = create_optimal_guidance_law(guidance_config)
        status = guidance_law.get_guidance_status(zem, zev, time_to_go)

    except (click.UsageError, ConfigurationError) as e:
        console.print(f"[red]Error: {e}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(status, indent=2))
        return

    table = Table(title="Optimal Guidance Law Command")
    table.add_column("Axis", style="cyan")
    table.add_column("ZEM", justify="right")
    table.add_column("ZEV", justify="right")
    table.add_column("Command", justify="right", style="green")

    for axis, miss, velocity, command in zip("xyz", zem, zev, status["control_command"]):
        table.add_row(axis, f"{miss:.6f}", f"{velocity:.6f}", f"{command:.6f}")

    console.print(table)
    console.print(
        f"time-to-go: {status['time_to_go']:.6f} s, "
        f"gains: ({status['gains']['zem_gain']}, {status['gains']['zev_gain']}), "
        f"|u|: {status['control_magnitude']:.6f}"
    )


@cli.command("config-show")
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
def config_show(config: Optional[str]):
    """Show current configuration."""
    try:
        guidance_config = load_config(config)
    except ConfigurationError as e:
        console.print(f"[red]Error loading configuration: {e}")
        sys.exit(1)

    config_dict = guidance_config.to_dict()
    console.print(Panel(
        json.dumps(config_dict, indent=2),
        title="zemguidance Configuration",
        border_style="blue"
    ))


def main():
    """Main CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
