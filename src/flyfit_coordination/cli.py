"""Command-line interface for flyfit-coordination."""

import asyncio
import json
import logging
import sys
from typing import Optional

import click
from prometheus_client import generate_latest

from .config import Config
from .coordination import GuardMode
from .demo import run_debounce_demo, run_guard_demo, run_queue_demo
from .metrics import MetricsCollector, get_metrics
from .utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _load_config(ctx: click.Context, **overrides) -> Config:
    """Resolve configuration from global options, command options and env."""
    cli_args = dict(ctx.obj or {})
    cli_args.update({k: v for k, v in overrides.items() if v is not None})
    try:
        config = Config.from_args_and_env(cli_args)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    setup_logging(level=config.log_level, format_type=config.log_format)
    return config


def _collector(config: Config) -> Optional[MetricsCollector]:
    return get_metrics() if config.metrics_enabled else None


def _echo_result(result: dict, metrics: Optional[MetricsCollector], show_metrics: bool) -> None:
    click.echo(json.dumps(result, indent=2))
    if show_metrics and metrics is not None:
        click.echo(generate_latest(metrics.registry).decode())


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: INFO)",
)
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    help="Log format (default: json)",
)
@click.option(
    "--metrics/--no-metrics",
    default=None,
    help="Enable/disable Prometheus metrics (default: enabled)",
)
@click.pass_context
def cli(ctx, log_level, log_format, metrics):
    """flyfit-coordination - Sequential queue, debouncer and exclusion guard."""
    ctx.obj = {
        k: v
        for k, v in {
            "log_level": log_level,
            "log_format": log_format,
            "metrics": metrics,
        }.items()
        if v is not None
    }


@cli.command("queue-demo")
@click.option("--operations", type=int, help="Number of operations to enqueue (default: 3)")
@click.option("--delay", type=float, help="Delay unit in seconds (default: 0.05)")
@click.option(
    "--abort-after",
    type=int,
    default=None,
    help="Abort the queue after N operations complete",
)
@click.option("--show-metrics", is_flag=True, help="Print Prometheus metrics afterwards")
@click.pass_context
def queue_demo(ctx, operations, delay, abort_after, show_metrics):
    """Enqueue operations with shrinking delays and print completion order.

    Examples:

    \b
      flyfit-coordination queue-demo --operations 5
      flyfit-coordination queue-demo --operations 5 --abort-after 2
    """
    config = _load_config(ctx, operations=operations, delay=delay)
    metrics = _collector(config)

    result = asyncio.run(
        run_queue_demo(
            config.demo_operations,
            config.demo_delay_seconds,
            abort_after=abort_after,
            metrics=metrics,
        )
    )
    _echo_result(result, metrics, show_metrics)


@cli.command("debounce-demo")
@click.option("--calls", type=int, help="Number of calls in the burst (default: 3)")
@click.option("--debounce-delay", type=float, help="Debounce delay in seconds (default: 0.3)")
@click.option("--show-metrics", is_flag=True, help="Print Prometheus metrics afterwards")
@click.pass_context
def debounce_demo(ctx, calls, debounce_delay, show_metrics):
    """Fire a burst of calls and print the single execution."""
    config = _load_config(ctx, operations=calls, debounce_delay=debounce_delay)
    metrics = _collector(config)

    result = asyncio.run(
        run_debounce_demo(config.demo_operations, config.debounce_delay_seconds, metrics=metrics)
    )
    _echo_result(result, metrics, show_metrics)


@cli.command("guard-demo")
@click.option(
    "--mode",
    type=click.Choice([m.value for m in GuardMode], case_sensitive=False),
    help="Guard mode (default: drop)",
)
@click.option("--calls", type=int, help="Number of overlapping calls (default: 3)")
@click.option("--delay", type=float, help="Duration of each operation in seconds (default: 0.05)")
@click.option("--show-metrics", is_flag=True, help="Print Prometheus metrics afterwards")
@click.pass_context
def guard_demo(ctx, mode, calls, delay, show_metrics):
    """Fire overlapping calls at a guarded operation and print which ran."""
    config = _load_config(ctx, guard_mode=mode, operations=calls, delay=delay)
    metrics = _collector(config)

    result = asyncio.run(
        run_guard_demo(
            GuardMode(config.guard_mode),
            config.demo_operations,
            config.demo_delay_seconds,
            metrics=metrics,
        )
    )
    _echo_result(result, metrics, show_metrics)


@cli.command("config")
@click.pass_context
def show_config(ctx):
    """Print the resolved configuration."""
    config = _load_config(ctx)
    click.echo(config.display())


if __name__ == "__main__":
    cli()
