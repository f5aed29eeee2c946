import asyncio
from collections.abc import Coroutine
from dataclasses import replace
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from .core.config import DEFAULT_NODE_URL, InspectorConfig
from .core.errors import ChainEventsError
from .core.models import FilterSpec
from .log import configure_logging
from .orchestration.orchestrator import run_range_scan, run_subscription
from .presentation.printer import EventPrinter

console = Console(highlight=False, soft_wrap=True)


def _filter_spec(module: str, event_name: str | None) -> FilterSpec:
    try:
        return FilterSpec.from_input(module, event_name)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--module") from e


def _run(coro: Coroutine[Any, Any, int]) -> int:
    try:
        return asyncio.run(coro)
    except ChainEventsError as e:
        raise click.ClickException(str(e)) from e


module_option = click.option(
    "--module",
    prompt="What is the module name whose events you want to fetch",
    default="asset",
    show_default=True,
    help="Module (pallet) whose events are printed; case-insensitive",
)
event_name_option = click.option(
    "--event-name",
    default=None,
    help="Only print events with this exact (case-sensitive) name",
)


@click.group()
@click.option("--url", envvar="CHAINEVENTS_URL", default=DEFAULT_NODE_URL, show_default=True, help="Node websocket endpoint")
@click.option(
    "--http-url",
    envvar="CHAINEVENTS_HTTP_URL",
    default=None,
    help="Node HTTP JSON-RPC endpoint (derived from --url when omitted)",
)
@click.option(
    "--types",
    "types_path",
    envvar="CHAINEVENTS_TYPES",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Custom type registry JSON for the chain",
)
@click.option("--timeout", "timeout_s", type=click.IntRange(min=1), default=20, show_default=True, help="RPC timeout in seconds")
@click.option("-v", "--verbose", count=True, help="-v for info, -vv for debug logs (stderr)")
@click.pass_context
def cli(
    ctx: click.Context,
    url: str,
    http_url: str | None,
    types_path: Path | None,
    timeout_s: int,
    verbose: int,
) -> None:
    """chainevents: print events emitted by a Substrate node."""
    configure_logging(verbose)
    ctx.obj = InspectorConfig(url=url, http_url=http_url, types_path=types_path, timeout_s=timeout_s)


@cli.command("scan")
@module_option
@event_name_option
@click.option(
    "--from-block",
    type=click.IntRange(min=0),
    prompt="Enter the from block",
    default=1,
    show_default=True,
)
@click.option(
    "--to-block",
    type=click.IntRange(min=0),
    default=None,
    help="Last block (inclusive); defaults to the current best block",
)
@click.pass_obj
def scan_cmd(
    config: InspectorConfig,
    module: str,
    event_name: str | None,
    from_block: int,
    to_block: int | None,
) -> None:
    """Get the events of a module over a block range."""
    spec = _filter_spec(module, event_name)
    _run(
        run_range_scan(
            config=config,
            spec=spec,
            start_block=from_block,
            end_block=to_block,
            printer=EventPrinter(console),
        )
    )


@cli.command("subscribe")
@module_option
@event_name_option
@click.option("--queue-size", type=click.IntRange(min=0), default=0, show_default=True, help="Header queue capacity (0 = unbounded)")
@click.option(
    "--skip-failed/--no-skip-failed",
    default=False,
    show_default=True,
    help="Keep following new blocks when one block fails to load",
)
@click.pass_obj
def subscribe_cmd(
    config: InspectorConfig,
    module: str,
    event_name: str | None,
    queue_size: int,
    skip_failed: bool,
) -> None:
    """Subscribe to new blocks and print matching events as they arrive (Ctrl-C to stop)."""
    spec = _filter_spec(module, event_name)
    config = replace(config, header_queue_size=queue_size, skip_failed_headers=skip_failed)
    _run(run_subscription(config=config, spec=spec, printer=EventPrinter(console)))


if __name__ == "__main__":
    cli()
