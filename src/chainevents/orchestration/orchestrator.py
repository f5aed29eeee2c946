"""Run orchestration: block source → use case → printer.

This module provides two layers:

1) `scan_events(...)` / `watch_events(...)`:
   - Pure application-layer runs.
   - Depend ONLY on `IBlockSource` and the printer.
   - Do NOT instantiate clients or manage their lifecycle.

2) `run_range_scan(...)` / `run_subscription(...)` (convenience wrappers):
   - Wire the concrete `SubstrateBlockSource` from an `InspectorConfig`,
     print the connection banner, and close the source afterwards.
"""

from __future__ import annotations

import logging

from chainevents.clients.substrate import build_block_source
from chainevents.core.config import InspectorConfig
from chainevents.core.interfaces import IBlockSource
from chainevents.core.models import BlockRange, FilterSpec
from chainevents.core.use_cases.scan_range import RangeScanner
from chainevents.core.use_cases.subscribe import LiveSubscriber
from chainevents.decoding.registry import RendererRegistry
from chainevents.presentation.printer import EventPrinter

logger = logging.getLogger(__name__)


async def _resolve_block_range(
    source: IBlockSource,
    start_block: int,
    end_block: int | None,
) -> BlockRange:
    """Build the range; a missing end defaults to the current best block."""
    if end_block is None:
        end_block = await source.best_block_number()
        logger.info("to block defaults to best block %d", end_block)
    return BlockRange(start=start_block, end=end_block)


# ---------------------------------------------------------------------------
# 1) Pure application runs (no concrete instantiation)
# ---------------------------------------------------------------------------


async def scan_events(
    *,
    source: IBlockSource,
    spec: FilterSpec,
    start_block: int,
    end_block: int | None,
    printer: EventPrinter,
    renderers: RendererRegistry | None = None,
) -> int:
    """Replay `[start_block, end_block]` and print every match. Returns the match count."""
    block_range = await _resolve_block_range(source, start_block, end_block)
    scanner = RangeScanner(source, renderers)
    printed = 0
    async for event in scanner.scan(block_range, spec):
        printer.print_event(event)
        printed += 1
    return printed


async def watch_events(
    *,
    source: IBlockSource,
    spec: FilterSpec,
    printer: EventPrinter,
    queue_size: int = 0,
    skip_failed: bool = False,
    renderers: RendererRegistry | None = None,
) -> int:
    """Print matches of every new block until cancelled or the stream ends."""
    subscriber = LiveSubscriber(
        source,
        renderers,
        queue_size=queue_size,
        skip_failed=skip_failed,
        on_header=printer.print_header,
    )
    printed = 0
    async for event in subscriber.subscribe(spec):
        printer.print_event(event)
        printed += 1
    return printed


# ---------------------------------------------------------------------------
# 2) Convenience wrappers (concrete wiring)
# ---------------------------------------------------------------------------


async def run_range_scan(
    *,
    config: InspectorConfig,
    spec: FilterSpec,
    start_block: int,
    end_block: int | None,
    printer: EventPrinter,
) -> int:
    source = build_block_source(config)
    try:
        printer.print_banner(await source.node_info())
        return await scan_events(
            source=source,
            spec=spec,
            start_block=start_block,
            end_block=end_block,
            printer=printer,
        )
    finally:
        await source.aclose()


async def run_subscription(
    *,
    config: InspectorConfig,
    spec: FilterSpec,
    printer: EventPrinter,
) -> int:
    source = build_block_source(config)
    try:
        printer.print_banner(await source.node_info())
        return await watch_events(
            source=source,
            spec=spec,
            printer=printer,
            queue_size=config.header_queue_size,
            skip_failed=config.skip_failed_headers,
        )
    finally:
        await source.aclose()
