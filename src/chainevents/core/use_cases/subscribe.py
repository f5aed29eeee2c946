"""Live subscription: print matching events of every new block.

Receiving headers and processing them are decoupled:

    header_stream ──receive()──▶ headers queue ──dispatch()──▶ one task per header
                                                                   │
                     consumer ◀── results queue ◀── batch of matches per header

Processing tasks may overlap when headers arrive faster than a block can be
fetched; each task publishes its matches as one batch so in-block order is
kept. Batches are yielded in completion order.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any

from chainevents.core.errors import FetchError
from chainevents.core.interfaces import IBlockSource
from chainevents.core.models import FilterSpec, Header, MatchedEvent
from chainevents.core.use_cases.block_events import collect_block_matches
from chainevents.decoding.registry import RendererRegistry, make_renderer_registry

logger = logging.getLogger(__name__)

HeaderCallback = Callable[[Header], None]

_END = object()


@dataclass(slots=True)
class _UnitFailure:
    """A header whose fetch failed."""

    header: Header
    error: FetchError


class LiveSubscriber:
    """
    Follow new block headers and yield matching events until cancelled.

    Parameters
    ----------
    source : IBlockSource
        Block source providing the header stream and block events.
    renderers : RendererRegistry | None
        Field renderers; defaults to `make_renderer_registry()`.
    queue_size : int
        Capacity of the header queue; 0 means unbounded. A full queue
        back-pressures the header stream.
    skip_failed : bool
        If True a header whose fetch fails is logged and skipped; otherwise the
        `FetchError` ends the subscription.
    on_header : HeaderCallback | None
        Called for every received header before it is processed.
    """

    def __init__(
        self,
        source: IBlockSource,
        renderers: RendererRegistry | None = None,
        *,
        queue_size: int = 0,
        skip_failed: bool = False,
        on_header: HeaderCallback | None = None,
    ) -> None:
        self.source = source
        self.renderers = renderers if renderers is not None else make_renderer_registry()
        self.queue_size = queue_size
        self.skip_failed = skip_failed
        self.on_header = on_header

    async def subscribe(self, spec: FilterSpec) -> AsyncIterator[MatchedEvent]:
        headers: asyncio.Queue[Header | None] = asyncio.Queue(maxsize=self.queue_size)
        results: asyncio.Queue[Any] = asyncio.Queue()
        in_flight: set[asyncio.Task[None]] = set()

        async def receive() -> None:
            try:
                async with aclosing(self.source.header_stream()) as stream:
                    async for header in stream:
                        await headers.put(header)
            except Exception as e:
                await results.put(e)
                return
            logger.info("header stream ended")
            await headers.put(None)

        async def process(header: Header) -> None:
            try:
                batch = await collect_block_matches(self.source, header.block_number, spec, self.renderers)
            except FetchError as e:
                await results.put(_UnitFailure(header, e))
            except Exception as e:
                await results.put(e)
            else:
                await results.put(batch)

        async def dispatch() -> None:
            while (header := await headers.get()) is not None:
                if self.on_header is not None:
                    self.on_header(header)
                task = asyncio.create_task(process(header))
                in_flight.add(task)
                task.add_done_callback(in_flight.discard)
            if in_flight:
                await asyncio.gather(*in_flight)
            await results.put(_END)

        logger.info(
            "subscribing to new heads for %s%s",
            spec.module,
            f".{spec.event_name}" if spec.event_name else "",
        )
        workers = [asyncio.create_task(receive()), asyncio.create_task(dispatch())]
        try:
            while (item := await results.get()) is not _END:
                if isinstance(item, _UnitFailure):
                    if not self.skip_failed:
                        raise item.error
                    logger.warning("skipping block %d: %s", item.header.block_number, item.error)
                    continue
                if isinstance(item, BaseException):
                    raise item
                for event in item:
                    yield event
        finally:
            pending = [*workers, *in_flight]
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
