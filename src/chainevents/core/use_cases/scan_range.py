"""Historical replay over an inclusive block range."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from chainevents.core.errors import FetchError
from chainevents.core.interfaces import IBlockSource
from chainevents.core.models import BlockRange, FilterSpec, MatchedEvent
from chainevents.core.use_cases.block_events import collect_block_matches
from chainevents.decoding.registry import RendererRegistry, make_renderer_registry

logger = logging.getLogger(__name__)


class RangeScanner:
    """
    Replay `[start, end]` block by block and yield the matching events.

    - The range end is checked against a freshly queried best block before
      any block is touched.
    - Blocks are fetched strictly one at a time and only when the consumer
      asks for more, so nothing runs ahead of rendering.
    - The first failing block aborts the scan with `FetchError`.
    """

    def __init__(self, source: IBlockSource, renderers: RendererRegistry | None = None) -> None:
        self.source = source
        self.renderers = renderers if renderers is not None else make_renderer_registry()

    async def _best_block(self) -> int:
        try:
            return await self.source.best_block_number()
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"failed to query the best block: {e}") from e

    async def scan(self, block_range: BlockRange, spec: FilterSpec) -> AsyncIterator[MatchedEvent]:
        best = await self._best_block()
        block_range.ensure_within(best)

        logger.info(
            "scanning blocks %d..%d (%d) for %s%s",
            block_range.start,
            block_range.end,
            block_range.span(),
            spec.module,
            f".{spec.event_name}" if spec.event_name else "",
        )
        matched = 0
        for number in block_range.numbers():
            for event in await collect_block_matches(self.source, number, spec, self.renderers):
                matched += 1
                yield event
        logger.info("scan finished: %d matching event(s)", matched)
