from __future__ import annotations

import logging

from chainevents.core.errors import FetchError
from chainevents.core.filters import matches
from chainevents.core.interfaces import IBlockSource
from chainevents.core.models import EventRecord, FilterSpec, MatchedEvent
from chainevents.decoding.registry import RendererRegistry, render_fields

logger = logging.getLogger(__name__)


async def fetch_block_events(source: IBlockSource, number: int) -> list[EventRecord]:
    """Resolve the hash of block `number` and fetch its records.

    Any failure is reported as `FetchError` tagged with the block number.
    """
    try:
        block_hash = await source.block_hash(number)
        records = await source.events_at(block_hash)
    except FetchError as e:
        if e.block_number is None:
            e.block_number = number
        raise
    except Exception as e:
        raise FetchError(f"failed to fetch events of block {number}: {e}", block_number=number) from e
    logger.debug("block %d (%s): %d event(s)", number, block_hash, len(records))
    return list(records)


def match_block_events(
    number: int,
    records: list[EventRecord],
    spec: FilterSpec,
    renderers: RendererRegistry,
) -> list[MatchedEvent]:
    """Filter and render one block's records, keeping their recorded order."""
    out: list[MatchedEvent] = []
    for record in records:
        if not matches(record, spec):
            continue
        out.append(
            MatchedEvent(
                block_number=number,
                module=record.module,
                name=record.name,
                fields=render_fields(record.fields, renderers),
            )
        )
    return out


async def collect_block_matches(
    source: IBlockSource,
    number: int,
    spec: FilterSpec,
    renderers: RendererRegistry,
) -> list[MatchedEvent]:
    """Fetch → filter → render for a single block."""
    records = await fetch_block_events(source, number)
    return match_block_events(number, records, spec, renderers)
