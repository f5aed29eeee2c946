from __future__ import annotations

from collections.abc import AsyncGenerator, Sequence
from typing import Protocol, runtime_checkable

from chainevents.core.models import EventRecord, Header


# ---------------------------------------------------------------------------
# IBlockSource
# ---------------------------------------------------------------------------

@runtime_checkable
class IBlockSource(Protocol):
    """
    Abstract provider of blocks and their events.

    Domain expectations:
    - It returns EventRecord objects already decoded against the chain's
      type metadata (module, event name, typed fields).
    - It hides the underlying transport (HTTP JSON-RPC, websocket, archive).
    - Failures surface as `FetchError`.
    """

    async def best_block_number(self) -> int:
        """
        Return the number of the current best (most recent) block.

        Implementations may:
            - Query a node
            - Return a static value for testing
        """
        ...

    async def block_hash(self, number: int) -> str:
        """Return the 0x-prefixed hash of block `number`."""
        ...

    async def events_at(self, block_hash: str) -> Sequence[EventRecord]:
        """
        Return the event records of one block in their recorded order.

        Implementations:
        - `SubstrateBlockSource` (substrate-interface decoding)
        - In-memory source for testing
        """
        ...

    def header_stream(self) -> AsyncGenerator[Header, None]:
        """
        Return an async generator of newly observed block headers.

        The generator is unbounded; closing it releases the subscription.
        """
        ...
