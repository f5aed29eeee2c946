from collections.abc import AsyncIterator, Iterable
from typing import Any

import pytest

from chainevents.core.errors import FetchError
from chainevents.core.models import EventField, EventRecord, Header, NodeInfo


class FakeBlockSource:
    """In-memory IBlockSource that records every call it receives."""

    def __init__(
        self,
        blocks: dict[int, list[EventRecord]] | None = None,
        *,
        best: int | None = None,
        headers: Iterable[int] = (),
        fail_blocks: Iterable[int] = (),
    ) -> None:
        self.blocks = blocks or {}
        self.best = best if best is not None else max(self.blocks, default=0)
        self.headers = list(headers)
        self.fail_blocks = set(fail_blocks)
        self.calls: list[tuple[str, Any]] = []
        self.closed = False

    async def best_block_number(self) -> int:
        self.calls.append(("best_block_number", None))
        return self.best

    async def block_hash(self, number: int) -> str:
        self.calls.append(("block_hash", number))
        if number in self.fail_blocks:
            raise FetchError(f"node unavailable for block {number}")
        return f"0x{number:064x}"

    async def events_at(self, block_hash: str) -> list[EventRecord]:
        self.calls.append(("events_at", block_hash))
        return list(self.blocks.get(int(block_hash, 16), []))

    async def header_stream(self) -> AsyncIterator[Header]:
        for number in self.headers:
            yield Header(block_number=number)

    async def node_info(self) -> NodeInfo:
        return NodeInfo(chain="Polymesh Testnet", name="Polymesh Node", version="5.0.0")

    async def aclose(self) -> None:
        self.closed = True

    def hashed_blocks(self) -> list[int]:
        return [n for name, n in self.calls if name == "block_hash"]


@pytest.fixture
def transfer_record() -> EventRecord:
    return EventRecord(
        module="asset",
        name="Transfer",
        fields=(EventField("Bytes", "0x48656c6c6f"),),
    )


@pytest.fixture
def chain(transfer_record: EventRecord) -> FakeBlockSource:
    """Five blocks; asset events in blocks 2 and 4, identity noise in 3."""
    return FakeBlockSource(
        {
            1: [],
            2: [
                transfer_record,
                EventRecord("asset", "Issued", (EventField("Ticker", "ACME"), EventField("Balance", 1000)), index=1),
            ],
            3: [EventRecord("identity", "DidCreated", (EventField("IdentityId", "0x01"),))],
            4: [
                EventRecord("balances", "Transfer", (EventField("Balance", 5),)),
                EventRecord("asset", "Transfer", (EventField("Bytes", b"World"),), index=1),
            ],
            5: [],
        }
    )
