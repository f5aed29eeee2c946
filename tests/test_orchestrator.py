import io
from unittest.mock import patch

import pytest
from conftest import FakeBlockSource
from rich.console import Console

from chainevents.core.config import InspectorConfig
from chainevents.core.errors import FetchError, InvalidRangeError
from chainevents.core.models import FilterSpec
from chainevents.orchestration.orchestrator import run_range_scan, run_subscription, scan_events, watch_events
from chainevents.presentation.printer import EventPrinter


def _printer() -> tuple[EventPrinter, io.StringIO]:
    buf = io.StringIO()
    return EventPrinter(Console(file=buf)), buf


@pytest.mark.asyncio
async def test_scan_events_prints_matches(chain: FakeBlockSource) -> None:
    printer, buf = _printer()

    printed = await scan_events(source=chain, spec=FilterSpec("asset", "Issued"), start_block=1, end_block=5, printer=printer)

    assert printed == 1
    assert buf.getvalue().splitlines() == [
        "EventName - Issued at block number 2",
        "Ticker : ACME",
        "Balance : 1000",
        "*" * 39,
    ]


@pytest.mark.asyncio
async def test_scan_events_defaults_end_to_best_block(chain: FakeBlockSource) -> None:
    printer, _ = _printer()

    printed = await scan_events(source=chain, spec=FilterSpec("asset"), start_block=3, end_block=None, printer=printer)

    assert printed == 1
    assert chain.hashed_blocks() == [3, 4, 5]


@pytest.mark.asyncio
async def test_scan_events_rejects_reversed_range(chain: FakeBlockSource) -> None:
    printer, buf = _printer()

    with pytest.raises(InvalidRangeError):
        await scan_events(source=chain, spec=FilterSpec("asset"), start_block=5, end_block=2, printer=printer)

    assert buf.getvalue() == ""
    assert chain.hashed_blocks() == []


@pytest.mark.asyncio
async def test_watch_events_prints_header_lines_then_matches(chain: FakeBlockSource) -> None:
    chain.headers = [3]
    printer, buf = _printer()

    printed = await watch_events(source=chain, spec=FilterSpec("identity"), printer=printer)

    assert printed == 1
    assert buf.getvalue().splitlines() == [
        "Chain is at block: #3",
        "EventName - DidCreated at block number 3",
        "IdentityId : 0x01",
        "*" * 39,
    ]


@pytest.mark.asyncio
async def test_run_range_scan_prints_banner_and_closes_source(chain: FakeBlockSource) -> None:
    printer, buf = _printer()

    with patch("chainevents.orchestration.orchestrator.build_block_source", return_value=chain) as build:
        printed = await run_range_scan(
            config=InspectorConfig(),
            spec=FilterSpec("asset"),
            start_block=4,
            end_block=4,
            printer=printer,
        )

    build.assert_called_once_with(InspectorConfig())
    assert printed == 1
    assert buf.getvalue().splitlines()[0] == "You are connected to chain Polymesh Testnet using Polymesh Node v5.0.0"
    assert chain.closed


@pytest.mark.asyncio
async def test_run_subscription_closes_source_on_failure(chain: FakeBlockSource) -> None:
    chain.headers = [2]
    chain.fail_blocks = {2}
    printer, _ = _printer()

    with patch("chainevents.orchestration.orchestrator.build_block_source", return_value=chain):
        with pytest.raises(FetchError):
            await run_subscription(config=InspectorConfig(), spec=FilterSpec("asset"), printer=printer)

    assert chain.closed


@pytest.mark.asyncio
async def test_run_subscription_honours_skip_failed(chain: FakeBlockSource) -> None:
    chain.headers = [2, 4]
    chain.fail_blocks = {2}
    printer, _ = _printer()
    config = InspectorConfig(skip_failed_headers=True, header_queue_size=1)

    with patch("chainevents.orchestration.orchestrator.build_block_source", return_value=chain):
        printed = await run_subscription(config=config, spec=FilterSpec("asset"), printer=printer)

    assert printed == 1
