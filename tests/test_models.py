import logging

import pytest

from chainevents.core.config import InspectorConfig
from chainevents.core.errors import ChainEventsError, InvalidRangeError
from chainevents.core.models import BlockRange, FilterSpec
from chainevents.log import configure_logging, level_for


def test_block_range_numbers_are_inclusive() -> None:
    r = BlockRange(3, 6)

    assert list(r.numbers()) == [3, 4, 5, 6]
    assert r.span() == 4
    assert list(BlockRange(0, 0).numbers()) == [0]


@pytest.mark.parametrize("start,end", [(10, 9), (-1, 5), (0, -2)])
def test_invalid_block_range(start: int, end: int) -> None:
    with pytest.raises(InvalidRangeError):
        BlockRange(start, end)


def test_invalid_range_error_is_a_value_error() -> None:
    assert issubclass(InvalidRangeError, ChainEventsError)
    assert issubclass(InvalidRangeError, ValueError)


def test_ensure_within_best_block() -> None:
    BlockRange(1, 10).ensure_within(10)
    with pytest.raises(InvalidRangeError, match="beyond the current best block"):
        BlockRange(1, 11).ensure_within(10)


def test_filter_spec_from_input() -> None:
    assert FilterSpec.from_input("  Asset ") == FilterSpec("asset")
    assert FilterSpec.from_input("asset", "Transfer") == FilterSpec("asset", "Transfer")
    assert FilterSpec.from_input("asset", "") == FilterSpec("asset")
    with pytest.raises(ValueError):
        FilterSpec.from_input("   ")


@pytest.mark.parametrize(
    "url,http_url,expected",
    [
        ("ws://127.0.0.1:9944", None, "http://127.0.0.1:9944"),
        ("wss://testnet-rpc.polymesh.live", None, "https://testnet-rpc.polymesh.live"),
        ("ws://127.0.0.1:9944", "http://rpc.local:9933", "http://rpc.local:9933"),
        ("http://127.0.0.1:9933", None, "http://127.0.0.1:9933"),
    ],
)
def test_rpc_url(url: str, http_url: str | None, expected: str) -> None:
    assert InspectorConfig(url=url, http_url=http_url).rpc_url() == expected


def test_logging_levels() -> None:
    assert level_for(0) == logging.WARNING
    assert level_for(1) == logging.INFO
    assert level_for(5) == logging.DEBUG

    logger = configure_logging(1)
    configure_logging(1)

    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert not logger.propagate
