"""Error taxonomy shared by the core use cases and the adapters."""

from __future__ import annotations


class ChainEventsError(Exception):
    """Base class for every error the tool reports to the user."""


class InvalidRangeError(ChainEventsError, ValueError):
    """Block range is reversed, negative, or beyond the current best block."""


class FetchError(ChainEventsError):
    """Retrieving the best block, a block hash or block events failed.

    Never retried: it aborts the scan, or the subscription unit in progress.
    """

    def __init__(self, message: str, *, block_number: int | None = None) -> None:
        super().__init__(message)
        self.block_number = block_number
