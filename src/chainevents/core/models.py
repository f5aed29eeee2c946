"""Core data models for event inspection.

This module defines:
- `EventField` / `EventRecord`: one decoded event as handed over by a block source.
- `FilterSpec`: module (+ optional exact event name) selection.
- `BlockRange`: validated inclusive range of block numbers.
- `RenderedField` / `MatchedEvent`: display form of a matching event.
- `Header` / `NodeInfo`: new-head notifications and node identity.

Design notes
------------
- Everything is frozen: records are discarded after rendering, specs are
  built once at the CLI boundary.
- Module names are compared in canonical lower case; `FilterSpec.from_input`
  normalizes user input, event names are left untouched.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from chainevents.core.errors import InvalidRangeError

# === Records handed over by a block source ===


@dataclass(slots=True, frozen=True)
class EventField:
    """One raw event field: declared type tag + decoded value."""

    type_tag: str  # e.g. "Bytes", "AccountId32", "u128"
    value: Any


@dataclass(slots=True, frozen=True)
class EventRecord:
    """One occurrence of an event inside one block."""

    module: str  # lower case, e.g. "asset"
    name: str  # e.g. "Transfer"
    fields: tuple[EventField, ...] = ()
    index: int = 0  # position inside the block


@dataclass(slots=True, frozen=True)
class Header:
    """New block header notification (only the number is needed)."""

    block_number: int


@dataclass(slots=True, frozen=True)
class NodeInfo:
    """Identity of the connected node."""

    chain: str
    name: str
    version: str


# === User selection ===


@dataclass(slots=True, frozen=True)
class FilterSpec:
    """Which events to keep: every event of `module`, or only `event_name`."""

    module: str
    event_name: str | None = None

    @classmethod
    def from_input(cls, module: str, event_name: str | None = None) -> FilterSpec:
        """Build a spec from raw user input.

        The module is stripped and lower-cased; an empty event name means
        "no event filter". Event names are kept exactly as given.
        """
        normalized = module.strip().lower()
        if not normalized:
            raise ValueError("module name must not be empty")
        return cls(module=normalized, event_name=event_name or None)


@dataclass(slots=True, frozen=True)
class BlockRange:
    """Inclusive [start, end] block interval."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < 0:
            raise InvalidRangeError(f"block numbers must be non-negative (got {self.start}..{self.end})")
        if self.start > self.end:
            raise InvalidRangeError(f"from block ({self.start}) must be <= to block ({self.end})")

    def span(self) -> int:
        return self.end - self.start + 1

    def numbers(self) -> Iterator[int]:
        """Block numbers in ascending order."""
        return iter(range(self.start, self.end + 1))

    def ensure_within(self, best_block: int) -> None:
        """Raise `InvalidRangeError` if the range ends past `best_block`."""
        if self.end > best_block:
            raise InvalidRangeError(
                f"to block ({self.end}) is beyond the current best block ({best_block})"
            )


# === Rendered output ===


@dataclass(slots=True, frozen=True)
class RenderedField:
    """Display form of one field value."""

    type_tag: str
    text: str


@dataclass(slots=True, frozen=True)
class MatchedEvent:
    """One output unit: a matching event with its rendered fields."""

    block_number: int
    module: str
    name: str
    fields: tuple[RenderedField, ...] = ()
