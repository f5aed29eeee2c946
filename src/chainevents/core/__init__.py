"""Core data models, configuration, filters and errors.

This package provides:
- Data models (EventRecord, FilterSpec, BlockRange, MatchedEvent, Header)
- Configuration (InspectorConfig)
- The event filter evaluator (matches)
- The error taxonomy (InvalidRangeError, FetchError)
"""

from chainevents.core.config import InspectorConfig
from chainevents.core.errors import ChainEventsError, FetchError, InvalidRangeError
from chainevents.core.filters import matches
from chainevents.core.models import (
    BlockRange,
    EventField,
    EventRecord,
    FilterSpec,
    Header,
    MatchedEvent,
    NodeInfo,
    RenderedField,
)

__all__ = [
    "InspectorConfig",
    "ChainEventsError",
    "FetchError",
    "InvalidRangeError",
    "matches",
    "BlockRange",
    "EventField",
    "EventRecord",
    "FilterSpec",
    "Header",
    "MatchedEvent",
    "NodeInfo",
    "RenderedField",
]
