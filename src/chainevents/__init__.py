from __future__ import annotations

from .core.config import InspectorConfig
from .core.errors import ChainEventsError, FetchError, InvalidRangeError
from .core.filters import matches
from .core.models import BlockRange, EventField, EventRecord, FilterSpec, MatchedEvent, RenderedField
from .core.use_cases import LiveSubscriber, RangeScanner
from .decoding.registry import add_renderer, make_renderer_registry, render_field, render_fields

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
    "MatchedEvent",
    "RenderedField",
    "LiveSubscriber",
    "RangeScanner",
    "add_renderer",
    "make_renderer_registry",
    "render_field",
    "render_fields",
]
