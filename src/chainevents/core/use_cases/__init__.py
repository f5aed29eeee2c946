"""Application use cases: range replay and live subscription."""

from chainevents.core.use_cases.scan_range import RangeScanner
from chainevents.core.use_cases.subscribe import LiveSubscriber

__all__ = [
    "RangeScanner",
    "LiveSubscriber",
]
