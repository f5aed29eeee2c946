"""Orchestration for range scans and live subscriptions.

This package provides:
- Pure runs over an injected block source (scan_events, watch_events)
- Wrappers wiring the Substrate block source from a config (run_range_scan, run_subscription)
"""

from chainevents.orchestration.orchestrator import (
    run_range_scan,
    run_subscription,
    scan_events,
    watch_events,
)

__all__ = [
    "run_range_scan",
    "run_subscription",
    "scan_events",
    "watch_events",
]
