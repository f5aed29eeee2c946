"""Event filter evaluation."""

from __future__ import annotations

from chainevents.core.models import EventRecord, FilterSpec


def matches(record: EventRecord, spec: FilterSpec) -> bool:
    """True if `record` belongs to `spec.module` and, when set, is named `spec.event_name`.

    Both comparisons are exact; callers normalize the module name beforehand.
    """
    if record.module != spec.module:
        return False
    return spec.event_name is None or record.name == spec.event_name
