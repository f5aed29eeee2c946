from chainevents.presentation.printer import (
    SEPARATOR,
    EventPrinter,
    format_banner,
    format_event,
    format_header,
)

__all__ = [
    "SEPARATOR",
    "EventPrinter",
    "format_banner",
    "format_event",
    "format_header",
]
