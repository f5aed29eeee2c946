"""Line-oriented text output for matching events."""

from __future__ import annotations

from rich.console import Console

from chainevents.core.models import Header, MatchedEvent, NodeInfo

SEPARATOR = "*" * 39


def format_event(event: MatchedEvent) -> list[str]:
    """Header line, one `<type> : <text>` line per field, then the separator."""
    lines = [f"EventName - {event.name} at block number {event.block_number}"]
    lines.extend(f"{f.type_tag} : {f.text}" for f in event.fields)
    lines.append(SEPARATOR)
    return lines


def format_header(header: Header) -> str:
    return f"Chain is at block: #{header.block_number}"


def format_banner(info: NodeInfo) -> str:
    return f"You are connected to chain {info.chain} using {info.name} v{info.version}"


class EventPrinter:
    """Writes the formatted lines verbatim (no markup, no highlighting)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)

    def _line(self, text: str) -> None:
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def print_event(self, event: MatchedEvent) -> None:
        for line in format_event(event):
            self._line(line)

    def print_header(self, header: Header) -> None:
        self._line(format_header(header))

    def print_banner(self, info: NodeInfo) -> None:
        self._line(format_banner(info))
