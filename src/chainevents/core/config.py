from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_NODE_URL = "ws://127.0.0.1:9944"


@dataclass(frozen=True)
class InspectorConfig:
    """Connection and runtime settings for one inspection run."""

    url: str = DEFAULT_NODE_URL  # websocket endpoint (events + new heads)
    http_url: str | None = None  # JSON-RPC over HTTP; derived from `url` when unset
    types_path: Path | None = None  # custom type registry JSON
    timeout_s: int = 20
    header_queue_size: int = 0  # 0 = unbounded
    skip_failed_headers: bool = False

    def rpc_url(self) -> str:
        """HTTP endpoint for plain JSON-RPC calls."""
        if self.http_url:
            return self.http_url
        if self.url.startswith("wss://"):
            return "https://" + self.url[len("wss://"):]
        if self.url.startswith("ws://"):
            return "http://" + self.url[len("ws://"):]
        return self.url
