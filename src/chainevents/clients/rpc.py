"""Lightweight JSON-RPC client for Substrate nodes.

This module provides:
- `NodeRPC`: an async HTTP client with sane timeouts/connection limits
- Helpers to parse the hex-encoded numbers the node returns

It covers the plain (non-decoding) calls: best block, block hash and node
identity. Failures are raised as `FetchError`.
"""

from __future__ import annotations

import asyncio
import itertools
from typing import Any

import httpx

from chainevents.core.errors import FetchError
from chainevents.core.models import NodeInfo


def parse_block_number(x: int | str) -> int:
    """Return an int from a 0x-hex or decimal block number."""
    if isinstance(x, int):
        return x
    return int(x, 16) if x.lower().startswith("0x") else int(x)


class NodeRPC:
    """Minimal async JSON-RPC client.

    Parameters
    ----------
    url : str
        HTTP(S) RPC endpoint URL.
    timeout_s : int
        Per-operation timeout in seconds (connect/read/write).
    max_connections : int
        Maximum concurrent connections to keep in the pool.
    transport : httpx.AsyncBaseTransport | None
        Custom transport (tests use `httpx.MockTransport`).
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_s: int = 20,
        max_connections: int = 8,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self._ids = itertools.count(1)
        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=timeout_s,
                read=timeout_s,
                write=timeout_s,
                pool=max(30, timeout_s * 3),
            ),
            limits=httpx.Limits(
                max_connections=max_connections,
                max_keepalive_connections=max(1, max_connections // 2),
            ),
            http2=True,
            transport=transport,
        )

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Send one JSON-RPC request and return its `result`."""
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params or []}
        try:
            r = await self.client.post(self.url, json=payload)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise FetchError(f"{method} failed: {e}") from e
        if "error" in data:
            err = data["error"]
            msg = err.get("message") if isinstance(err, dict) else str(err)
            code = err.get("code") if isinstance(err, dict) else None
            raise FetchError(f"{method} RPC error: {code} {msg}")
        return data.get("result")

    async def best_block_number(self) -> int:
        """Return the number of the best block (head of the best chain)."""
        header = await self.call("chain_getHeader")
        if not header:
            raise FetchError("chain_getHeader returned no header")
        return parse_block_number(header["number"])

    async def block_hash(self, number: int) -> str:
        """Return the hash of block `number`."""
        result = await self.call("chain_getBlockHash", [number])
        if not result:
            raise FetchError(f"no block hash for block {number}", block_number=number)
        return str(result)

    async def node_info(self) -> NodeInfo:
        """Return chain name, node implementation name and version."""
        chain, name, version = await asyncio.gather(
            self.call("system_chain"),
            self.call("system_name"),
            self.call("system_version"),
        )
        return NodeInfo(chain=str(chain), name=str(name), version=str(version))

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.aclose()
