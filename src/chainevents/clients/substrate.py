"""Block source backed by a Substrate node.

- Plain calls (best block, block hash, node identity) go through `NodeRPC`
  over HTTP.
- Event decoding and new-head subscriptions go through `substrate-interface`,
  which owns the chain's type metadata. The library is synchronous, so calls
  run in worker threads; query calls share one websocket and are serialized,
  the header subscription gets its own connection.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator, Callable
from functools import partial
from typing import Any

from chainevents.clients.rpc import NodeRPC, parse_block_number
from chainevents.core.config import InspectorConfig
from chainevents.core.errors import FetchError
from chainevents.core.models import EventField, EventRecord, Header, NodeInfo
from chainevents.decoding.renderers import BYTES_TYPE

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "Unknown"

SubstrateFactory = Callable[[], Any]
TypeResolver = Callable[[int], str | None]


# ---------------------------------------------------------------------------
# Record mapping
# ---------------------------------------------------------------------------


def attribute_values(attributes: Any) -> list[Any]:
    """Positional field values from the decoder's `attributes` shape.

    Named fields arrive as a dict, several unnamed ones as a tuple and a
    single field as its bare value (a list is one `Vec` value). Legacy
    metadata yields a list of `{"type", "value"}` dicts.
    """
    if attributes is None:
        return []
    if isinstance(attributes, dict):
        return list(attributes.values())
    if isinstance(attributes, tuple):
        return list(attributes)
    if isinstance(attributes, list) and attributes and all(_is_legacy_attribute(a) for a in attributes):
        return [a["value"] for a in attributes]
    return [attributes]


def _is_legacy_attribute(item: Any) -> bool:
    return isinstance(item, dict) and set(item) == {"type", "value"}


def registry_type_name(runtime_config: Any, type_id: int) -> str | None:
    """Name of a portable registry type.

    The last path segment when the type has one, `Bytes` for `Vec<u8>`,
    otherwise the primitive name.
    """
    definition, path = _scale_info(runtime_config, type_id)
    if path:
        return str(path[-1])
    if "primitive" in definition:
        return str(definition["primitive"])
    if "sequence" in definition:
        element, _ = _scale_info(runtime_config, definition["sequence"]["type"])
        if element.get("primitive") == "u8":
            return BYTES_TYPE
    return None


def _scale_info(runtime_config: Any, type_id: int) -> tuple[dict[str, Any], list[str]]:
    decoder_class = runtime_config.get_decoder_class(f"scale_info::{type_id}")
    value = getattr(getattr(decoder_class, "scale_info_type", None), "value", None) or {}
    return value.get("def") or {}, value.get("path") or []


def arg_type_names(event_metadata: Any, resolve_type: TypeResolver | None = None) -> list[str]:
    """Declared argument type names of an event, in order.

    V14+ metadata describes an event as a variant whose `fields` carry a
    `typeName` and a registry id; `resolve_type` names the id when the
    `typeName` is missing. Older metadata lists `args` as type strings.
    """
    value = getattr(event_metadata, "value", None) or {}
    args = value.get("fields")
    if args is None:
        args = value.get("args") or []
    return [_arg_type_name(arg, resolve_type) for arg in args]


def _arg_type_name(arg: Any, resolve_type: TypeResolver | None) -> str:
    if not isinstance(arg, dict):
        return str(arg)
    if arg.get("typeName"):
        return str(arg["typeName"])
    ty = arg.get("type")
    if isinstance(ty, str) and ty:
        return ty
    if isinstance(ty, int) and resolve_type is not None:
        return resolve_type(ty) or UNKNOWN_TYPE
    return UNKNOWN_TYPE


def field_objects(event_record: Any) -> list[Any] | None:
    """Per-field decoder objects of a V14+ event record.

    None when the record does not have the scale-info event shape.
    """
    record_members = getattr(event_record, "value_object", None)
    if not isinstance(record_members, dict):
        return None
    pallet_event = getattr(record_members.get("event"), "value_object", None)
    if not isinstance(pallet_event, tuple) or len(pallet_event) != 2:
        return None
    variant = getattr(pallet_event[1], "value_object", None)
    if not isinstance(variant, tuple) or len(variant) != 2:
        return None
    attributes = variant[1]
    if attributes is None:
        return []
    members = getattr(attributes, "value_object", None)
    if isinstance(members, dict):
        return list(members.values())
    if isinstance(members, tuple):
        return list(members)
    return [attributes]


def raw_bytes(obj: Any) -> bytes | None:
    """Undecoded payload of a byte-string field, if the decoder kept one."""
    payload = getattr(obj, "value_object", None)
    return bytes(payload) if isinstance(payload, (bytes, bytearray)) else None


def to_event_record(
    index: int,
    value: dict[str, Any],
    type_names: list[str],
    objects: list[Any] | None = None,
) -> EventRecord:
    """Map one decoded `EventRecord` value onto the domain record.

    Module names are lower-cased; event names are kept as declared. Byte-string
    fields carry their raw payload when `objects` lines up with the values,
    since the decoder hands over valid UTF-8 as text and anything else as hex.
    """
    values = attribute_values(value.get("attributes"))
    tags = list(type_names) + [UNKNOWN_TYPE] * (len(values) - len(type_names))
    if objects is not None and len(objects) == len(values):
        for i, (tag, obj) in enumerate(zip(tags, objects)):
            payload = raw_bytes(obj) if tag == BYTES_TYPE else None
            if payload is not None:
                values[i] = payload
    return EventRecord(
        module=str(value["module_id"]).lower(),
        name=str(value["event_id"]),
        fields=tuple(EventField(type_tag=t, value=v) for t, v in zip(tags, values)),
        index=index,
    )


# ---------------------------------------------------------------------------
# Block source
# ---------------------------------------------------------------------------


class SubstrateBlockSource:
    """`IBlockSource` over a live Substrate node.

    Parameters
    ----------
    rpc : NodeRPC
        HTTP JSON-RPC client for the plain calls.
    substrate_factory : SubstrateFactory
        Returns a connected `SubstrateInterface` (called in a worker thread).
    """

    def __init__(self, rpc: NodeRPC, substrate_factory: SubstrateFactory) -> None:
        self.rpc = rpc
        self._factory = substrate_factory
        self._substrate: Any = None
        self._lock = asyncio.Lock()

    async def best_block_number(self) -> int:
        return await self.rpc.best_block_number()

    async def block_hash(self, number: int) -> str:
        return await self.rpc.block_hash(number)

    async def node_info(self) -> NodeInfo:
        return await self.rpc.node_info()

    async def events_at(self, block_hash: str) -> list[EventRecord]:
        async with self._lock:
            try:
                return await asyncio.to_thread(self._load_events, block_hash)
            except FetchError:
                raise
            except Exception as e:
                raise FetchError(f"failed to decode events of block {block_hash}: {e}") from e

    def _query_client(self) -> Any:
        if self._substrate is None:
            self._substrate = self._factory()
        return self._substrate

    def _load_events(self, block_hash: str) -> list[EventRecord]:
        substrate = self._query_client()
        records = substrate.get_events(block_hash=block_hash)
        # the runtime of `block_hash` is loaded by `get_events`
        resolve_type = partial(registry_type_name, substrate.runtime_config)
        arg_types: dict[tuple[str, str], list[str]] = {}
        out: list[EventRecord] = []
        for i, record in enumerate(records):
            value = record.value
            key = (value["module_id"], value["event_id"])
            if key not in arg_types:
                meta = substrate.get_metadata_event(key[0], key[1], block_hash=block_hash)
                arg_types[key] = arg_type_names(meta, resolve_type)
            out.append(to_event_record(i, value, arg_types[key], field_objects(record)))
        return out

    async def header_stream(self) -> AsyncGenerator[Header, None]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[Header] = asyncio.Queue()
        try:
            substrate = await asyncio.to_thread(self._factory)
        except Exception as e:
            raise FetchError(f"failed to open the new head subscription: {e}") from e

        def on_head(obj: Any, update_nr: int, subscription_id: str) -> None:
            header = obj.get("header", obj)
            loop.call_soon_threadsafe(queue.put_nowait, Header(block_number=parse_block_number(header["number"])))
            # returning None keeps the subscription open

        runner = asyncio.ensure_future(asyncio.to_thread(substrate.subscribe_block_headers, on_head))
        getter: asyncio.Future[Header] | None = None
        try:
            while True:
                getter = asyncio.ensure_future(queue.get())
                done, _ = await asyncio.wait({getter, runner}, return_when=asyncio.FIRST_COMPLETED)
                if getter in done:
                    yield getter.result()
                    continue
                exc = runner.exception()
                raise FetchError(f"new head subscription ended: {exc or 'closed by node'}") from exc
        finally:
            if getter is not None:
                getter.cancel()
            substrate.close()
            runner.add_done_callback(_retrieve_teardown_result)

    async def aclose(self) -> None:
        if self._substrate is not None:
            self._substrate.close()
            self._substrate = None
        await self.rpc.aclose()


def _retrieve_teardown_result(task: asyncio.Future[Any]) -> None:
    # The subscription thread exits with an error once its socket is closed.
    if not task.cancelled() and task.exception() is not None:
        logger.debug("header subscription closed: %s", task.exception())


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------


def build_block_source(config: InspectorConfig) -> SubstrateBlockSource:
    """Wire `NodeRPC` + `SubstrateInterface` from the run configuration."""
    rpc = NodeRPC(config.rpc_url(), timeout_s=config.timeout_s)

    def connect() -> Any:
        from scalecodec.type_registry import load_type_registry_file
        from substrateinterface import SubstrateInterface

        type_registry = load_type_registry_file(str(config.types_path)) if config.types_path else None
        logger.debug("connecting to %s (types: %s)", config.url, config.types_path)
        return SubstrateInterface(url=config.url, type_registry=type_registry)

    return SubstrateBlockSource(rpc, connect)
