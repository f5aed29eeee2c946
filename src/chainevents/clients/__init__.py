"""Node clients and the Substrate-backed block source."""

from chainevents.clients.rpc import NodeRPC, parse_block_number
from chainevents.clients.substrate import SubstrateBlockSource, build_block_source, to_event_record

__all__ = [
    "NodeRPC",
    "parse_block_number",
    "SubstrateBlockSource",
    "build_block_source",
    "to_event_record",
]
