"""
Node Metadata Source Port

Architectural Intent:
- Port interface for fetching raw node metadata from a cloud provider
- Implemented by provider adapters (vCloud)

Design Decisions:
- Uses Protocol for structural typing (no inheritance needed)
- A node that does not exist yields None rather than an exception, so
  callers can tell "not found" apart from a genuine failure
"""

from typing import Protocol, runtime_checkable, Optional
from nodecred.domain.entities.node_metadata import NodeMetadata


@runtime_checkable
class NodeMetadataSourcePort(Protocol):
    """Port for reading node metadata from a provider."""

    async def get_node_metadata(self, node_id: str) -> Optional[NodeMetadata]:
        """Return the node with the given id, or None if it does not exist."""
        ...
