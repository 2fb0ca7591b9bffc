"""
Domain Ports Package

Architectural Intent:
- Contains port interfaces (abstract contracts) for external dependencies
- Ports define what the domain needs, adapters implement how
- Follows Hexagonal Architecture principles
"""

from nodecred.domain.ports.node_metadata_port import NodeMetadataSourcePort
from nodecred.domain.ports.key_material_store_port import KeyMaterialStorePort
from nodecred.domain.ports.telemetry_port import TelemetryPort

__all__ = [
    "NodeMetadataSourcePort",
    "KeyMaterialStorePort",
    "TelemetryPort",
]
