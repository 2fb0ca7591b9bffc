"""
Composition Root

Architectural Intent:
- Dependency injection composition root for nodecred
- Single place where adapters, the key pair store and use cases are wired
- The key pair store is created here and injected; nothing reaches for a
  global instance

Design Decisions:
- Uses a simple dataclass container instead of a DI framework
- Factory function creates and wires all dependencies from a config
- The inventory is loaded only when a path is configured
"""

from dataclasses import dataclass
from typing import Optional

from nodecred.application.use_cases.enrich_node_metadata import NodeMetadataEnricher
from nodecred.infrastructure.adapters.key_pair_store import KeyPairStore
from nodecred.infrastructure.adapters.vcloud_adapter import VCloudAdapter
from nodecred.infrastructure.config import NodecredConfig
from nodecred.infrastructure.inventory import load_inventory, read_inventory
from nodecred.infrastructure.telemetry.otel_exporter import (
    OTELExporter,
    create_exporter,
)


@dataclass
class NodecredContainer:
    """DI container holding all wired dependencies."""

    config: NodecredConfig
    vcloud_adapter: VCloudAdapter
    key_store: KeyPairStore
    telemetry: OTELExporter
    enricher: NodeMetadataEnricher


def create_container(config: Optional[NodecredConfig] = None) -> NodecredContainer:
    """Create and wire all dependencies."""
    config = config or NodecredConfig()

    if config.provider.name != "vcloud":
        raise ValueError(f"Unsupported provider: {config.provider.name!r}")

    vcloud_adapter = VCloudAdapter(
        endpoint=config.provider.endpoint,
        provider_id=config.provider.provider_id,
    )
    key_store = KeyPairStore()

    if config.inventory.path:
        load_inventory(read_inventory(config.inventory.path), vcloud_adapter, key_store)

    telemetry = create_exporter(
        endpoint=config.telemetry.endpoint,
        service_name=config.telemetry.service_name,
        insecure=config.telemetry.insecure,
    )

    enricher = NodeMetadataEnricher(vcloud_adapter, key_store, telemetry)

    return NodecredContainer(
        config=config,
        vcloud_adapter=vcloud_adapter,
        key_store=key_store,
        telemetry=telemetry,
        enricher=enricher,
    )
