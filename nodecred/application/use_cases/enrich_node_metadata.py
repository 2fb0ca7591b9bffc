"""
Node Metadata Enrichment Use Case

Architectural Intent:
- Fetches a node from the metadata source and ensures it carries usable
  login credentials before handing it to callers
- Credentials come from the key pair cached for the node's (org, tag), or
  failing that from the defaults of the node's image

Design Decisions:
- The key material store is injected read-only; the enricher never writes it
- Only an explicit "not found" (None from the source) is absorbed; every
  other failure propagates to the caller
- Each call records its outcome (absent, cache, image, none) through the
  optional telemetry exporter
"""

import logging
from typing import Optional

from nodecred.domain.entities.node_metadata import NodeMetadata
from nodecred.domain.errors import InvalidNodeIdError, MalformedNodeError
from nodecred.domain.ports.key_material_store_port import KeyMaterialStorePort
from nodecred.domain.ports.node_metadata_port import NodeMetadataSourcePort
from nodecred.domain.ports.telemetry_port import TelemetryPort
from nodecred.domain.value_objects.credentials import Credentials
from nodecred.domain.value_objects.org_tag_key import OrgTagKey

logger = logging.getLogger(__name__)

OUTCOME_ABSENT = "absent"
OUTCOME_CACHE = "cache"
OUTCOME_IMAGE = "image"
OUTCOME_NONE = "none"


class NodeMetadataEnricher:
    def __init__(
        self,
        source: NodeMetadataSourcePort,
        key_store: KeyMaterialStorePort,
        telemetry: Optional[TelemetryPort] = None,
    ):
        self.source = source
        self.key_store = key_store
        self.telemetry = telemetry

    async def fetch_and_enrich(self, node_id: str) -> Optional[NodeMetadata]:
        """
        Return the node with the given id carrying the best credentials
        available, or None if the source does not know the node.

        Raises InvalidNodeIdError when node_id is empty.
        """
        if not node_id:
            raise InvalidNodeIdError("node id must not be empty")

        span = None
        if self.telemetry:
            span = self.telemetry.start_span(
                "nodecred.fetch_and_enrich", {"node_id": node_id}
            )
        try:
            node = await self.source.get_node_metadata(node_id)
            if node is None:
                logger.debug("node %s not found during execution", node_id)
                self._record(node_id, OUTCOME_ABSENT)
                return None

            outcome = OUTCOME_NONE
            if node.tag:
                enriched = self.install_credentials_from_cache(node)
                if enriched is not node:
                    outcome = OUTCOME_CACHE
                node = enriched
            if node.credentials is None:
                enriched = self.install_default_credentials_from_image(node)
                if enriched is not node:
                    outcome = OUTCOME_IMAGE
                node = enriched

            self._record(node_id, outcome)
            return node
        finally:
            if self.telemetry:
                self.telemetry.end_span(span)

    def install_credentials_from_cache(self, node: NodeMetadata) -> NodeMetadata:
        key = self.org_tag_key_for(node)
        key_material = self.key_store.get(key)
        if key_material is None:
            return node

        account = self.login_account_for(node)
        if account is None:
            logger.debug(
                "key pair cached for %s but node %s has no login account",
                key,
                node.id,
            )
            return node

        return node.with_credentials(Credentials(account, key_material.private_key))

    def org_tag_key_for(self, node: NodeMetadata) -> OrgTagKey:
        org_id = node.org_id
        if org_id is None:
            raise MalformedNodeError(node.id, "location has no parent organization")
        return OrgTagKey(org_id, node.tag)

    @staticmethod
    def login_account_for(node: NodeMetadata) -> Optional[str]:
        if node.credentials is not None:
            return node.credentials.account
        if node.default_credentials is not None:
            return node.default_credentials.account
        return None

    @staticmethod
    def install_default_credentials_from_image(node: NodeMetadata) -> NodeMetadata:
        if node.default_credentials is None:
            return node
        return node.with_credentials(node.default_credentials)

    def _record(self, node_id: str, outcome: str) -> None:
        logger.debug("enrichment of node %s: %s", node_id, outcome)
        if self.telemetry:
            self.telemetry.record_enrichment(node_id, outcome)
