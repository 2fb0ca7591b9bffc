"""Integration tests for the enrichment flow.

These tests wire the real enricher with the simulated vCloud adapter and
the in-memory key pair store, exercising the documented lookup rules end
to end.
"""

import pytest

from nodecred.application.use_cases.enrich_node_metadata import NodeMetadataEnricher
from nodecred.domain.value_objects.credentials import Credentials
from nodecred.domain.value_objects.key_material import KeyMaterial
from nodecred.domain.value_objects.org_tag_key import OrgTagKey
from nodecred.infrastructure.adapters.key_pair_store import KeyPairStore
from nodecred.infrastructure.adapters.vcloud_adapter import VCloudAdapter
from nodecred.infrastructure.telemetry.otel_exporter import OTELConfig, OTELExporter


@pytest.fixture
def adapter():
    adapter = VCloudAdapter()
    adapter.register_template(
        "ubuntu-2204", name="Ubuntu", default_credentials=Credentials("ubuntu", "changeme")
    )
    adapter.register_template("appliance", name="Appliance")
    adapter.register_vapp("web-1a2b", "org-7", "vdc-1", "ubuntu-2204", vapp_id="node-1",
                          tag="web")
    adapter.register_vapp("solo", "org-7", "vdc-1", "ubuntu-2204", vapp_id="node-2")
    adapter.register_vapp("db-3c4d", "org-7", "vdc-1", "appliance", vapp_id="node-3")
    return adapter


@pytest.fixture
def store():
    store = KeyPairStore()
    store.put(OrgTagKey("org-7", "web"), KeyMaterial("web-key", "PK1"))
    store.put(OrgTagKey("org-7", "db"), KeyMaterial("db-key", "PK3"))
    return store


class TestEnrichmentFlow:
    @pytest.mark.asyncio
    async def test_tagged_node_gets_cached_key_with_image_account(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)

        node = await enricher.fetch_and_enrich("node-1")

        assert node.credentials == Credentials("ubuntu", "PK1")

    @pytest.mark.asyncio
    async def test_untagged_node_gets_image_defaults(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)

        node = await enricher.fetch_and_enrich("node-2")

        assert node.tag is None
        assert node.credentials == Credentials("ubuntu", "changeme")

    @pytest.mark.asyncio
    async def test_cached_key_without_login_account(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)

        node = await enricher.fetch_and_enrich("node-3")

        assert node.tag == "db"
        assert node.credentials is None

    @pytest.mark.asyncio
    async def test_unknown_node_absent(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)
        assert await enricher.fetch_and_enrich("node-404") is None

    @pytest.mark.asyncio
    async def test_deleted_node_absent(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)
        adapter.remove_vapp("node-1")
        assert await enricher.fetch_and_enrich("node-1") is None

    @pytest.mark.asyncio
    async def test_key_inserted_later_is_picked_up(self, adapter):
        store = KeyPairStore()
        enricher = NodeMetadataEnricher(adapter, store)

        before = await enricher.fetch_and_enrich("node-1")
        store.put_if_absent(OrgTagKey("org-7", "web"), KeyMaterial("web-key", "PK9"))
        after = await enricher.fetch_and_enrich("node-1")

        assert before.credentials == Credentials("ubuntu", "changeme")
        assert after.credentials == Credentials("ubuntu", "PK9")

    @pytest.mark.asyncio
    async def test_repeated_lookups_equal(self, adapter, store):
        enricher = NodeMetadataEnricher(adapter, store)
        results = [await enricher.fetch_and_enrich("node-1") for _ in range(3)]
        assert results[0] == results[1] == results[2]

    @pytest.mark.asyncio
    async def test_outcomes_buffered_by_exporter(self, adapter, store):
        exporter = OTELExporter(OTELConfig())
        enricher = NodeMetadataEnricher(adapter, store, exporter)

        for node_id in ("node-1", "node-2", "node-3", "node-404"):
            await enricher.fetch_and_enrich(node_id)

        outcomes = [m["attributes"]["outcome"] for m in exporter.drain()]
        assert outcomes == ["cache", "image", "none", "absent"]
