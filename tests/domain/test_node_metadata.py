"""Tests for the NodeMetadata entity."""

import pytest
from nodecred.domain.entities.node_metadata import (
    Image,
    Location,
    LocationScope,
    NodeMetadata,
    NodeState,
)
from nodecred.domain.value_objects.credentials import Credentials


def _location(org_id="org-7"):
    org = Location(id=org_id, scope=LocationScope.ORG)
    return Location(id="vdc-1", scope=LocationScope.VDC, parent=org)


class TestNodeMetadata:
    def test_defaults(self):
        node = NodeMetadata(id="node-1")
        assert node.tag is None
        assert node.credentials is None
        assert node.state is NodeState.UNKNOWN
        assert node.org_id is None

    def test_empty_id_rejected(self):
        with pytest.raises(ValueError, match="Node id cannot be empty"):
            NodeMetadata(id="")

    def test_org_id_from_location_parent(self):
        node = NodeMetadata(id="node-1", location=_location("org-7"))
        assert node.org_id == "org-7"

    def test_org_id_none_without_parent(self):
        node = NodeMetadata(id="node-1", location=Location(id="vdc-1"))
        assert node.org_id is None

    def test_default_credentials_from_image(self):
        creds = Credentials("ubuntu", "pw")
        node = NodeMetadata(id="node-1", image=Image(id="img", default_credentials=creds))
        assert node.default_credentials == creds

    def test_default_credentials_without_image(self):
        assert NodeMetadata(id="node-1").default_credentials is None

    def test_with_credentials_returns_copy(self):
        node = NodeMetadata(id="node-1", tag="web")
        creds = Credentials("ubuntu", "PK1")
        enriched = node.with_credentials(creds)
        assert enriched.credentials == creds
        assert enriched.tag == "web"
        assert node.credentials is None

    def test_frozen(self):
        node = NodeMetadata(id="node-1")
        with pytest.raises(AttributeError):
            node.tag = "web"

    def test_equality_ignores_extra(self):
        a = NodeMetadata(id="node-1", extra={"href": "a"})
        b = NodeMetadata(id="node-1", extra={"href": "b"})
        assert a == b

    def test_hashable(self):
        node = NodeMetadata(id="node-1", location=_location(), extra={"k": "v"})
        assert hash(node) == hash(NodeMetadata(id="node-1", location=_location()))


class TestNodeMetadataToDict:
    def test_secrets_redacted_by_default(self):
        node = NodeMetadata(id="node-1", credentials=Credentials("ubuntu", "PK1"))
        data = node.to_dict()
        assert data["credentials"] == {"account": "ubuntu", "secret": "***"}

    def test_secrets_included_on_request(self):
        node = NodeMetadata(id="node-1", credentials=Credentials("ubuntu", "PK1"))
        data = node.to_dict(include_secrets=True)
        assert data["credentials"]["secret"] == "PK1"

    def test_nested_location_and_image(self):
        node = NodeMetadata(
            id="node-1",
            location=_location(),
            image=Image(id="img", name="Ubuntu", default_credentials=Credentials("ubuntu")),
            state=NodeState.RUNNING,
            private_addresses=("10.0.0.5",),
        )
        data = node.to_dict()
        assert data["org_id"] == "org-7"
        assert data["location"]["parent"]["scope"] == "ORG"
        assert data["image"]["default_credentials"] == {"account": "ubuntu", "secret": None}
        assert data["state"] == "RUNNING"
        assert data["private_addresses"] == ["10.0.0.5"]
