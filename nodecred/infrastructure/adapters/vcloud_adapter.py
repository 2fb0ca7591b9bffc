"""
vCloud Provider Adapter

Architectural Intent:
- Implements NodeMetadataSourcePort for a vCloud Director style provider
- Simulates the vCloud REST API payloads without a live endpoint, enabling
  integration testing and local development with zero cloud credentials
- When a real client is available, replace the _stub_* helpers with actual
  API calls; the public method signatures remain stable

Design Decisions:
- The in-memory registries (_vapps, _templates) play the role of the vCloud
  backend: register_vapp adds entries and remove_vapp deletes them
- get_node_metadata translates the raw vApp dict into a NodeMetadata:
  status codes map to NodeState, the org/vdc links become a nested
  Location chain, the template becomes an Image with default credentials
- Tags follow the provisioning naming convention "<tag>-<hex suffix>"
- Unknown ids return None; the adapter never raises for a missing vApp

Simulated API version: 0.8
"""

import ipaddress
import logging
import re
import uuid
from typing import Optional, Any

from nodecred.domain.entities.node_metadata import (
    Image,
    Location,
    LocationScope,
    NodeMetadata,
    NodeState,
)
from nodecred.domain.value_objects.credentials import Credentials

logger = logging.getLogger(__name__)

API_VERSION = "0.8"

# vApp status codes as reported by the vCloud API
VAPP_STATUS_TO_NODE_STATE: dict[int, NodeState] = {
    -1: NodeState.ERROR,
    0: NodeState.PENDING,
    1: NodeState.PENDING,
    2: NodeState.TERMINATED,
    3: NodeState.SUSPENDED,
    4: NodeState.RUNNING,
}

STATUS_ON = 4

_TAGGED_NAME_RE = re.compile(r"^([^-]+)-[0-9a-f]+$")


def parse_tag(name: str) -> Optional[str]:
    """Extract the group tag from a vApp name like 'web-1a2b', if any."""
    match = _TAGGED_NAME_RE.match(name or "")
    return match.group(1) if match else None


def _make_vapp_id() -> str:
    """Return a plausible numeric vApp id."""
    return str(uuid.uuid4().int % 10**8)


def _href(endpoint: str, kind: str, resource_id: str) -> str:
    return f"{endpoint.rstrip('/')}/api/v{API_VERSION}/{kind}/{resource_id}"


def _stub_get_vapp(vapps: dict[str, dict], vapp_id: str) -> Optional[dict]:
    """
    Simulate GET /vApp/{id}.

    The real call returns the vApp XML; here it is already decoded into:
    {
        "id": "...", "name": "...", "href": "...", "status": 4,
        "org": {"id": "...", "name": "..."},
        "vdc": {"id": "...", "name": "..."},
        "vAppTemplate": {"id": "..."},
        "networkConnections": [{"network": "...", "ipAddress": "..."}]
    }
    A 404 is represented by None.
    """
    return vapps.get(vapp_id)


class VCloudAdapter:
    """
    vCloud node metadata adapter.

    Configuration parameters
    ------------------------
    endpoint : str
        Base URL of the vCloud API, used to build resource hrefs.
    provider_id : str
        Id of the top-level provider Location.
    """

    def __init__(
        self,
        endpoint: str = "https://vcloud.example.com",
        provider_id: str = "vcloud",
    ) -> None:
        self.endpoint = endpoint
        self.provider_id = provider_id

        self._vapps: dict[str, dict] = {}
        self._templates: dict[str, dict] = {}

        logger.debug(
            "VCloudAdapter initialised (endpoint=%s, provider=%s)",
            endpoint,
            provider_id,
        )

    # ------------------------------------------------------------------
    # Simulated backend management
    # ------------------------------------------------------------------

    def register_template(
        self,
        template_id: str,
        name: str = "",
        default_credentials: Optional[Credentials] = None,
    ) -> dict:
        """Add a vApp template to the catalog."""
        template: dict[str, Any] = {
            "id": template_id,
            "name": name or template_id,
            "href": _href(self.endpoint, "vAppTemplate", template_id),
            "defaultCredentials": None,
        }
        if default_credentials is not None:
            template["defaultCredentials"] = {
                "username": default_credentials.account,
                "password": default_credentials.secret,
            }
        self._templates[template_id] = template
        logger.debug("Registered template %s (%s)", template_id, template["name"])
        return template

    def register_vapp(
        self,
        name: str,
        org_id: str,
        vdc_id: str,
        template_id: Optional[str] = None,
        vapp_id: Optional[str] = None,
        status: int = STATUS_ON,
        ip_addresses: Optional[list[str]] = None,
        tag: Optional[str] = None,
    ) -> dict:
        """
        Add a vApp to the simulated backend and return its raw dict.

        An explicit tag overrides the one parsed from the name.
        """
        if not org_id:
            raise ValueError(f"vApp {name!r} needs a non-empty org id")
        if not vdc_id:
            raise ValueError(f"vApp {name!r} needs a non-empty vdc id")
        vapp_id = vapp_id or _make_vapp_id()
        vapp: dict[str, Any] = {
            "id": vapp_id,
            "name": name,
            "href": _href(self.endpoint, "vApp", vapp_id),
            "status": status,
            "org": {"id": org_id, "name": org_id},
            "vdc": {"id": vdc_id, "name": vdc_id},
            "vAppTemplate": {"id": template_id} if template_id else None,
            "networkConnections": [
                {"network": "default", "ipAddress": ip} for ip in ip_addresses or []
            ],
        }
        if tag is not None:
            vapp["tag"] = tag
        self._vapps[vapp_id] = vapp
        logger.info("Registered vApp %s (%s) in %s/%s", vapp_id, name, org_id, vdc_id)
        return vapp

    def remove_vapp(self, vapp_id: str) -> bool:
        """Delete a vApp. Returns True if it existed."""
        if self._vapps.pop(vapp_id, None) is None:
            logger.warning("remove_vapp: no vApp with id %s", vapp_id)
            return False
        logger.info("Removed vApp %s", vapp_id)
        return True

    def list_vapp_ids(self) -> list[str]:
        return sorted(self._vapps)

    # ------------------------------------------------------------------
    # NodeMetadataSourcePort implementation
    # ------------------------------------------------------------------

    async def get_node_metadata(self, node_id: str) -> Optional[NodeMetadata]:
        """
        Return the NodeMetadata for the vApp with the given id.

        Parameters
        ----------
        node_id : str
            vApp id.

        Returns
        -------
        NodeMetadata | None
            None when the vApp does not exist.
        """
        logger.debug("vCloud GET vApp/%s", node_id)
        vapp = _stub_get_vapp(self._vapps, node_id)
        if vapp is None:
            logger.debug("No vApp record for id %s", node_id)
            return None
        return self._to_node_metadata(vapp)

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def _to_node_metadata(self, vapp: dict) -> NodeMetadata:
        public, private = self._split_addresses(vapp.get("networkConnections", []))
        status = vapp.get("status")
        state = VAPP_STATUS_TO_NODE_STATE.get(status, NodeState.UNKNOWN)
        if state is NodeState.UNKNOWN:
            logger.warning("vApp %s has unrecognised status %r", vapp["id"], status)

        tag = vapp["tag"] if "tag" in vapp else parse_tag(vapp["name"])

        return NodeMetadata(
            id=vapp["id"],
            name=vapp["name"],
            tag=tag,
            location=self._location_for(vapp),
            image=self._image_for(vapp),
            state=state,
            public_addresses=public,
            private_addresses=private,
            extra={"href": vapp["href"], "status": status},
        )

    def _location_for(self, vapp: dict) -> Optional[Location]:
        vdc = vapp.get("vdc")
        if not vdc:
            return None
        org = vapp.get("org")
        parent = None
        if org:
            provider = Location(id=self.provider_id, scope=LocationScope.PROVIDER)
            parent = Location(
                id=org["id"],
                scope=LocationScope.ORG,
                description=org.get("name", ""),
                parent=provider,
            )
        return Location(
            id=vdc["id"],
            scope=LocationScope.VDC,
            description=vdc.get("name", ""),
            parent=parent,
        )

    def _image_for(self, vapp: dict) -> Optional[Image]:
        ref = vapp.get("vAppTemplate")
        if not ref:
            return None
        template = self._templates.get(ref["id"])
        if template is None:
            logger.debug("vApp %s references unknown template %s", vapp["id"], ref["id"])
            return Image(id=ref["id"])

        creds = template.get("defaultCredentials")
        default_credentials = None
        if creds and creds.get("username"):
            default_credentials = Credentials(creds["username"], creds.get("password"))
        return Image(
            id=template["id"],
            name=template["name"],
            default_credentials=default_credentials,
        )

    @staticmethod
    def _split_addresses(connections: list[dict]) -> tuple[tuple[str, ...], tuple[str, ...]]:
        public: list[str] = []
        private: list[str] = []
        for conn in connections:
            ip = conn.get("ipAddress")
            if not ip:
                continue
            try:
                is_private = ipaddress.ip_address(ip).is_private
            except ValueError:
                logger.warning("Ignoring invalid IP address %r", ip)
                continue
            (private if is_private else public).append(ip)
        return tuple(public), tuple(private)
