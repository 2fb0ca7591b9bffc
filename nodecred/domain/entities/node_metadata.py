"""
Node Metadata Module

Architectural Intent:
- NodeMetadata is the provider-neutral view of a compute instance
- Records are immutable; attaching credentials produces a new instance
- Location forms a parent chain (provider -> org -> vdc) from which the
  owning organization is derived
- Image carries the default login credentials of the template it came from

Design Decisions:
- Frozen dataclasses so enrichment can never leak changes into a source's
  cached records
- to_dict() is the single rendering used by the CLI; secrets are redacted
  unless explicitly requested
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import Optional, Any
from nodecred.domain.value_objects.credentials import Credentials


class NodeState(Enum):
    PENDING = auto()
    RUNNING = auto()
    SUSPENDED = auto()
    TERMINATED = auto()
    ERROR = auto()
    UNKNOWN = auto()


class LocationScope(Enum):
    PROVIDER = auto()
    ORG = auto()
    VDC = auto()
    ZONE = auto()


@dataclass(frozen=True)
class Location:
    """A place a node lives in, optionally nested inside a parent location."""

    id: str
    scope: LocationScope = LocationScope.VDC
    description: str = ""
    parent: Optional[Location] = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Location id cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "scope": self.scope.name,
            "description": self.description,
            "parent": self.parent.to_dict() if self.parent else None,
        }


@dataclass(frozen=True)
class Image:
    """The template a node was instantiated from."""

    id: str
    name: str = ""
    default_credentials: Optional[Credentials] = None

    def to_dict(self, include_secrets: bool = False) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "default_credentials": _credentials_to_dict(
                self.default_credentials, include_secrets
            ),
        }


def _credentials_to_dict(
    credentials: Optional[Credentials], include_secrets: bool
) -> Optional[dict[str, Any]]:
    if credentials is None:
        return None
    if include_secrets:
        secret = credentials.secret
    else:
        secret = "***" if credentials.secret else None
    return {"account": credentials.account, "secret": secret}


@dataclass(frozen=True)
class NodeMetadata:
    """
    Entity describing a compute node as known to the abstraction layer.
    """

    id: str
    name: str = ""
    tag: Optional[str] = None
    location: Optional[Location] = None
    image: Optional[Image] = None
    credentials: Optional[Credentials] = None
    state: NodeState = NodeState.UNKNOWN
    public_addresses: tuple[str, ...] = ()
    private_addresses: tuple[str, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Node id cannot be empty")

    @property
    def org_id(self) -> Optional[str]:
        """Id of the organization owning this node, if known."""
        if self.location is None or self.location.parent is None:
            return None
        return self.location.parent.id

    @property
    def default_credentials(self) -> Optional[Credentials]:
        if self.image is None:
            return None
        return self.image.default_credentials

    def with_credentials(self, credentials: Credentials) -> NodeMetadata:
        """Return a copy of this node carrying the given credentials."""
        return replace(self, credentials=credentials)

    def to_dict(self, include_secrets: bool = False) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tag": self.tag,
            "state": self.state.name,
            "org_id": self.org_id,
            "location": self.location.to_dict() if self.location else None,
            "image": self.image.to_dict(include_secrets) if self.image else None,
            "credentials": _credentials_to_dict(self.credentials, include_secrets),
            "public_addresses": list(self.public_addresses),
            "private_addresses": list(self.private_addresses),
            "extra": dict(self.extra),
        }
