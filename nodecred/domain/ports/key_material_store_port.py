"""
Key Material Store Port

Architectural Intent:
- Read-side contract of the shared (org, tag) -> key pair mapping
- The store is populated by the provisioning workflow; consumers only read
"""

from typing import Protocol, runtime_checkable, Optional
from nodecred.domain.value_objects.key_material import KeyMaterial
from nodecred.domain.value_objects.org_tag_key import OrgTagKey


@runtime_checkable
class KeyMaterialStorePort(Protocol):
    """Port for looking up cached key material."""

    def get(self, key: OrgTagKey) -> Optional[KeyMaterial]:
        """Return the key material cached for the key, or None."""
        ...

    def __contains__(self, key: object) -> bool:
        ...
