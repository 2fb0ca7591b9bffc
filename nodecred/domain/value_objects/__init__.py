"""
Domain Value Objects

Architectural Intent:
- Immutable, value-equal building blocks shared by entities and ports
"""

from nodecred.domain.value_objects.credentials import Credentials
from nodecred.domain.value_objects.key_material import KeyMaterial
from nodecred.domain.value_objects.org_tag_key import OrgTagKey

__all__ = [
    "Credentials",
    "KeyMaterial",
    "OrgTagKey",
]
