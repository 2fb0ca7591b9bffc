"""
Infrastructure Adapters

Architectural Intent:
- Concrete implementations of the domain ports
"""

from nodecred.infrastructure.adapters.key_pair_store import KeyPairStore
from nodecred.infrastructure.adapters.vcloud_adapter import VCloudAdapter

__all__ = [
    "KeyPairStore",
    "VCloudAdapter",
]
