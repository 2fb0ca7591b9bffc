"""
Key Pair Store

Architectural Intent:
- Implements KeyMaterialStorePort as a process-wide, in-memory mapping of
  (org, tag) -> key pair
- Written by the provisioning workflow (or the inventory loader), read by
  the enricher

Design Decisions:
- Writers serialize on a threading.Lock; readers never take it. A plain
  dict lookup is atomic under the GIL, so a read racing an insert either
  sees the entry or misses it, never a torn value
- put_if_absent mirrors ConcurrentMap.putIfAbsent so concurrent
  provisioners of the same group agree on one key pair
"""

import logging
import threading
from typing import Iterator, Optional

from nodecred.domain.value_objects.key_material import KeyMaterial
from nodecred.domain.value_objects.org_tag_key import OrgTagKey

logger = logging.getLogger(__name__)


class KeyPairStore:
    """Thread-safe in-memory store of key pairs keyed by OrgTagKey."""

    def __init__(self, initial: Optional[dict[OrgTagKey, KeyMaterial]] = None) -> None:
        self._lock = threading.Lock()
        self._entries: dict[OrgTagKey, KeyMaterial] = dict(initial or {})

    def get(self, key: OrgTagKey) -> Optional[KeyMaterial]:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[OrgTagKey]:
        return iter(self.keys())

    def keys(self) -> list[OrgTagKey]:
        """Return a snapshot of the cached keys."""
        with self._lock:
            return list(self._entries)

    def put(self, key: OrgTagKey, key_material: KeyMaterial) -> Optional[KeyMaterial]:
        """Store key material, returning whatever it replaced."""
        with self._lock:
            previous = self._entries.get(key)
            self._entries[key] = key_material
        logger.debug("Cached key pair %s for %s", key_material.account, key)
        return previous

    def put_if_absent(self, key: OrgTagKey, key_material: KeyMaterial) -> KeyMaterial:
        """Store key material unless some is already cached; return the winner."""
        with self._lock:
            existing = self._entries.get(key)
            if existing is not None:
                return existing
            self._entries[key] = key_material
        logger.debug("Cached key pair %s for %s", key_material.account, key)
        return key_material

    def remove(self, key: OrgTagKey) -> Optional[KeyMaterial]:
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.debug("Evicted key pair for %s", key)
        return removed
