"""Shared relationship table for a package.

Each `.rels` part is decoded lazily on first access and then owned by the
table; reads and writes of one part's relationships hold that part's lock,
since relationships are added incrementally while a package is assembled.
"""

from __future__ import annotations

import re
import threading
from typing import Optional

from wbpart.codecs.rels_xml import Relationship, decode_relationships, encode_relationships
from wbpart.utils.log import get_logger

from .store import PartStore, normalize_part_name

logger = get_logger("package.rels")

_RID_RE = re.compile(r"^rId(\d+)$")


class Relationships:
    """Relationships of one `.rels` part."""

    def __init__(self, items: Optional[list[Relationship]] = None) -> None:
        self.lock = threading.RLock()
        self.items: list[Relationship] = list(items or [])

    def next_id(self) -> int:
        with self.lock:
            highest = 0
            for rel in self.items:
                m = _RID_RE.match(rel.id)
                if m:
                    highest = max(highest, int(m.group(1)))
            return highest + 1


class RelationshipTable:
    def __init__(self, store: PartStore) -> None:
        self._store = store
        self._lock = threading.Lock()
        self._parts: dict[str, Relationships] = {}

    def get(self, rels_path: str) -> Optional[Relationships]:
        """Return the relationships of `rels_path`, or None if the part is absent."""
        path = normalize_part_name(rels_path)
        with self._lock:
            rels = self._parts.get(path)
            if rels is not None:
                return rels
            if not self._store.has_part(path):
                return None
            rels = Relationships(decode_relationships(self._store.read_part(path)))
            self._parts[path] = rels
            return rels

    def relationships_for(self, rels_path: str) -> list[Relationship]:
        """Snapshot of the relationships in `rels_path` (empty if absent)."""
        rels = self.get(rels_path)
        if rels is None:
            return []
        with rels.lock:
            return list(rels.items)

    def add(self, rels_path: str, rel_type: str, target: str, target_mode: Optional[str] = None) -> int:
        """Append a relationship and return its numeric id (`rId<n>`)."""
        path = normalize_part_name(rels_path)
        with self._lock:
            rels = self._parts.get(path)
            if rels is None:
                existing = self._store.read_part(path)
                rels = Relationships(decode_relationships(existing))
                self._parts[path] = rels
        with rels.lock:
            rid = rels.next_id()
            rels.items.append(Relationship(f"rId{rid}", rel_type, target, target_mode))
        logger.debug("added rId%d to %s (%s)", rid, path, rel_type)
        return rid

    def flush(self) -> None:
        """Write every loaded relationship part back to the store."""
        with self._lock:
            parts = list(self._parts.items())
        for path, rels in parts:
            with rels.lock:
                data = encode_relationships(rels.items)
            self._store.write_part(path, data)
