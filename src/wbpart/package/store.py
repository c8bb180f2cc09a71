"""In-memory part store backed by a zip archive on load/save.

Part names are stored without a leading `/`. Reading an absent part returns
`b""`; absence is never an error at this layer.
"""

from __future__ import annotations

import threading
import zipfile
from pathlib import Path
from typing import IO, Mapping, Optional, Union

from wbpart.core.constants import CONTENT_TYPES_PATH
from wbpart.utils.log import get_logger

logger = get_logger("package.store")

ZipSource = Union[str, Path, IO[bytes]]


def normalize_part_name(name: str) -> str:
    if not isinstance(name, str):
        raise TypeError(f"part name: expected str, got {type(name).__name__}")
    return name.lstrip("/")


class PartStore:
    def __init__(self, parts: Optional[Mapping[str, bytes]] = None) -> None:
        self._lock = threading.Lock()
        self._parts: dict[str, bytes] = {}
        for name, data in (parts or {}).items():
            self._parts[normalize_part_name(name)] = bytes(data)

    def read_part(self, name: str) -> bytes:
        with self._lock:
            return self._parts.get(normalize_part_name(name), b"")

    def write_part(self, name: str, data: bytes) -> None:
        if not isinstance(data, (bytes, bytearray)):
            raise TypeError(f"write_part({name!r}): expected bytes, got {type(data).__name__}")
        with self._lock:
            self._parts[normalize_part_name(name)] = bytes(data)

    def has_part(self, name: str) -> bool:
        with self._lock:
            return normalize_part_name(name) in self._parts

    def names(self) -> list[str]:
        with self._lock:
            return list(self._parts)

    @classmethod
    def from_zip(cls, source: ZipSource) -> "PartStore":
        with zipfile.ZipFile(source) as zf:
            parts = {info.filename: zf.read(info) for info in zf.infolist() if not info.is_dir()}
        logger.debug("loaded %d parts", len(parts))
        return cls(parts)

    def to_zip(self, target: ZipSource) -> None:
        with self._lock:
            items = list(self._parts.items())
        # [Content_Types].xml first; some readers sniff it.
        items.sort(key=lambda item: item[0] != CONTENT_TYPES_PATH)
        with zipfile.ZipFile(target, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, data in items:
                zf.writestr(name, data)
        logger.debug("wrote %d parts", len(items))

