"""A fixed-size table mapping file names to file-header sector numbers."""

from __future__ import annotations

import struct
from collections.abc import Iterator
from dataclasses import dataclass
from typing import ClassVar, Optional

FILE_NAME_MAX_LEN = 50


@dataclass
class DirectoryEntry:
    """One slot of a directory: a file name and the sector of its header."""

    in_use: bool = False
    sector: int = 0
    name: str = ""

    # bool, padding, int sector, name plus its terminating NUL, padding
    _LAYOUT: ClassVar[struct.Struct] = struct.Struct(
        f"<?3xi{FILE_NAME_MAX_LEN + 1}s1x"
    )
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        raw_name = self.name.encode("latin-1")[:FILE_NAME_MAX_LEN]
        return self._LAYOUT.pack(self.in_use, self.sector, raw_name)

    @classmethod
    def unpack(cls, data: bytes, offset: int = 0) -> "DirectoryEntry":
        in_use, sector, raw_name = cls._LAYOUT.unpack_from(data, offset)
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(bool(in_use), sector, name)


def _key(name: str) -> str:
    return name[:FILE_NAME_MAX_LEN]


class Directory:
    """A directory of at most ``size`` files that never grows."""

    def __init__(self, size: int) -> None:
        if size < 0:
            raise ValueError("directory size must not be negative")
        self._table = [DirectoryEntry() for _ in range(size)]

    def __len__(self) -> int:
        return len(self._table)

    def _find_entry(self, name: str) -> Optional[DirectoryEntry]:
        key = _key(name)
        return next(
            (e for e in self._table if e.in_use and e.name == key), None
        )

    def find(self, name: str) -> Optional[int]:
        """Return the header sector of file ``name``, or None if absent."""
        entry = self._find_entry(name)
        return entry.sector if entry is not None else None

    def add(self, name: str, sector: int) -> bool:
        """Add ``name`` at ``sector``; False if it exists or there is no room."""
        if self._find_entry(name) is not None:
            return False
        free = next((e for e in self._table if not e.in_use), None)
        if free is None:
            return False
        free.in_use = True
        free.name = _key(name)
        free.sector = sector
        return True

    def remove(self, name: str) -> bool:
        """Remove ``name``; False if it is not in the directory."""
        entry = self._find_entry(name)
        if entry is None:
            return False
        entry.in_use = False
        return True

    def names(self) -> Iterator[str]:
        """Yield the names of all files in table order."""
        return (e.name for e in self._table if e.in_use)

    def __iter__(self) -> Iterator[DirectoryEntry]:
        return (e for e in self._table if e.in_use)

    def to_bytes(self) -> bytes:
        """Serialise the whole table as it is stored on disk."""
        return b"".join(entry.pack() for entry in self._table)

    def load(self, data: bytes) -> None:
        """Replace the table's contents with the serialised form ``data``."""
        needed = len(self._table) * DirectoryEntry.SIZE
        if len(data) < needed:
            raise ValueError(
                f"directory data too short: {len(data)} < {needed} bytes"
            )
        self._table = [
            DirectoryEntry.unpack(data, i * DirectoryEntry.SIZE)
            for i in range(len(self._table))
        ]