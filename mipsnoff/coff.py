"""Little-endian MIPS COFF headers and the NOFF object header."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import ClassVar, Optional

MIPSELMAGIC = 0x0162
OMAGIC = 0o407
SOMAGIC = 0x0701
NOFFMAGIC = 0xBADFAD


class CoffError(ValueError):
    """Raised for malformed or truncated object files."""


def _unpack(layout: struct.Struct, data: bytes, offset: int = 0) -> tuple:
    if len(data) - offset < layout.size:
        raise CoffError("File is too short")
    return layout.unpack_from(data, offset)


@dataclass
class FileHeader:
    """COFF file header."""

    magic: int = MIPSELMAGIC
    nscns: int = 0
    timdat: int = 0
    symptr: int = 0
    nsyms: int = 0
    opthdr: int = 0
    flags: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<HHIIIHH")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def unpack(cls, data: bytes) -> "FileHeader":
        return cls(*_unpack(cls._LAYOUT, data))

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            self.magic, self.nscns, self.timdat, self.symptr,
            self.nsyms, self.opthdr, self.flags,
        )


@dataclass
class AoutHeader:
    """COFF optional (a.out) header."""

    magic: int = OMAGIC
    vstamp: int = 0
    tsize: int = 0
    dsize: int = 0
    bsize: int = 0
    entry: int = 0
    text_start: int = 0
    data_start: int = 0
    bss_start: int = 0
    gprmask: int = 0
    cprmask: tuple[int, int, int, int] = (0, 0, 0, 0)
    gp_value: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<hh8I4II")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def unpack(cls, data: bytes) -> "AoutHeader":
        values = _unpack(cls._LAYOUT, data)
        return cls(*values[:10], cprmask=tuple(values[10:14]), gp_value=values[14])

    def pack(self) -> bytes:
        return self._LAYOUT.pack(
            self.magic, self.vstamp, self.tsize, self.dsize, self.bsize,
            self.entry, self.text_start, self.data_start, self.bss_start,
            self.gprmask, *self.cprmask, self.gp_value,
        )


@dataclass
class SectionHeader:
    """COFF section header."""

    name: str
    paddr: int = 0
    vaddr: int = 0
    size: int = 0
    scnptr: int = 0
    relptr: int = 0
    lnnoptr: int = 0
    nreloc: int = 0
    nlnno: int = 0
    flags: int = 0

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<8s6IHHI")
    SIZE: ClassVar[int] = _LAYOUT.size

    @classmethod
    def unpack(cls, data: bytes) -> "SectionHeader":
        raw_name, *rest = _unpack(cls._LAYOUT, data)
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(name, *rest)

    def pack(self) -> bytes:
        raw_name = self.name.encode("latin-1")
        if len(raw_name) > 8:
            raise CoffError(f"section name too long: {self.name!r}")
        return self._LAYOUT.pack(
            raw_name, self.paddr, self.vaddr, self.size, self.scnptr,
            self.relptr, self.lnnoptr, self.nreloc, self.nlnno, self.flags,
        )


@dataclass
class CoffFile:
    """A parsed COFF image: headers plus the raw bytes they point into."""

    file_header: FileHeader
    aout_header: AoutHeader
    sections: list[SectionHeader]
    data: bytes

    def section(self, name: str) -> Optional[SectionHeader]:
        """Return the first section called ``name``, or None."""
        return next((s for s in self.sections if s.name == name), None)

    def section_data(self, section: SectionHeader) -> bytes:
        """Return the raw contents of ``section`` from the image."""
        end = section.scnptr + section.size
        if end > len(self.data):
            raise CoffError("File is too short")
        return self.data[section.scnptr:end]


def read_coff(data: bytes) -> CoffFile:
    """Parse a little-endian MIPS COFF image."""
    file_header = FileHeader.unpack(data)
    if file_header.magic != MIPSELMAGIC:
        raise CoffError("File is not a MIPSEL COFF file")
    offset = FileHeader.SIZE
    aout_header = AoutHeader.unpack(data[offset:])
    offset += AoutHeader.SIZE
    sections = []
    for _ in range(file_header.nscns):
        sections.append(SectionHeader.unpack(data[offset:]))
        offset += SectionHeader.SIZE
    return CoffFile(file_header, aout_header, sections, bytes(data))


@dataclass
class Segment:
    """One NOFF segment: where it loads and where it sits in the file."""

    virtual_addr: int = 0
    in_file_addr: int = 0
    size: int = 0


@dataclass
class NoffHeader:
    """Header of a NOFF object file."""

    magic: int = NOFFMAGIC
    code: Segment = field(default_factory=Segment)
    init_data: Segment = field(default_factory=Segment)
    uninit_data: Segment = field(default_factory=Segment)

    _LAYOUT: ClassVar[struct.Struct] = struct.Struct("<10i")
    SIZE: ClassVar[int] = _LAYOUT.size

    def pack(self) -> bytes:
        values = [self.magic]
        for seg in (self.code, self.init_data, self.uninit_data):
            values += [seg.virtual_addr, seg.in_file_addr, seg.size]
        return self._LAYOUT.pack(*values)

    @classmethod
    def unpack(cls, data: bytes) -> "NoffHeader":
        magic, *rest = _unpack(cls._LAYOUT, data)
        code, init_data, uninit_data = (
            Segment(*rest[i:i + 3]) for i in range(0, 9, 3)
        )
        return cls(magic, code, init_data, uninit_data)