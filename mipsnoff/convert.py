"""Conversion of MIPS COFF executables to NOFF and flat memory images."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from mipsnoff.coff import (
    OMAGIC,
    CoffError,
    CoffFile,
    NoffHeader,
    SectionHeader,
    Segment,
    read_coff,
)

STACK_SIZE = 1024

Reporter = Optional[Callable[[str], None]]


class ConversionError(CoffError):
    """Raised when an object file cannot be converted."""


def _check_omagic(coff: CoffFile) -> None:
    if coff.aout_header.magic != OMAGIC:
        raise ConversionError("File is not a OMAGIC file")


def _section_line(section: SectionHeader) -> str:
    return (
        f'\t"{section.name}", filepos 0x{section.scnptr:x}, '
        f"mempos 0x{section.paddr:x}, size 0x{section.size:x}"
    )


def _to_noff(coff: CoffFile, report: Reporter) -> bytes:
    _check_omagic(coff)
    sections = coff.sections
    if report:
        report(f"numsections {len(sections)} ")
        report(f"Loading {len(sections)} sections:")
    header = NoffHeader()
    body = bytearray()
    in_file = NoffHeader.SIZE
    for section in sections:
        if report:
            report(_section_line(section))
        name = section.name
        if section.size == 0:
            continue
        if name == ".text":
            header.code = Segment(section.paddr, in_file, section.size)
        elif name in (".data", ".rdata"):
            if header.init_data.size != 0:
                raise ConversionError("Can't handle both data and rdata")
            header.init_data = Segment(section.paddr, in_file, section.size)
        elif name in (".bss", ".sbss"):
            uninit = header.uninit_data
            if uninit.size != 0:
                if section.paddr == uninit.virtual_addr + uninit.size:
                    raise ConversionError("Can't handle both bss and sbss")
                uninit.size += section.size
            else:
                uninit.virtual_addr = section.paddr
                uninit.size = section.size
            continue
        else:
            raise ConversionError(f"Unknown segment type: {name}")
        body += coff.section_data(section)
        in_file += section.size
    return header.pack() + bytes(body)


def _to_flat(coff: CoffFile, report: Reporter) -> bytes:
    _check_omagic(coff)
    if report:
        report(f"Loading {len(coff.sections)} sections:")
    out = bytearray()
    top = 0
    for section in coff.sections:
        if report:
            report(_section_line(section))
        top = max(top, section.paddr + section.size)
        if section.name not in (".bss", ".sbss"):
            out += coff.section_data(section)
    if report:
        report(f"Adding stack of size: {STACK_SIZE}")
    end_marker = top + STACK_SIZE - 4
    if len(out) < end_marker + 4:
        out += bytes(end_marker + 4 - len(out))
    out[end_marker:end_marker + 4] = bytes(4)
    return bytes(out)


def coff_to_noff(data: bytes) -> bytes:
    """Convert a COFF image to a NOFF image."""
    return _to_noff(read_coff(data), None)


def coff_to_flat(data: bytes) -> bytes:
    """Convert a COFF image to a flat image followed by stack space."""
    return _to_flat(read_coff(data), None)


def _run(
    argv: Optional[Sequence[str]],
    output_label: str,
    convert: Callable[[CoffFile, Reporter], bytes],
    remove_on_error: bool,
) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        prog = Path(sys.argv[0]).name if sys.argv and sys.argv[0] else "convert"
        print(f"Usage: {prog} <coffFileName> <{output_label}>", file=sys.stderr)
        return 1
    source, target = args[0], args[1]
    try:
        data = Path(source).read_bytes()
    except OSError as exc:
        print(f"{source}: {exc.strerror}", file=sys.stderr)
        return 1
    try:
        result = convert(read_coff(data), print)
    except CoffError as exc:
        print(exc, file=sys.stderr)
        if remove_on_error:
            Path(target).unlink(missing_ok=True)
        return 1
    try:
        Path(target).write_bytes(result)
    except OSError as exc:
        print(f"{target}: {exc.strerror}", file=sys.stderr)
        return 1
    return 0


def noff_main(argv: Optional[Sequence[str]] = None) -> int:
    """Convert the COFF file named first into the NOFF file named second."""
    return _run(argv, "noffFileName", _to_noff, remove_on_error=True)


def flat_main(argv: Optional[Sequence[str]] = None) -> int:
    """Convert the COFF file named first into the flat file named second."""
    return _run(argv, "flatFileName", _to_flat, remove_on_error=False)