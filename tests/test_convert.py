import pytest

from mipsnoff.coff import (
    MIPSELMAGIC,
    NOFFMAGIC,
    OMAGIC,
    AoutHeader,
    CoffError,
    FileHeader,
    NoffHeader,
    SectionHeader,
)
from mipsnoff.convert import (
    STACK_SIZE,
    ConversionError,
    coff_to_flat,
    coff_to_noff,
    flat_main,
    noff_main,
)

TEXT = bytes(range(8))
DATA = b"wxyz"


def build_coff(sections, magic=MIPSELMAGIC, aout_magic=OMAGIC):
    header_len = FileHeader.SIZE + AoutHeader.SIZE + SectionHeader.SIZE * len(sections)
    offset = header_len
    body = b""
    headers = []
    for name, paddr, content in sections:
        if isinstance(content, int):
            size, scnptr = content, 0
        else:
            size, scnptr = len(content), offset
            body += content
            offset += size
        headers.append(
            SectionHeader(name, paddr=paddr, vaddr=paddr, size=size, scnptr=scnptr).pack()
        )
    return (
        FileHeader(magic=magic, nscns=len(sections)).pack()
        + AoutHeader(magic=aout_magic).pack()
        + b"".join(headers)
        + body
    )


def standard_image():
    return build_coff([
        (".text", 0, TEXT),
        (".data", 0x100, DATA),
        (".bss", 0x200, 16),
    ])


def test_noff_header_and_segments():
    result = coff_to_noff(standard_image())
    header = NoffHeader.unpack(result)
    assert header.magic == NOFFMAGIC
    assert header.code.in_file_addr == NoffHeader.SIZE
    assert header.code.size == len(TEXT)
    assert header.code.virtual_addr == 0
    assert header.init_data.virtual_addr == 0x100
    assert header.init_data.in_file_addr == NoffHeader.SIZE + len(TEXT)
    assert header.uninit_data.virtual_addr == 0x200
    assert header.uninit_data.size == 16
    assert result[NoffHeader.SIZE:] == TEXT + DATA


def test_noff_rdata_accepted_as_initialised_data():
    header = NoffHeader.unpack(coff_to_noff(build_coff([(".rdata", 0x40, DATA)])))
    assert header.init_data.size == len(DATA)
    assert header.code.size == 0


def test_noff_rejects_data_and_rdata():
    image = build_coff([(".data", 0, DATA), (".rdata", 0x10, DATA)])
    with pytest.raises(ConversionError, match="both data and rdata"):
        coff_to_noff(image)


def test_noff_rejects_contiguous_bss_and_sbss():
    image = build_coff([(".sbss", 0x100, 8), (".bss", 0x108, 8)])
    with pytest.raises(ConversionError, match="both bss and sbss"):
        coff_to_noff(image)


def test_noff_merges_separate_bss_sizes():
    image = build_coff([(".sbss", 0x100, 8), (".bss", 0x400, 24)])
    header = NoffHeader.unpack(coff_to_noff(image))
    assert header.uninit_data.virtual_addr == 0x100
    assert header.uninit_data.size == 8 + 24


def test_noff_rejects_unknown_segment():
    with pytest.raises(ConversionError, match="Unknown segment type: .comment"):
        coff_to_noff(build_coff([(".comment", 0, b"abcd")]))


def test_noff_skips_empty_unknown_segment():
    result = coff_to_noff(build_coff([(".comment", 0, b""), (".text", 0, TEXT)]))
    assert result[NoffHeader.SIZE:] == TEXT


def test_wrong_file_magic():
    with pytest.raises(CoffError, match="MIPSEL"):
        coff_to_noff(build_coff([], magic=0x0160))


def test_wrong_aout_magic():
    with pytest.raises(ConversionError, match="OMAGIC"):
        coff_to_flat(build_coff([], aout_magic=0x0701))


def test_truncated_file():
    with pytest.raises(CoffError, match="too short"):
        coff_to_noff(standard_image()[:-2])


def test_flat_image_layout():
    result = coff_to_flat(standard_image())
    top = 0x200 + 16
    assert len(result) == top + STACK_SIZE
    assert result.startswith(TEXT + DATA)
    assert result[len(TEXT + DATA):] == bytes(len(result) - len(TEXT + DATA))


def test_flat_stack_size_constant():
    assert len(coff_to_flat(build_coff([]))) == STACK_SIZE


def test_noff_main_writes_file(tmp_path, capsys):
    src = tmp_path / "prog.coff"
    dst = tmp_path / "prog.noff"
    src.write_bytes(standard_image())
    assert noff_main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == coff_to_noff(standard_image())
    out = capsys.readouterr().out
    assert "Loading 3 sections:" in out
    assert '"\u002etext", filepos' in out


def test_noff_main_removes_output_on_error(tmp_path, capsys):
    src = tmp_path / "bad.coff"
    dst = tmp_path / "bad.noff"
    src.write_bytes(build_coff([(".comment", 0, b"abcd")]))
    dst.write_bytes(b"old")
    assert noff_main([str(src), str(dst)]) == 1
    assert not dst.exists()
    assert "Unknown segment type" in capsys.readouterr().err


def test_noff_main_usage(capsys):
    assert noff_main(["only-one"]) == 1
    assert "Usage" in capsys.readouterr().err


def test_flat_main_writes_file(tmp_path, capsys):
    src = tmp_path / "prog.coff"
    dst = tmp_path / "prog.flat"
    src.write_bytes(standard_image())
    assert flat_main([str(src), str(dst)]) == 0
    assert dst.read_bytes() == coff_to_flat(standard_image())
    assert f"Adding stack of size: {STACK_SIZE}" in capsys.readouterr().out


def test_flat_main_missing_input(tmp_path):
    assert flat_main([str(tmp_path / "missing"), str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()