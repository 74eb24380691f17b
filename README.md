# mipsnoff

Tools for little-endian MIPS COFF object files, written in plain Python
with no dependencies beyond the standard library.

It provides:

- **COFF and NOFF headers** (`mipsnoff.coff`): `FileHeader`, `AoutHeader`,
  `SectionHeader` and `NoffHeader` dataclasses that pack to and unpack from
  their on-disk byte layouts, and `read_coff`, which parses a whole COFF
  image into a `CoffFile`.
- **Converters** (`mipsnoff.convert`): `coff_to_noff` turns a COFF image
  into the simple NOFF format (code, initialised data and uninitialised
  data segments); `coff_to_flat` turns it into a flat memory image followed
  by a 1024-byte stack area.
- **A directory table** (`mipsnoff.directory`): a fixed-size `Directory`
  mapping file names (up to 50 characters) to header sector numbers, with a
  byte serialisation.
- **Teaching data structures**: a singly linked integer list
  (`mipsnoff.linkedlist.IntList`) and stacks (`mipsnoff.stacks`): a bounded
  `ArrayStack` and an unbounded `ListStack`.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Command-line tools

Convert a COFF executable to NOFF, or to a flat image padded with a
1024-byte stack:

```
coff2noff program.coff program.noff
coff2flat program.coff program.flat
```

Both print the sections they load. The input must be a MIPSEL COFF file
with an OMAGIC optional header. `coff2noff` rejects a file holding both
`.data` and `.rdata`, or a section it does not know; on any such error it
reports the problem, removes the output file and exits with status 1.

Exercise the stack implementations (an array stack and a list stack of
integers from 17, then an array stack of characters from `a`):

```
mipsnoff-stacks
```

## Library use

```python
from mipsnoff.coff import NoffHeader, read_coff
from mipsnoff.convert import coff_to_noff

with open("program.coff", "rb") as f:
    data = f.read()

coff = read_coff(data)
text = coff.section(".text")
if text is not None:
    code = coff.section_data(text)

noff = coff_to_noff(data)
header = NoffHeader.unpack(noff)
print(header.code.size, header.init_data.size, header.uninit_data.size)
```

Directory table:

```python
from mipsnoff.directory import Directory

d = Directory(10)
d.add("notes.txt", 5)
print(d.find("notes.txt"))   # 5
raw = d.to_bytes()

copy = Directory(10)
copy.load(raw)
print(list(copy.names()))    # ['notes.txt']
```

Stacks:

```python
from mipsnoff.stacks import ArrayStack, StackOverflow

s = ArrayStack(2)
s.push(1)
s.push(2)
try:
    s.push(3)
except StackOverflow:
    pass
print(s.pop())               # 2
```

Malformed input raises `CoffError` from `mipsnoff.coff`, or its subclass
`ConversionError` from `mipsnoff.convert`. Popping an empty stack raises
`StackUnderflow`.

## What it does not do

The package reads, writes and converts object files, but it does not
disassemble instructions and it does not execute programs: there is no
disassembler command and no interpreter or simulated machine.