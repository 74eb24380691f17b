"""MIPS COFF and NOFF headers, COFF to NOFF/flat converters, a directory table and teaching stacks."""

__version__ = "0.1.0"