[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mipsnoff"
version = "0.1.0"
description = "MIPS COFF and NOFF object headers, COFF to NOFF/flat converters, a directory table and small teaching data structures"
requires-python = ">=3.10"
dependencies = []
keywords = ["mips", "coff", "noff", "object-file", "converter", "teaching"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Disassemblers",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
coff2noff = "mipsnoff.convert:noff_main"
coff2flat = "mipsnoff.convert:flat_main"
mipsnoff-stacks = "mipsnoff.stacks:main"

[tool.hatch.build.targets.wheel]
packages = ["mipsnoff"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
