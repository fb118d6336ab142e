# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source file identity and dialect selection."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path

# ###############
# Public Interface
# ###############


class Dialect(enum.Enum):
    """The two supported source dialects, keyed by file extension."""

    YUL = "yul"
    YULP = "yulp"

    @property
    def extension(self) -> str:
        return self.value


@dataclass(frozen=True)
class SourceFile:
    """A discovered source file.

    Attributes:
        path: Absolute path to the file on disk.
        source_name: Path relative to the project root using ``/`` separators.
            Used as the stable identifier of the file in artifacts.
        dialect: The dialect the file is written in.
    """

    path: Path
    source_name: str
    dialect: Dialect

    @property
    def contract_name(self) -> str:
        """The file basename up to its first dot (``Foo.yul`` -> ``Foo``)."""
        return contract_name_from_path(self.source_name)


def contract_name_from_path(path: str | Path) -> str:
    """Derive a contract name from a file path, ignoring the file content."""
    basename = Path(path).name
    dot = basename.find(".")
    return basename if dot == -1 else basename[:dot]
