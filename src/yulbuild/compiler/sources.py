# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Discovery of Yul and Yul+ source files under a sources directory."""

from __future__ import annotations

from pathlib import Path

from yulbuild.errors import YulBuildError
from yulbuild.model.sources import Dialect, SourceFile

# ###############
# Public Interface
# ###############


def find_sources(sources_dir: Path, dialect: Dialect) -> list[Path]:
    """Return the absolute paths of all ``**/*.<ext>`` files under *sources_dir*.

    The result is sorted so that repeated runs visit files in the same order.
    A missing directory or no matches yields an empty list.
    Dot-files and files inside dot-directories are skipped.
    """
    if not sources_dir.is_dir():
        return []
    pattern = f"*.{dialect.extension}"
    return sorted(
        p.resolve()
        for p in sources_dir.rglob(pattern)
        if p.is_file() and not _is_hidden(p.relative_to(sources_dir))
    )


def to_source_file(root: Path, path: Path, dialect: Dialect) -> SourceFile:
    """Build the :class:`SourceFile` identity of *path* relative to the project *root*.

    Raises:
        YulBuildError: If *path* is not located under *root*.
    """
    try:
        rel = path.resolve().relative_to(root.resolve())
    except ValueError:
        raise YulBuildError(f"Source file '{path}' is outside of the project root '{root}'") from None
    return SourceFile(path=path.resolve(), source_name=rel.as_posix(), dialect=dialect)


# ################
# Implementation
# ################


def _is_hidden(rel: Path) -> bool:
    return any(part.startswith(".") for part in rel.parts)
