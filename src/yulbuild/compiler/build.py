# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler workflow for .yul and .yulp files.

Every discovered file is compiled on every run; nothing is cached.  Files are
processed one after another, each going through these steps:

1. Read the source (and for Yul+, transpile it to Yul).
2. Select a backend for the configured solc version.
3. Invoke the backend with the standard-JSON input.
4. Report the backend's diagnostics.
5. Synthesize the artifact and hand it to the sink.

A failure in any step is reported once and skips that file only; the
remaining files still compile.  Artifacts are recorded one at a time, as soon
as each file is done.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from yulbuild.compiler.artifact import synthesize_artifact
from yulbuild.compiler.backend import BuildProvider, select_backend
from yulbuild.compiler.diagnostics import report_diagnostics, report_failure
from yulbuild.compiler.invoker import invoke_compiler
from yulbuild.compiler.sources import find_sources, to_source_file
from yulbuild.dialect.transpiler import TranspileResult, transpile
from yulbuild.errors import YulBuildError
from yulbuild.model.artifact import Artifact
from yulbuild.model.solc import BuildSettings
from yulbuild.model.sources import Dialect, SourceFile

# ###############
# Public Interface
# ###############


class ArtifactSink(Protocol):
    """Destination for finished artifacts."""

    def record(self, artifact: Artifact) -> None: ...


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be compiled, with the error that stopped it."""

    source: SourceFile
    error: YulBuildError


@dataclass
class BuildReport:
    """Outcome of one run: the recorded artifacts and the skipped files."""

    artifacts: list[Artifact] = field(default_factory=list)
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.failures


def compile_project(
    root: Path,
    sources_dir: Path,
    settings: BuildSettings,
    sink: ArtifactSink,
    provider: BuildProvider,
    dialects: Iterable[Dialect] = (Dialect.YUL, Dialect.YULP),
) -> BuildReport:
    """Compile every Yul and Yul+ file under *sources_dir*.

    Args:
        root: Project root; source names are computed relative to it.
        sources_dir: Directory searched recursively for source files.
        settings: The solc version and optimizer details for this run.
        sink: Receives each artifact as soon as it is synthesized.
        provider: Resolves the solc version to a toolchain build.
        dialects: Dialects to compile, in order.  Plain Yul comes first.

    Returns:
        A :class:`BuildReport` listing recorded artifacts and failed files.
    """
    report = BuildReport()
    for dialect in dialects:
        for path in find_sources(sources_dir, dialect):
            try:
                source = to_source_file(root, path, dialect)
            except YulBuildError as exc:
                report_failure(str(path), exc)
                report.failures.append(FileFailure(SourceFile(path, str(path), dialect), exc))
                continue

            print(f"Compiling {source.source_name}...")
            try:
                artifact = compile_source(source, settings, provider)
            except YulBuildError as exc:
                report_failure(source.source_name, exc)
                report.failures.append(FileFailure(source, exc))
                continue

            sink.record(artifact)
            report.artifacts.append(artifact)
    return report


def compile_source(source: SourceFile, settings: BuildSettings, provider: BuildProvider) -> Artifact:
    """Compile a single source file into an artifact.

    Raises:
        YulBuildError: On any failure; the subclass names the failing step.
    """
    try:
        text = source.path.read_text(encoding="utf-8")
    except OSError as exc:
        raise YulBuildError(f"Cannot read source file '{source.path}': {exc}") from exc
    except UnicodeDecodeError as exc:
        raise YulBuildError(f"Source file '{source.path}' is not valid UTF-8: {exc}") from exc

    transpiled: TranspileResult | None = None
    if source.dialect == Dialect.YULP:
        transpiled = transpile(text)
        text = transpiled.code

    backend = select_backend(settings.version, provider)
    output = invoke_compiler(text, settings, backend)
    report_diagnostics(source.source_name, output.errors)
    return synthesize_artifact(source, output, transpiled)
