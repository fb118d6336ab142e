# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for .yul and .yulp files: discovery, backend calls, and artifacts."""

from yulbuild.compiler.artifact import (
    ARTIFACT_SUFFIX,
    deserialize_artifact,
    read_artifact,
    serialize_artifact,
    synthesize_abi,
    synthesize_artifact,
    write_artifact,
)
from yulbuild.compiler.backend import (
    BuildProvider,
    CompilerBackend,
    InProcessCompiler,
    NativeCompiler,
    SolcBuild,
    find_solc,
    select_backend,
)
from yulbuild.compiler.build import ArtifactSink, BuildReport, FileFailure, compile_project, compile_source
from yulbuild.compiler.diagnostics import DiagnosticSummary, classify_diagnostics, report_diagnostics
from yulbuild.compiler.invoker import build_compiler_input, invoke_compiler
from yulbuild.compiler.sources import find_sources, to_source_file

__all__ = [
    "find_sources",
    "to_source_file",
    "SolcBuild",
    "BuildProvider",
    "CompilerBackend",
    "NativeCompiler",
    "InProcessCompiler",
    "select_backend",
    "find_solc",
    "build_compiler_input",
    "invoke_compiler",
    "DiagnosticSummary",
    "classify_diagnostics",
    "report_diagnostics",
    "synthesize_artifact",
    "synthesize_abi",
    "serialize_artifact",
    "deserialize_artifact",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "ArtifactSink",
    "BuildReport",
    "FileFailure",
    "compile_project",
    "compile_source",
]
