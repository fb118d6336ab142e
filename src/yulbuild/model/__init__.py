# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model for the pipeline: sources, backend descriptors, and artifacts."""

from yulbuild.model.artifact import ARTIFACT_FORMAT, EMPTY_BYTECODE, Artifact
from yulbuild.model.solc import (
    TARGET_FILENAME,
    BuildSettings,
    CompilerInput,
    CompilerOutput,
    ContractOutput,
    Diagnostic,
)
from yulbuild.model.sources import Dialect, SourceFile, contract_name_from_path

__all__ = [
    # Sources
    "Dialect",
    "SourceFile",
    "contract_name_from_path",
    # Backend descriptors
    "TARGET_FILENAME",
    "BuildSettings",
    "CompilerInput",
    "CompilerOutput",
    "ContractOutput",
    "Diagnostic",
    # Artifacts
    "ARTIFACT_FORMAT",
    "EMPTY_BYTECODE",
    "Artifact",
]
