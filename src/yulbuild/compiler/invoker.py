# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Construction of the standard-JSON input and the backend call."""

from __future__ import annotations

from yulbuild.compiler.backend import CompilerBackend
from yulbuild.model.solc import (
    TARGET_FILENAME,
    BuildSettings,
    CompilerInput,
    CompilerOutput,
    CompilerSettings,
    OptimizerDetails,
    OptimizerSettings,
    SourceContent,
)

# ###############
# Public Interface
# ###############


def build_compiler_input(source_text: str, settings: BuildSettings) -> CompilerInput:
    """Build the input descriptor for one Yul source.

    The optimizer is always enabled with zero runs; ``yulDetails`` is passed
    through unchanged.
    """
    return CompilerInput(
        sources={TARGET_FILENAME: SourceContent(content=source_text)},
        settings=CompilerSettings(
            optimizer=OptimizerSettings(
                enabled=True,
                runs=0,
                details=OptimizerDetails(yul=True, yul_details=settings.yul_details),
            ),
        ),
    )


def invoke_compiler(source_text: str, settings: BuildSettings, backend: CompilerBackend) -> CompilerOutput:
    """Compile *source_text* with *backend* and return its raw output."""
    return backend.compile(build_compiler_input(source_text, settings))
