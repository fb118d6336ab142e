# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Synthesis of artifact records from compiler output, and their JSON form.

Artifacts are written as indented JSON in the ``hh-sol-artifact-1`` layout so
that artifact stores and binding generators can consume them unchanged.
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from yulbuild.compiler.diagnostics import classify_diagnostics
from yulbuild.dialect.transpiler import TranspileResult
from yulbuild.errors import (
    AmbiguousCompiledOutputError,
    CompilationDiagnosticError,
    CompilationError,
    NoCompiledOutputError,
)
from yulbuild.model.artifact import EMPTY_BYTECODE, Artifact
from yulbuild.model.solc import TARGET_FILENAME, CompilerOutput, ContractOutput
from yulbuild.model.sources import SourceFile

# ###############
# Public Interface
# ###############

ARTIFACT_SUFFIX = ".json"


def synthesize_artifact(
    source: SourceFile,
    output: CompilerOutput,
    transpiled: TranspileResult | None = None,
) -> Artifact:
    """Build the artifact of *source* from the backend *output*.

    Args:
        source: The compiled source file.
        output: The backend output for the single ``Target.yul`` input.
        transpiled: The transpiler result for Yul+ sources; ``None`` for plain
            Yul, whose artifacts always carry an empty ABI.

    Returns:
        The synthesized :class:`~yulbuild.model.artifact.Artifact`.

    Raises:
        CompilationDiagnosticError: If no contract object was produced and the
            backend reported errors.
        NoCompiledOutputError: If no contract object was produced otherwise.
        AmbiguousCompiledOutputError: If more than one object was produced.
        CompilationError: If the bytecode is not plain hex, as with unlinked
            library placeholders.
    """
    contract = _select_contract(source, output)
    evm = contract.evm

    deployed_bytecode = EMPTY_BYTECODE
    function_debug_data = None
    if evm.deployed_bytecode is not None:
        deployed_bytecode += evm.deployed_bytecode.object
        function_debug_data = evm.deployed_bytecode.function_debug_data

    try:
        return Artifact(
            contract_name=source.contract_name,
            source_name=source.source_name,
            abi=synthesize_abi(transpiled) if transpiled is not None else [],
            bytecode=EMPTY_BYTECODE + evm.bytecode.object,
            deployed_bytecode=deployed_bytecode,
            function_debug_data=function_debug_data,
        )
    except ValidationError as exc:
        # Unlinked library placeholders (__$...$__) are not hex.
        raise CompilationError(
            f"Compiler output for '{source.source_name}' is not a valid artifact: {exc}"
        ) from exc


def synthesize_abi(transpiled: TranspileResult) -> list[str]:
    """Return the human-readable ABI fragments of a Yul+ source.

    Each fragment is the literal text with its ``sig"`` or ``topic"`` prefix
    and closing quote removed; functions come before events.
    """
    functions = [s.abi[len('sig"') : -1] for s in transpiled.signatures]
    events = [t.abi[len('topic"') : -1] for t in transpiled.topics]
    return functions + events


def serialize_artifact(artifact: Artifact) -> str:
    """Serialize an artifact to indented JSON."""
    return json.dumps(artifact.to_dict(), indent=2) + "\n"


def deserialize_artifact(data: str) -> Artifact:
    """Reconstruct an artifact from JSON produced by :func:`serialize_artifact`."""
    return Artifact.model_validate(json.loads(data))


def write_artifact(artifact: Artifact, path: Path) -> None:
    """Write *artifact* to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_artifact(artifact), encoding="utf-8")


def read_artifact(path: Path) -> Artifact:
    """Read and deserialize an artifact from *path*."""
    return deserialize_artifact(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################


def _select_contract(source: SourceFile, output: CompilerOutput) -> ContractOutput:
    objects = output.objects_for(TARGET_FILENAME)
    if not objects:
        errors = classify_diagnostics(output.errors).errors
        if errors:
            messages = "\n".join(e.text for e in errors)
            raise CompilationDiagnosticError(f"Compilation of '{source.source_name}' failed:\n{messages}", errors)
        raise NoCompiledOutputError(f"Compiler produced no contract object for '{source.source_name}'")
    if len(objects) > 1:
        names = ", ".join(sorted(objects))
        raise AmbiguousCompiledOutputError(
            f"Compiler produced {len(objects)} contract objects for '{source.source_name}': {names}"
        )
    return next(iter(objects.values()))
