# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for artifact synthesis and serialization."""

import json
from pathlib import Path
from typing import Any

import pytest

from yulbuild.compiler.artifact import (
    read_artifact,
    serialize_artifact,
    synthesize_abi,
    synthesize_artifact,
    write_artifact,
)
from yulbuild.dialect.transpiler import SignatureDecl, TopicDecl, TranspileResult, transpile
from yulbuild.errors import (
    AmbiguousCompiledOutputError,
    CompilationDiagnosticError,
    CompilationError,
    NoCompiledOutputError,
)
from yulbuild.model.artifact import ARTIFACT_FORMAT
from yulbuild.model.solc import CompilerOutput
from yulbuild.model.sources import Dialect, SourceFile

# ###############
# Helpers
# ###############

_YUL_SOURCE = SourceFile(Path("/project/contracts/Foo.yul"), "contracts/Foo.yul", Dialect.YUL)
_YULP_SOURCE = SourceFile(Path("/project/contracts/Bar.yulp"), "contracts/Bar.yulp", Dialect.YULP)


def _output(objects: dict[str, Any], errors: list[dict[str, Any]] | None = None) -> CompilerOutput:
    data: dict[str, Any] = {"errors": errors or []}
    if objects:
        data["contracts"] = {"Target.yul": objects}
    return CompilerOutput.model_validate(data)


def _object(bytecode: str = "600160005260206000f3", deployed: dict[str, Any] | None = None) -> dict[str, Any]:
    evm: dict[str, Any] = {"bytecode": {"object": bytecode}}
    if deployed is not None:
        evm["deployedBytecode"] = deployed
    return {"evm": evm}


# ###############
# Synthesis
# ###############


class TestSynthesizeArtifact:
    def test_plain_yul_has_empty_abi(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}))
        assert artifact.abi == []
        assert artifact.bytecode == "0x600160005260206000f3"
        assert artifact.contract_name == "Foo"
        assert artifact.source_name == "contracts/Foo.yul"
        assert artifact.format == ARTIFACT_FORMAT

    def test_deployed_bytecode_defaults_to_empty(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}))
        assert artifact.deployed_bytecode == "0x"

    def test_deployed_bytecode_and_debug_data(self) -> None:
        debug = {"fun_add_3": {"entryPoint": 12, "parameterSlots": 2, "returnSlots": 1}}
        deployed = {"object": "6002", "functionDebugData": debug}
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object(deployed=deployed)}))
        assert artifact.deployed_bytecode == "0x6002"
        assert artifact.function_debug_data == debug

    def test_empty_bytecode_object(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object(bytecode="")}))
        assert artifact.bytecode == "0x"

    def test_link_references_are_empty(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}))
        assert artifact.link_references == {}
        assert artifact.deployed_link_references == {}

    def test_contract_name_comes_from_file_not_object(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"SomethingElse": _object()}))
        assert artifact.contract_name == "Foo"

    def test_warnings_do_not_prevent_synthesis(self) -> None:
        warning = {"severity": "warning", "formattedMessage": "Warning: x"}
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}, errors=[warning]))
        assert artifact.bytecode.startswith("0x")

    def test_no_object_with_errors_raises_diagnostic_error(self) -> None:
        error = {"severity": "error", "formattedMessage": "ParserError: nope"}
        with pytest.raises(CompilationDiagnosticError, match="ParserError: nope") as exc_info:
            synthesize_artifact(_YUL_SOURCE, _output({}, errors=[error]))
        assert len(exc_info.value.diagnostics) == 1

    def test_no_object_without_errors_raises(self) -> None:
        with pytest.raises(NoCompiledOutputError, match="contracts/Foo.yul"):
            synthesize_artifact(_YUL_SOURCE, _output({}))

    def test_no_object_with_only_warnings_raises_no_output(self) -> None:
        warning = {"severity": "warning", "formattedMessage": "Warning: x"}
        with pytest.raises(NoCompiledOutputError):
            synthesize_artifact(_YUL_SOURCE, _output({}, errors=[warning]))

    def test_multiple_objects_raise(self) -> None:
        with pytest.raises(AmbiguousCompiledOutputError, match="A, B"):
            synthesize_artifact(_YUL_SOURCE, _output({"B": _object(), "A": _object()}))

    def test_unlinked_placeholder_bytecode_raises(self) -> None:
        placeholder = "73__$cb3c62b6b3c9a1d5d3e0a4d1c3b8a7f2e1$__6000"
        with pytest.raises(CompilationError, match="contracts/Foo.yul"):
            synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object(bytecode=placeholder)}))

    def test_non_hex_deployed_bytecode_raises(self) -> None:
        deployed = {"object": "__$cb3c62b6b3c9a1d5d3e0a4d1c3b8a7f2e1$__"}
        with pytest.raises(CompilationError):
            synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object(deployed=deployed)}))


class TestSynthesizeAbi:
    def test_one_function_and_one_event(self) -> None:
        transpiled = transpile('{\n  let s := sig"function add()"\n  log1(0, 0, topic"event Added(uint256 x)")\n}')
        artifact = synthesize_artifact(_YULP_SOURCE, _output({"Bar": _object()}), transpiled)
        assert artifact.abi == ["function add()", "event Added(uint256 x)"]

    def test_functions_before_events(self) -> None:
        transpiled = TranspileResult(
            code="{}",
            signatures=(SignatureDecl('sig"function a()"', "a", "a()", "0x0dbe671f"),),
            topics=(TopicDecl('topic"event E()"', "E", "E()", "0x" + "00" * 32),),
        )
        assert synthesize_abi(transpiled) == ["function a()", "event E()"]

    def test_no_declarations_gives_empty_abi(self) -> None:
        assert synthesize_abi(TranspileResult(code="{}")) == []


# ###############
# Serialization
# ###############


class TestSerialization:
    def test_wire_field_names(self) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}))
        data = json.loads(serialize_artifact(artifact))
        assert data == {
            "_format": "hh-sol-artifact-1",
            "contractName": "Foo",
            "sourceName": "contracts/Foo.yul",
            "abi": [],
            "bytecode": "0x600160005260206000f3",
            "deployedBytecode": "0x",
            "linkReferences": {},
            "deployedLinkReferences": {},
        }

    def test_debug_data_serialized_when_present(self) -> None:
        deployed = {"object": "00", "functionDebugData": {"f": {"entryPoint": None}}}
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object(deployed=deployed)}))
        data = json.loads(serialize_artifact(artifact))
        assert data["functionDebugData"] == {"f": {"entryPoint": None}}

    def test_write_and_read_back(self, tmp_path: Path) -> None:
        artifact = synthesize_artifact(_YUL_SOURCE, _output({"Foo": _object()}))
        path = tmp_path / "out" / "Foo.json"
        write_artifact(artifact, path)
        assert read_artifact(path) == artifact
