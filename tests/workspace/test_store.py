# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the filesystem artifact sink."""

import json
from pathlib import Path

from yulbuild.compiler.artifact import read_artifact
from yulbuild.model.artifact import Artifact
from yulbuild.workspace.store import DirectoryArtifactSink


def _artifact(source_name: str = "contracts/Foo.yul", contract_name: str = "Foo") -> Artifact:
    return Artifact(contract_name=contract_name, source_name=source_name, bytecode="0x6000")


class TestDirectoryArtifactSink:
    def test_layout(self, tmp_path: Path) -> None:
        sink = DirectoryArtifactSink(tmp_path / "artifacts")
        sink.record(_artifact())
        expected = tmp_path / "artifacts" / "contracts" / "Foo.yul" / "Foo.json"
        assert expected.exists()
        assert sink.written == [expected]

    def test_written_file_is_readable(self, tmp_path: Path) -> None:
        sink = DirectoryArtifactSink(tmp_path / "artifacts")
        artifact = _artifact()
        sink.record(artifact)
        assert read_artifact(sink.written[0]) == artifact

    def test_written_json_uses_wire_names(self, tmp_path: Path) -> None:
        sink = DirectoryArtifactSink(tmp_path / "artifacts")
        sink.record(_artifact())
        data = json.loads(sink.written[0].read_text(encoding="utf-8"))
        assert data["_format"] == "hh-sol-artifact-1"
        assert data["contractName"] == "Foo"
        assert data["deployedBytecode"] == "0x"

    def test_rerecording_overwrites(self, tmp_path: Path) -> None:
        sink = DirectoryArtifactSink(tmp_path / "artifacts")
        sink.record(_artifact())
        sink.record(Artifact(contract_name="Foo", source_name="contracts/Foo.yul", bytecode="0x01"))
        assert read_artifact(sink.artifact_path(_artifact())).bytecode == "0x01"
