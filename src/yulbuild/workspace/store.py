# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Filesystem artifact sink using the ``<sourceName>/<contractName>.json`` layout."""

from pathlib import Path

from yulbuild.compiler.artifact import ARTIFACT_SUFFIX, write_artifact
from yulbuild.model.artifact import Artifact

# ###############
# Public Interface
# ###############


class DirectoryArtifactSink:
    """Writes each recorded artifact below an artifacts directory.

    ``contracts/Foo.yul`` compiled to contract ``Foo`` is written to
    ``<artifacts_dir>/contracts/Foo.yul/Foo.json``.
    """

    def __init__(self, artifacts_dir: Path) -> None:
        self._artifacts_dir = artifacts_dir
        self.written: list[Path] = []

    def artifact_path(self, artifact: Artifact) -> Path:
        return self._artifacts_dir / artifact.source_name / (artifact.contract_name + ARTIFACT_SUFFIX)

    def record(self, artifact: Artifact) -> None:
        path = self.artifact_path(artifact)
        write_artifact(artifact, path)
        self.written.append(path)
