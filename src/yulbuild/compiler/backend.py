# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler backends: one ``compile`` contract, two execution strategies.

A :class:`SolcBuild` describes a provisioned solc toolchain.  Builds that
point at a native binary run it as a ``solc --standard-json`` subprocess;
builds that carry a Python callable run it in-process.  Callers only see the
:class:`CompilerBackend` protocol.
"""

from __future__ import annotations

import json
import os
import re
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError

from yulbuild.errors import BackendUnavailableError, CompilationError
from yulbuild.model.solc import CompilerInput, CompilerOutput

# ###############
# Public Interface
# ###############

StandardJsonFunction = Callable[[str], str]
"""An in-process compiler entry point: standard-JSON input text to output text."""


class CompilerBackend(Protocol):
    def compile(self, compiler_input: CompilerInput) -> CompilerOutput:
        """Compile one standard-JSON input and return the validated output."""
        ...


@dataclass(frozen=True)
class SolcBuild:
    """A provisioned solc toolchain.

    Exactly one of *compiler_path* and *standard_json* is set.

    Attributes:
        version: The solc version this build provides.
        compiler_path: Path to a native ``solc`` executable.
        standard_json: In-process standard-JSON entry point.
    """

    version: str
    compiler_path: Path | None = None
    standard_json: StandardJsonFunction | None = None


BuildProvider = Callable[[str], SolcBuild | None]
"""Resolves a requested version to a build, or ``None`` when unavailable."""


class NativeCompiler:
    """Runs a native solc binary as a subprocess per compilation."""

    def __init__(self, compiler_path: Path, timeout: float | None = 300) -> None:
        self._compiler_path = compiler_path
        self._timeout = timeout

    def compile(self, compiler_input: CompilerInput) -> CompilerOutput:
        try:
            result = subprocess.run(
                [str(self._compiler_path), "--standard-json"],
                input=compiler_input.to_json(),
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError:
            raise CompilationError(f"solc executable not found: {self._compiler_path}") from None
        except subprocess.TimeoutExpired:
            raise CompilationError(f"solc timed out after {self._timeout}s") from None
        if result.returncode != 0:
            raise CompilationError(f"solc exited with status {result.returncode}: {result.stderr.strip()}")
        return parse_compiler_output(result.stdout)


class InProcessCompiler:
    """Calls an in-process standard-JSON entry point."""

    def __init__(self, standard_json: StandardJsonFunction) -> None:
        self._standard_json = standard_json

    def compile(self, compiler_input: CompilerInput) -> CompilerOutput:
        return parse_compiler_output(self._standard_json(compiler_input.to_json()))


def parse_compiler_output(raw: str) -> CompilerOutput:
    """Validate raw standard-JSON output text into a :class:`CompilerOutput`.

    Raises:
        CompilationError: If the text is not JSON or does not match the schema.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CompilationError(f"Compiler returned invalid JSON: {exc}") from exc
    try:
        return CompilerOutput.model_validate(data)
    except ValidationError as exc:
        raise CompilationError(f"Compiler returned unexpected output: {exc}") from exc


def select_backend(version: str, provider: BuildProvider) -> CompilerBackend:
    """Obtain a backend for *version* from *provider*.

    Raises:
        BackendUnavailableError: If the provider fails or has no usable build.
    """
    try:
        build = provider(version)
    except (OSError, subprocess.SubprocessError) as exc:
        raise BackendUnavailableError(f"Cannot obtain solc {version}: {exc}") from exc
    if build is None:
        raise BackendUnavailableError(f"solc {version} is not available")
    if build.standard_json is not None:
        return InProcessCompiler(build.standard_json)
    if build.compiler_path is not None:
        return NativeCompiler(build.compiler_path)
    raise BackendUnavailableError(f"solc {version} build has neither an executable nor an entry point")


def find_solc(version: str, search_path: str | None = None) -> SolcBuild | None:
    """Locate a native solc binary for *version* on the search path.

    Looks for ``solc-<version>`` first, then plain ``solc``, and accepts a
    candidate only when ``solc --version`` reports the requested version.

    Args:
        version: The requested version, e.g. ``"0.8.17"``.
        search_path: ``PATH``-style directory list; defaults to ``$PATH``.

    Returns:
        A native :class:`SolcBuild`, or ``None`` if no matching binary exists.
    """
    path = search_path if search_path is not None else os.environ.get("PATH", "")
    for name in (f"solc-{version}", "solc"):
        candidate = shutil.which(name, path=path)
        if candidate is not None and solc_version(Path(candidate)) == version:
            return SolcBuild(version=version, compiler_path=Path(candidate))
    return None


def solc_version(compiler_path: Path) -> str | None:
    """Return the ``X.Y.Z`` version reported by a solc binary, or ``None``."""
    try:
        result = subprocess.run(
            [str(compiler_path), "--version"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired):
        return None
    if result.returncode != 0:
        return None
    match = _VERSION_RE.search(result.stdout)
    return match.group(1) if match else None


def fixed_path_provider(compiler_path: Path) -> BuildProvider:
    """Return a provider that serves *compiler_path* after checking its version."""

    def _provide(version: str) -> SolcBuild | None:
        if solc_version(compiler_path) != version:
            return None
        return SolcBuild(version=version, compiler_path=compiler_path)

    return _provide


# ################
# Implementation
# ################

_VERSION_RE = re.compile(r"Version:\s*(\d+\.\d+\.\d+)")
