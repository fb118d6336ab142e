# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Error taxonomy for the Yul compilation pipeline.

Every error raised for a single source file derives from :class:`YulBuildError`
so that the build loop can isolate failures per file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yulbuild.model.solc import Diagnostic

# ###############
# Public Interface
# ###############


class YulBuildError(Exception):
    """Base class for every failure that is fatal to one source file."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DialectSyntaxError(YulBuildError):
    """Raised when Yul+ source text cannot be tokenized or transpiled.

    Attributes:
        line: 1-based line number of the error.
        column: 1-based column number of the error.
    """

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"Line {line}, column {column}: {message}")
        self.line = line
        self.column = column


class BackendUnavailableError(YulBuildError):
    """Raised when no compiler backend can be obtained for the requested version."""


class CompilationError(YulBuildError):
    """Raised when the backend run itself fails or returns unusable output."""


class CompilationDiagnosticError(CompilationError):
    """Raised when the backend reports errors and produces no contract object.

    Attributes:
        diagnostics: The error diagnostics reported by the backend.
    """

    def __init__(self, message: str, diagnostics: list[Diagnostic]) -> None:
        super().__init__(message)
        self.diagnostics = diagnostics


class NoCompiledOutputError(CompilationError):
    """Raised when the backend reports zero contract objects without any error."""


class AmbiguousCompiledOutputError(CompilationError):
    """Raised when the backend reports more than one contract object for a source."""
