# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Operator-facing reporting of compiler diagnostics and per-file failures."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from yachalk import chalk

from yulbuild.model.solc import Diagnostic

# ###############
# Public Interface
# ###############


@dataclass
class DiagnosticSummary:
    """Diagnostics of one compilation, split by severity."""

    warnings: list[Diagnostic] = field(default_factory=list)
    errors: list[Diagnostic] = field(default_factory=list)


def classify_diagnostics(diagnostics: Sequence[Diagnostic]) -> DiagnosticSummary:
    """Split *diagnostics* into warnings and errors.

    Only the ``"warning"`` severity counts as a warning; every other severity,
    including unknown ones, counts as an error.
    """
    summary = DiagnosticSummary()
    for diagnostic in diagnostics:
        if diagnostic.is_warning:
            summary.warnings.append(diagnostic)
        else:
            summary.errors.append(diagnostic)
    return summary


def report_diagnostics(source_name: str, diagnostics: Sequence[Diagnostic]) -> DiagnosticSummary:
    """Print every diagnostic of one compilation and return the classification.

    Warnings go to stdout in yellow, errors to stderr in red.  Never raises.
    """
    summary = classify_diagnostics(diagnostics)
    for diagnostic in diagnostics:
        if diagnostic.is_warning:
            print(chalk.yellow(f"yulbuild: warning compiling {source_name}:\n{diagnostic.text}"))
        else:
            print(chalk.red(f"yulbuild: error compiling {source_name}:\n{diagnostic.text}"), file=sys.stderr)
    return summary


def report_failure(source_name: str, error: Exception) -> None:
    """Print the single failure line of a file that was skipped."""
    print(chalk.red(f"yulbuild: failed to compile {source_name}: {error}"), file=sys.stderr)
