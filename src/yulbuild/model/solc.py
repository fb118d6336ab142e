# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Typed models for the solc standard-JSON input and output descriptors.

Field names follow the wire format through aliases; models are populated by
name in Python code and dumped by alias when sent to the backend.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# ###############
# Public Interface
# ###############

TARGET_FILENAME = "Target.yul"
"""Virtual filename under which the single source is passed to the backend."""

YUL_LANGUAGE = "Yul"


class BuildSettings(BaseModel):
    """Per-run compiler settings supplied by the caller.

    Attributes:
        version: The requested solc version, e.g. ``"0.8.17"``.
        yul_details: Backend-specific optimizer flags, forwarded verbatim.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    version: str
    yul_details: dict[str, Any] | None = Field(default=None, alias="yulDetails")


# -------- input descriptor --------


class SourceContent(BaseModel):
    content: str


class OptimizerDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    yul: bool = True
    yul_details: dict[str, Any] | None = Field(default=None, alias="yulDetails")


class OptimizerSettings(BaseModel):
    enabled: bool = True
    runs: int = 0
    details: OptimizerDetails = Field(default_factory=OptimizerDetails)


def _select_everything() -> dict[str, dict[str, list[str]]]:
    return {"*": {"*": ["*"], "": ["*"]}}


class CompilerSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    output_selection: dict[str, dict[str, list[str]]] = Field(
        default_factory=_select_everything, alias="outputSelection"
    )
    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)


class CompilerInput(BaseModel):
    """The standard-JSON input sent to the backend for a single source."""

    language: str = YUL_LANGUAGE
    sources: dict[str, SourceContent]
    settings: CompilerSettings = Field(default_factory=CompilerSettings)

    def to_json(self) -> str:
        """Serialize to the wire format, omitting ``yulDetails`` when unset.

        Values inside ``yulDetails`` are kept as given, including nulls.
        """
        exclude: dict[str, Any] = {}
        if self.settings.optimizer.details.yul_details is None:
            exclude = {"settings": {"optimizer": {"details": {"yul_details"}}}}
        return self.model_dump_json(by_alias=True, exclude=exclude)


# -------- output descriptor --------


class Diagnostic(BaseModel):
    """One error or warning entry reported by the backend."""

    model_config = ConfigDict(populate_by_name=True)

    severity: str
    message: str = ""
    formatted_message: str | None = Field(default=None, alias="formattedMessage")
    type: str | None = None
    component: str | None = None

    @property
    def is_warning(self) -> bool:
        return self.severity == "warning"

    @property
    def text(self) -> str:
        """The formatted message, falling back to the short message."""
        return self.formatted_message if self.formatted_message else self.message


class BytecodeOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    object: str = ""
    function_debug_data: dict[str, Any] | None = Field(default=None, alias="functionDebugData")


class EvmOutput(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    bytecode: BytecodeOutput = Field(default_factory=BytecodeOutput)
    deployed_bytecode: BytecodeOutput | None = Field(default=None, alias="deployedBytecode")


class ContractOutput(BaseModel):
    evm: EvmOutput = Field(default_factory=EvmOutput)


class CompilerOutput(BaseModel):
    """The validated standard-JSON output of one backend invocation."""

    contracts: dict[str, dict[str, ContractOutput]] = Field(default_factory=dict)
    errors: list[Diagnostic] = Field(default_factory=list)

    def objects_for(self, filename: str = TARGET_FILENAME) -> dict[str, ContractOutput]:
        """Return the contract objects reported under *filename* (possibly empty)."""
        return self.contracts.get(filename, {})
