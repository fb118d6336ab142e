# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""The normalized artifact record handed to the artifact store."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT = "hh-sol-artifact-1"

EMPTY_BYTECODE = "0x"

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]*$")


class Artifact(BaseModel):
    """One compiled contract in the ``hh-sol-artifact-1`` format.

    Link reference maps are always empty because the pipeline never emits
    linked libraries.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    format: str = Field(default=ARTIFACT_FORMAT, alias="_format")
    contract_name: str = Field(alias="contractName")
    source_name: str = Field(alias="sourceName")
    abi: list[str] = Field(default_factory=list)
    bytecode: str = EMPTY_BYTECODE
    deployed_bytecode: str = Field(default=EMPTY_BYTECODE, alias="deployedBytecode")
    link_references: dict[str, Any] = Field(default_factory=dict, alias="linkReferences")
    deployed_link_references: dict[str, Any] = Field(default_factory=dict, alias="deployedLinkReferences")
    function_debug_data: dict[str, Any] | None = Field(default=None, alias="functionDebugData")

    @field_validator("bytecode", "deployed_bytecode")
    @classmethod
    def _check_hex(cls, value: str) -> str:
        if not _HEX_RE.match(value):
            raise ValueError(f"expected a 0x-prefixed hex string, got {value[:20]!r}")
        return value

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation, omitting absent debug data."""
        exclude = {"function_debug_data"} if self.function_debug_data is None else set()
        return self.model_dump(by_alias=True, exclude=exclude)
