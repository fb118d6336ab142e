# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML loader for the ``yulbuild.yaml`` project configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from yulbuild.model.solc import BuildSettings

# ###############
# Public Interface
# ###############

CONFIG_FILENAME = "yulbuild.yaml"


class ConfigError(Exception):
    """Raised when the project configuration cannot be loaded or is invalid."""


class ProjectConfig(BaseModel):
    """The parsed configuration of a Yul project.

    Attributes:
        version: The solc version to compile with.
        yul_details: Optional optimizer ``yulDetails``, forwarded verbatim.
        sources: Sources directory, relative to the project root.
        artifacts: Artifacts directory, relative to the project root.
        solc_path: Optional explicit solc executable instead of a ``PATH`` search.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    version: str
    yul_details: dict[str, Any] | None = Field(default=None, alias="yul-details")
    sources: str = "contracts"
    artifacts: str = "artifacts"
    solc_path: str | None = Field(default=None, alias="solc-path")

    def build_settings(self) -> BuildSettings:
        return BuildSettings(version=self.version, yul_details=self.yul_details)


def load_config(path: Path) -> ProjectConfig:
    """Load and validate a project configuration file.

    Args:
        path: Path to the ``yulbuild.yaml`` file.

    Returns:
        A validated ProjectConfig instance.

    Raises:
        ConfigError: If the file cannot be read, contains invalid YAML, or
            does not conform to the expected schema.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return parse_config(text, source_label=str(path))


def parse_config(text: str, source_label: str = "<string>") -> ProjectConfig:
    """Parse configuration YAML text into a ProjectConfig.

    Raises:
        ConfigError: If the YAML is invalid or the schema does not match.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: configuration must be a YAML mapping")

    # A bare number such as 0.8 would otherwise fail string validation.
    if isinstance(data.get("version"), (int, float)):
        data["version"] = str(data["version"])

    try:
        return ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source_label}: {exc}") from exc


def default_config_text(version: str) -> str:
    """Return the text written by ``yulbuild init``."""
    return (
        "# yulbuild project configuration\n"
        f'version: "{version}"\n'
        "sources: contracts\n"
        "artifacts: artifacts\n"
        "# yul-details:\n"
        "#   stackAllocation: true\n"
    )
