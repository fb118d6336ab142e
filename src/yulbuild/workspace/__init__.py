# Copyright 2026 Yulbuild Contributors
# SPDX-License-Identifier: Apache-2.0

"""Project configuration and artifact storage for yulbuild projects."""

from yulbuild.workspace.config import (
    CONFIG_FILENAME,
    ConfigError,
    ProjectConfig,
    default_config_text,
    load_config,
    parse_config,
)
from yulbuild.workspace.store import DirectoryArtifactSink

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ProjectConfig",
    "default_config_text",
    "load_config",
    "parse_config",
    "DirectoryArtifactSink",
]
