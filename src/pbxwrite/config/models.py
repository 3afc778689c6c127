"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, pbxwrite.toml only contains
overrides. An empty file is a valid config.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- pbxwrite.toml sections ---


class EncodeOptions(BaseModel):
    """[encode] section — output formatting knobs."""

    model_config = {"frozen": True}

    indent: str = "\t"
    escape_strings: bool = False


class ProjectConfig(BaseModel):
    """[project] section — versions stamped on new projects."""

    model_config = {"frozen": True}

    archive_version: int = 1
    object_version: int = 55


# --- Root config ---


class PbxConfig(BaseModel):
    """Root config model for pbxwrite.toml."""

    model_config = {"frozen": True}

    encode: EncodeOptions = Field(default_factory=EncodeOptions)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
