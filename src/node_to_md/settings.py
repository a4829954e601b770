from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Settings(BaseModel):
    """Configuration settings for the node_to_md module."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repo: Path = Field(default_factory=Path.cwd, description="Project root.")
    no_styles: bool = Field(default=False, description="Exclude style definitions.")
    no_types: bool = Field(default=False, description="Exclude type definitions.")
    exclude: str = Field(
        default="",
        description="Comma-separated glob patterns to exclude.",
    )
    include_ignored: bool = Field(
        default=False,
        description="Include files matching .gitignore patterns.",
    )
    log_file: str = Field(default="", description="Log file path.")
