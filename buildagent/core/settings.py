import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _optional_float(name: str) -> Optional[float]:
    value = os.environ.get(name, "").strip()
    return float(value) if value else None


class AgentSettings(BaseModel):
    """Runtime settings of the agent itself, independent of the build request."""

    # Environment-backed defaults go through the validators too.
    model_config = ConfigDict(validate_default=True)

    # Workspace
    working_root: Path = Field(
        default_factory=lambda: Path(os.environ.get("AGENT_WORKING_ROOT", "/root/src")),
        description="Directory the repository is cloned into",
    )

    # External tools
    git_tool: str = Field(default_factory=lambda: os.environ.get("AGENT_GIT_TOOL", "git"))
    login_tool: str = Field(default_factory=lambda: os.environ.get("AGENT_LOGIN_TOOL", "docker"))
    build_tool: str = Field(default_factory=lambda: os.environ.get("AGENT_BUILD_TOOL", "buildah"))
    push_tool: str = Field(default_factory=lambda: os.environ.get("AGENT_PUSH_TOOL", "buildah"))

    # Timeout for each external command, None waits until the command exits
    command_timeout: Optional[float] = Field(default_factory=lambda: _optional_float("AGENT_COMMAND_TIMEOUT"))

    log_level: str = Field(default_factory=lambda: os.environ.get("AGENT_LOG_LEVEL", "INFO"))

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        """Accept level names in any case."""
        return value.strip().upper() or "INFO"

    @field_validator("command_timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("command_timeout must be positive")
        return value
