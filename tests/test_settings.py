"""Tests for environment-backed agent settings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from buildagent.core.settings import AgentSettings

AGENT_VARIABLES = (
    "AGENT_WORKING_ROOT",
    "AGENT_GIT_TOOL",
    "AGENT_LOGIN_TOOL",
    "AGENT_BUILD_TOOL",
    "AGENT_PUSH_TOOL",
    "AGENT_COMMAND_TIMEOUT",
    "AGENT_LOG_LEVEL",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in AGENT_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env) -> None:
    settings = AgentSettings()

    assert settings.working_root == Path("/root/src")
    assert (settings.git_tool, settings.login_tool) == ("git", "docker")
    assert (settings.build_tool, settings.push_tool) == ("buildah", "buildah")
    assert settings.command_timeout is None
    assert settings.log_level == "INFO"


def test_environment_overrides(clean_env, tmp_path) -> None:
    clean_env.setenv("AGENT_WORKING_ROOT", str(tmp_path))
    clean_env.setenv("AGENT_BUILD_TOOL", "podman")
    clean_env.setenv("AGENT_COMMAND_TIMEOUT", "90")
    clean_env.setenv("AGENT_LOG_LEVEL", "debug")

    settings = AgentSettings()

    assert settings.working_root == tmp_path
    assert settings.build_tool == "podman"
    assert settings.command_timeout == 90.0
    assert settings.log_level == "DEBUG"


def test_explicit_values_win_over_environment(clean_env) -> None:
    clean_env.setenv("AGENT_LOG_LEVEL", "debug")

    assert AgentSettings(log_level="warning").log_level == "WARNING"


def test_rejects_non_positive_timeout(clean_env) -> None:
    with pytest.raises(ValidationError):
        AgentSettings(command_timeout=0)
