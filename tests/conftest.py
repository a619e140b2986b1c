"""Shared fixtures for build agent tests."""

from __future__ import annotations

import os

# GitPython refuses to import without a git executable unless told otherwise.
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import pytest

from buildagent.common.command_runner import CommandResult, CommandRunner, redact
from buildagent.core.settings import AgentSettings


@dataclass
class RecordedCall:
    command: List[str]
    cwd: Optional[Path]
    input: Optional[str]
    secrets: List[str] = field(default_factory=list)

    @property
    def verb(self) -> str:
        return self.command[1] if len(self.command) > 1 else ""


class FakeCommandRunner(CommandRunner):
    """Record commands instead of executing them.

    ``failures`` maps a sub-command (``clone``, ``checkout``, ``login``,
    ``bud``/``build``, ``push``) to the output of a failing run.
    """

    def __init__(self, failures: Optional[Dict[str, str]] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.failures = failures or {}
        self.calls: List[RecordedCall] = []

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Optional[Path] = None,
        timeout: Optional[float] = None,
        input: Optional[str] = None,
        secrets: Iterable[str] = (),
    ) -> CommandResult:
        call = RecordedCall(command=list(command), cwd=cwd, input=input, secrets=list(secrets))
        self.calls.append(call)
        self.logger.info("Run CMD: %s", self.format_command(command, call.secrets))

        if call.verb in self.failures:
            output = redact(self.failures[call.verb], [*self.secrets, *call.secrets])
            return CommandResult(
                command=command,
                return_code=1,
                output=output,
                duration=0.0,
                timed_out=False,
                tool_available=True,
            )
        return CommandResult(
            command=command,
            return_code=0,
            output="",
            duration=0.0,
            timed_out=False,
            tool_available=True,
        )

    @property
    def verbs(self) -> List[str]:
        return [call.verb for call in self.calls]


def make_env(**overrides: Optional[str]) -> Dict[str, str]:
    """Minimal valid build environment with optional overrides."""
    env = {
        "GIT_CLONE_URL": "https://example.com/org/app.git",
        "IMAGE": "registry.example.com/app",
        "HUB_USER": "robot",
        "HUB_TOKEN": "s3cr3t-token",
    }
    env.update(overrides)
    return {key: value for key, value in env.items() if value is not None}


@pytest.fixture
def build_env():
    return make_env


@pytest.fixture
def settings(tmp_path: Path) -> AgentSettings:
    return AgentSettings(
        working_root=tmp_path / "src",
        git_tool="git",
        login_tool="docker",
        build_tool="buildah",
        push_tool="buildah",
        command_timeout=None,
        log_level="DEBUG",
    )


@pytest.fixture
def fake_runner_factory():
    return FakeCommandRunner
