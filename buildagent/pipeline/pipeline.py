from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Sequence

from ..common.command_runner import CommandResult, CommandRunner
from ..core.config import BuildConfig
from ..core.errors import PipelineError
from ..core.settings import AgentSettings
from ..runtime.build_args import BuildArgsResolution
from ..runtime.commands import BuildCommands
from ..runtime.source import SourceRevision


class PipelineState(Enum):
    """Linear progress of a build; FAILED is reachable from every state."""

    START = "start"
    SOURCE_FETCHED = "source_fetched"
    REVISION_ALIGNED = "revision_aligned"
    REGISTRY_AUTHENTICATED = "registry_authenticated"
    IMAGE_BUILT = "image_built"
    IMAGE_PUSHED = "image_pushed"
    DONE = "done"
    FAILED = "failed"


@dataclass(slots=True)
class BuildContext:
    """Static runtime context that is shared across pipeline steps."""

    working_root: Path
    command_runner: CommandRunner
    settings: AgentSettings
    logger: logging.Logger

    def commands(self, config: BuildConfig) -> BuildCommands:
        return BuildCommands(config=config, settings=self.settings, working_root=self.working_root)


@dataclass(slots=True)
class BuildState:
    """Mutable state that flows through the pipeline."""

    state: PipelineState = PipelineState.START
    completed_steps: List[str] = field(default_factory=list)
    source_revision: Optional[SourceRevision] = None
    build_args: Optional[BuildArgsResolution] = None
    step_results: Dict[str, CommandResult] = field(default_factory=dict)


class BuildStep(Protocol):
    """Protocol implemented by all pipeline steps."""

    name: str
    target_state: PipelineState

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        """Perform the step, raising a PipelineError subclass on failure."""
        ...


@dataclass(slots=True)
class BuildPipelineResult:
    """Aggregate result returned by the build pipeline."""

    state: PipelineState
    image_reference: str
    completed_steps: List[str]
    error: Optional[PipelineError] = None
    source_revision: Optional[SourceRevision] = None
    build_args: Optional[BuildArgsResolution] = None

    @property
    def success(self) -> bool:
        return self.state is PipelineState.DONE

    @property
    def failed_step(self) -> Optional[str]:
        return self.error.step if self.error else None


class BuildPipeline:
    """Run build steps strictly in order, stopping at the first failure."""

    def __init__(self, steps: Sequence[BuildStep]) -> None:
        self.steps = list(steps)

    def run(self, config: BuildConfig, context: BuildContext) -> BuildPipelineResult:
        state = BuildState()

        for step in self.steps:
            context.logger.debug("Running pipeline step: %s", step.name)
            try:
                step.run(config, state, context)
            except PipelineError as exc:
                context.logger.error("Step %s failed in state %s: %s", exc.step, state.state.value, exc.message)
                state.state = PipelineState.FAILED
                return self._result(config, state, error=exc)

            state.completed_steps.append(step.name)
            state.state = step.target_state

        state.state = PipelineState.DONE
        return self._result(config, state)

    @staticmethod
    def _result(
        config: BuildConfig,
        state: BuildState,
        error: Optional[PipelineError] = None,
    ) -> BuildPipelineResult:
        return BuildPipelineResult(
            state=state.state,
            image_reference=config.image_reference,
            completed_steps=list(state.completed_steps),
            error=error,
            source_revision=state.source_revision,
            build_args=state.build_args,
        )


def default_pipeline() -> BuildPipeline:
    """Checkout, align, login, build and push."""
    from .steps import (
        ImageBuildStep,
        ImagePushStep,
        RegistryAuthenticateStep,
        RevisionAlignStep,
        SourceFetchStep,
    )

    return BuildPipeline(
        [
            SourceFetchStep(),
            RevisionAlignStep(),
            RegistryAuthenticateStep(),
            ImageBuildStep(),
            ImagePushStep(),
        ]
    )
