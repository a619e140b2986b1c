from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from ...core.config import BuildConfig
from ...core.errors import RevisionError
from ...runtime.source import SourceRevision, inspect_checkout
from ..pipeline import BuildContext, BuildState, PipelineState


class RevisionAlignStep:
    """Check out the requested revision inside the clone."""

    name = "revision"
    target_state = PipelineState.REVISION_ALIGNED

    def __init__(self, inspector: Callable[[Path], Optional[SourceRevision]] = inspect_checkout) -> None:
        self.inspector = inspector

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        commands = context.commands(config)

        result = context.command_runner.run(commands.checkout(), cwd=commands.checkout_dir)
        state.step_results[self.name] = result
        if not result.succeeded():
            raise RevisionError(
                f"Switch to git ref {config.revision} failed: {result.describe_failure()}",
                output=result.output,
            )
        context.logger.info("Switch to %s %s succeed.", config.revision_kind or "ref", config.revision)

        state.source_revision = self.inspector(commands.checkout_dir)
        if state.source_revision is not None:
            revision = state.source_revision
            context.logger.info(
                "Building commit %s (%s)%s",
                revision.short_commit,
                revision.committed_at.isoformat(),
                f" tags: {', '.join(revision.tags)}" if revision.tags else "",
            )
