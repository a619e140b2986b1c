from __future__ import annotations

from ...core.config import BuildConfig
from ...core.errors import PushError
from ..pipeline import BuildContext, BuildState, PipelineState


class ImagePushStep:
    """Push the tagged image to its registry."""

    name = "push"
    target_state = PipelineState.IMAGE_PUSHED

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        result = context.command_runner.run(context.commands(config).push())
        state.step_results[self.name] = result
        if not result.succeeded():
            raise PushError(
                f"Push of {config.image_reference} failed: {result.describe_failure()}",
                output=result.output,
            )
        context.logger.info("Push of %s succeed.", config.image_reference)
