from __future__ import annotations

from ...core.config import BuildConfig
from ...core.errors import BuildError
from ...runtime.build_args import resolve_build_args
from ..pipeline import BuildContext, BuildState, PipelineState


class ImageBuildStep:
    """Build the image from the checkout with resolved build arguments."""

    name = "build"
    target_state = PipelineState.IMAGE_BUILT

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        build_args = resolve_build_args(config.raw_build_args, config.input_environment)
        state.build_args = build_args
        if build_args.degraded:
            context.logger.warning("Continuing build of %s without build arguments", config.image_reference)

        commands = context.commands(config)
        result = context.command_runner.run(
            commands.build(build_args),
            cwd=context.working_root,
        )
        state.step_results[self.name] = result
        if not result.succeeded():
            raise BuildError(
                f"Build of {config.image_reference} failed: {result.describe_failure()}",
                output=result.output,
            )
        context.logger.info("Build of %s succeed.", config.image_reference)
