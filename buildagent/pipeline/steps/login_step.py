from __future__ import annotations

from ...core.config import BuildConfig
from ...core.errors import AuthenticationError
from ..pipeline import BuildContext, BuildState, PipelineState


class RegistryAuthenticateStep:
    """Log in to the image registry with the job credentials."""

    name = "login"
    target_state = PipelineState.REGISTRY_AUTHENTICATED

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        token = config.registry_token.get_secret_value()
        context.command_runner.add_secret(token)

        result = context.command_runner.run(
            context.commands(config).login(),
            input=token + "\n",
        )
        state.step_results[self.name] = result
        if not result.succeeded():
            raise AuthenticationError(
                f"Login to {config.registry_host} failed: {result.describe_failure()}",
                output=result.output,
            )
        context.logger.info("Login to %s succeed.", config.registry_host)
