from __future__ import annotations

from pathlib import Path

from ...core.config import BuildConfig
from ...core.errors import CheckoutError
from ..pipeline import BuildContext, BuildState, PipelineState


def ensure_directory(path: Path) -> None:
    """Create path with parents unless it already is a directory."""
    if path.exists() and not path.is_dir():
        raise CheckoutError(f"{path} is not a directory")
    try:
        path.mkdir(mode=0o755, parents=True, exist_ok=True)
    except OSError as exc:
        raise CheckoutError(f"cannot create working root {path}: {exc}") from exc


class SourceFetchStep:
    """Clone the repository with submodules into the working root."""

    name = "checkout"
    target_state = PipelineState.SOURCE_FETCHED

    def run(self, config: BuildConfig, state: BuildState, context: BuildContext) -> None:
        ensure_directory(context.working_root)
        commands = context.commands(config)

        result = context.command_runner.run(commands.clone(), cwd=context.working_root)
        state.step_results[self.name] = result
        if not result.succeeded():
            raise CheckoutError(
                f"Clone project {config.source_url} failed: {result.describe_failure()}",
                output=result.output,
            )
        context.logger.info("Clone project %s succeed.", config.source_url)
