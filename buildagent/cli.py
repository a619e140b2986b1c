"""Command line entry point of the build agent."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from .common.command_runner import CommandRunner
from .core.config import BuildConfig, resolve_build_config
from .core.errors import ConfigurationError
from .core.settings import AgentSettings
from .pipeline import BuildContext, default_pipeline
from .runtime.build_args import resolve_build_args
from .runtime.commands import BuildCommands

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """Send all agent output to stdout with a timestamp on every line."""
    root = logging.getLogger()
    if not root.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        root.addHandler(console_handler)
    root.setLevel(logging.INFO)

    logging.getLogger('buildagent').setLevel(getattr(logging, level.upper(), logging.INFO))

    # GitPython logs every command it spawns at DEBUG
    logging.getLogger('git').setLevel(logging.WARNING)


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Clone a git repository, build its container image and push it to a registry. "
        "The build is described by environment variables (GIT_CLONE_URL, IMAGE, HUB_USER, HUB_TOKEN, ...).",
    )
    parser.add_argument(
        "--env-file",
        default=None,
        help="Optional .env file loaded before reading the environment (defaults to ./.env if present).",
    )
    parser.add_argument(
        "--working-root",
        default=None,
        help="Directory to clone into (overrides AGENT_WORKING_ROOT).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for agent output (overrides AGENT_LOG_LEVEL).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve the configuration and print the planned commands without running them.",
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> AgentSettings:
    overrides: Dict[str, Any] = {}
    if args.working_root:
        overrides["working_root"] = Path(args.working_root)
    if args.log_level:
        overrides["log_level"] = args.log_level
    return AgentSettings(**overrides)


def describe_config(config: BuildConfig) -> None:
    logger.info("Project: %s (%s)", config.project_name, config.source_url)
    logger.info("Revision: %s %s", config.revision_kind or "ref", config.revision)
    logger.info("Image: %s (registry %s)", config.image_reference, config.registry_host)


def planned_commands(config: BuildConfig, settings: AgentSettings, runner: CommandRunner) -> List[str]:
    """Command lines the pipeline would run, with secrets masked."""
    commands = BuildCommands(config=config, settings=settings, working_root=settings.working_root)
    build_args = resolve_build_args(config.raw_build_args, config.input_environment)
    planned = [
        commands.clone(),
        commands.checkout(),
        commands.login(),
        commands.build(build_args),
        commands.push(),
    ]
    return [runner.format_command(command) for command in planned]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point, returns the process exit status."""
    args = parse_args(argv)
    load_dotenv(args.env_file or find_dotenv(usecwd=True), override=False)

    try:
        settings = load_settings(args)
    except (ValidationError, ValueError) as exc:
        setup_logging()
        logger.error("BUILDER FAILED: invalid agent settings: %s", exc)
        return 1

    setup_logging(settings.log_level)

    try:
        config = resolve_build_config(dict(os.environ))
    except ConfigurationError as exc:
        logger.error("BUILDER FAILED: %s", exc)
        return 1

    runner = CommandRunner(
        logger=logging.getLogger("buildagent.command"),
        secrets=[config.registry_token.get_secret_value()],
        timeout=settings.command_timeout,
    )
    describe_config(config)

    if args.dry_run:
        for line in planned_commands(config, settings, runner):
            logger.info("Would run: %s", line)
        return 0

    context = BuildContext(
        working_root=settings.working_root,
        command_runner=runner,
        settings=settings,
        logger=logger,
    )
    result = default_pipeline().run(config, context)

    if not result.success:
        logger.error("BUILD FAILED: %s", result.error)
        return 1

    logger.info("BUILD SUCCEED: %s", result.image_reference)
    return 0


if __name__ == "__main__":
    sys.exit(main())
