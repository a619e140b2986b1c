"""Argument lists for the external tools driven by the pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from ..core.config import BuildConfig
from ..core.settings import AgentSettings
from .build_args import BuildArgsResolution


@dataclass(slots=True)
class BuildCommands:
    """Build command lines for one BuildConfig rooted at working_root."""

    config: BuildConfig
    settings: AgentSettings
    working_root: Path

    @property
    def checkout_dir(self) -> Path:
        return self.working_root / self.config.project_name

    @property
    def context_dir(self) -> Path:
        """Build context, the checkout or BUILD_WORKDIR inside it."""
        workdir = self.config.build_workdir.strip("/")
        return self.checkout_dir / workdir if workdir else self.checkout_dir

    @property
    def dockerfile_path(self) -> Optional[Path]:
        subpath = self.config.dockerfile_subpath.lstrip("/")
        return self.checkout_dir / subpath if subpath else None

    def clone(self) -> List[str]:
        return [
            self.settings.git_tool,
            "clone",
            "--recurse-submodules",
            self.config.source_url,
            str(self.checkout_dir),
        ]

    def checkout(self) -> List[str]:
        # Same alignment for branches, tags and commits.
        return [self.settings.git_tool, "checkout", self.config.revision, "--"]

    def login(self) -> List[str]:
        """Login command; the token is written to stdin, never to argv."""
        return [
            self.settings.login_tool,
            "login",
            self.config.registry_host,
            "--username",
            self.config.registry_user,
            "--password-stdin",
        ]

    def build(self, build_args: BuildArgsResolution) -> List[str]:
        tool = self.settings.build_tool
        # buildah spells "build" as "bud"; docker and podman use "build".
        command = [tool, "bud" if Path(tool).name == "buildah" else "build"]

        dockerfile = self.dockerfile_path
        if dockerfile is not None:
            command.extend(["-f", str(dockerfile)])

        if self.config.no_cache:
            command.append("--no-cache")

        command.extend(["-t", self.config.image_reference])
        command.extend(build_args.as_cli_flags())
        command.append(str(self.context_dir))
        return command

    def push(self) -> List[str]:
        return [self.settings.push_tool, "push", self.config.image_reference]
