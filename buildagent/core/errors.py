"""Exception hierarchy for the build agent."""
from __future__ import annotations

from typing import Optional


class BuildAgentError(Exception):
    """Base exception for all build agent errors."""


# --- Configuration: detected before any external command runs ---
class ConfigurationError(BuildAgentError):
    """Raised when required input is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class MissingSourceURLError(ConfigurationError):
    """Raised when GIT_CLONE_URL is not provided."""

    def __init__(self) -> None:
        super().__init__("environment variable GIT_CLONE_URL is required", field="GIT_CLONE_URL")


class MissingImageError(ConfigurationError):
    """Raised when IMAGE is not provided or names no repository."""

    def __init__(self) -> None:
        super().__init__("environment variable IMAGE is required", field="IMAGE")


class MissingCredentialsError(ConfigurationError):
    """Raised when registry credentials are incomplete."""

    def __init__(self) -> None:
        super().__init__("environment variables HUB_USER, HUB_TOKEN are required", field="HUB_USER/HUB_TOKEN")


class InvalidProjectNameError(ConfigurationError):
    """Raised when GIT_CLONE_URL yields no usable checkout directory name."""

    def __init__(self, source_url: str) -> None:
        super().__init__(
            f"cannot derive a project directory name from GIT_CLONE_URL {source_url!r}",
            field="GIT_CLONE_URL",
        )


# --- Pipeline: raised by the step that failed ---
class PipelineError(BuildAgentError):
    """Base class for a failed pipeline step."""

    step = "pipeline"

    def __init__(self, message: str, output: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.output = output

    def __str__(self) -> str:
        return f"[{self.step}] {self.message}"


class CheckoutError(PipelineError):
    step = "checkout"


class RevisionError(PipelineError):
    step = "revision"


class AuthenticationError(PipelineError):
    step = "login"


class BuildError(PipelineError):
    step = "build"


class PushError(PipelineError):
    step = "push"
