"""Build configuration, agent settings and the error hierarchy."""

from .config import BuildConfig, resolve_build_config
from .errors import (
    AuthenticationError,
    BuildAgentError,
    BuildError,
    CheckoutError,
    ConfigurationError,
    InvalidProjectNameError,
    MissingCredentialsError,
    MissingImageError,
    MissingSourceURLError,
    PipelineError,
    PushError,
    RevisionError,
)
from .settings import AgentSettings

__all__ = [
    "AgentSettings",
    "AuthenticationError",
    "BuildAgentError",
    "BuildConfig",
    "BuildError",
    "CheckoutError",
    "ConfigurationError",
    "InvalidProjectNameError",
    "MissingCredentialsError",
    "MissingImageError",
    "MissingSourceURLError",
    "PipelineError",
    "PushError",
    "RevisionError",
    "resolve_build_config",
]
