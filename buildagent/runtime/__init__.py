"""Helpers that turn a build configuration into external tool invocations."""

from .build_args import BuildArgsResolution, resolve_build_args
from .commands import BuildCommands
from .source import SourceRevision, inspect_checkout

__all__ = [
    "BuildArgsResolution",
    "BuildCommands",
    "SourceRevision",
    "inspect_checkout",
    "resolve_build_args",
]
