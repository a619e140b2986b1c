"""Resolution of BUILD_ARGS into --build-arg pairs."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BuildArgsResolution:
    """Build arguments ready to hand to the build tool."""

    args: List[Tuple[str, str]] = field(default_factory=list)
    degraded: bool = False
    error: Optional[str] = None

    def as_cli_flags(self, flag: str = "--build-arg") -> List[str]:
        flags: List[str] = []
        for key, value in self.args:
            flags.extend([flag, f"{key}={value}"])
        return flags


def indirection_name(value: str) -> Optional[str]:
    """Return NAME for a value shaped like ${NAME}, else None."""
    if value.startswith("${") and value.endswith("}") and len(value) >= 3:
        return value[2:-1]
    return None


def resolve_build_args(raw: str, environment: Mapping[str, str]) -> BuildArgsResolution:
    """
    Parse a JSON object of build arguments and resolve ${NAME} values.

    A value of the form ${NAME} is replaced by environment[NAME] when NAME is
    present; otherwise the literal value is passed through. Input that is not a
    JSON object of strings yields no arguments and a degraded result instead of
    an error.
    """
    if not raw.strip():
        return BuildArgsResolution()

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        return _degraded(f"invalid JSON: {exc}")

    if not isinstance(parsed, dict):
        return _degraded(f"expected a JSON object, got {type(parsed).__name__}")

    non_strings = [key for key, value in parsed.items() if not isinstance(value, str)]
    if non_strings:
        return _degraded(f"values must be strings (offending keys: {', '.join(non_strings)})")

    resolution = BuildArgsResolution()
    for key, value in parsed.items():
        name = indirection_name(value)
        if name is not None and name in environment:
            value = environment[name]
        resolution.args.append((key, value))
    return resolution


def _degraded(reason: str) -> BuildArgsResolution:
    logger.warning("Unmarshal BUILD_ARGS error, building without build arguments: %s", reason)
    return BuildArgsResolution(degraded=True, error=reason)
