from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Sequence, Union

REDACTED = "******"


@dataclass(slots=True)
class CommandResult:
    """Represents the outcome of an external command execution."""

    command: Sequence[str]
    return_code: Optional[int]
    output: str
    duration: float
    timed_out: bool
    tool_available: bool
    exception: Optional[BaseException] = None

    def succeeded(self) -> bool:
        """Return True when the command finished successfully."""
        return self.return_code == 0 and not self.timed_out and self.tool_available

    def describe_failure(self) -> str:
        """Short human readable reason for a failed command."""
        if self.timed_out:
            return f"timed out after {self.duration:.1f}s"
        if not self.tool_available:
            return f"command not found: {self.command[0]}"
        if self.return_code is None:
            return f"could not start command: {self.exception}"
        return f"exit status {self.return_code}"


def redact(text: str, secrets: Iterable[str]) -> str:
    """Replace every occurrence of each secret in text."""
    # Longest first so a secret containing another one is masked whole.
    for secret in sorted({s for s in secrets if s}, key=len, reverse=True):
        text = text.replace(secret, REDACTED)
    return text


def _decode(data: Union[str, bytes, None]) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


class CommandRunner:
    """Thin wrapper over subprocess that merges output and traces each call."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        *,
        secrets: Iterable[str] = (),
        timeout: Optional[float] = None,
    ) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.secrets = [secret for secret in secrets if secret]
        self.timeout = timeout

    def add_secret(self, secret: str) -> None:
        """Register a value that must never appear in trace output."""
        if secret and secret not in self.secrets:
            self.secrets.append(secret)

    def format_command(self, command: Sequence[str], secrets: Iterable[str] = ()) -> str:
        return redact(" ".join(command), [*self.secrets, *secrets])

    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Optional[Path] = None,
        timeout: Optional[float] = None,
        input: Optional[str] = None,
        secrets: Iterable[str] = (),
    ) -> CommandResult:
        """
        Execute a command, blocking until it exits.

        Standard error is merged into standard output. A non-zero exit is
        reported through the result, never raised.

        Args:
            command: Program name followed by its arguments.
            cwd: Working directory for the child process.
            timeout: Seconds to wait before killing the child. Falls back to the
                runner default; None waits forever.
            input: Text written to the child's standard input.
            secrets: Extra values masked in the trace for this call only.
        """
        masked = [*self.secrets, *secrets]
        timeout = timeout if timeout is not None else self.timeout
        self.logger.info("Run CMD: %s", redact(" ".join(command), masked))
        if cwd:
            self.logger.debug("Working directory: %s", cwd)

        start = time.time()
        try:
            completed = subprocess.run(
                list(command),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                input=input,
                text=True,
                timeout=timeout,
                cwd=str(cwd) if cwd else None,
            )
            duration = time.time() - start
            output = redact(completed.stdout or "", masked)
            self._trace_output(output)
            return CommandResult(
                command=command,
                return_code=completed.returncode,
                output=output,
                duration=duration,
                timed_out=False,
                tool_available=True,
            )
        except subprocess.TimeoutExpired as exc:
            duration = time.time() - start
            output = redact(_decode(exc.output), masked)
            self._trace_output(output)
            self.logger.warning("Command timed out after %.2fs: %s", duration, command[0])
            return CommandResult(
                command=command,
                return_code=None,
                output=output,
                duration=duration,
                timed_out=True,
                tool_available=True,
                exception=exc,
            )
        except FileNotFoundError as exc:
            duration = time.time() - start
            if cwd and not Path(cwd).is_dir():
                self.logger.error("Working directory does not exist: %s", cwd)
                return CommandResult(
                    command=command,
                    return_code=None,
                    output=f"Working directory does not exist: {cwd}",
                    duration=duration,
                    timed_out=False,
                    tool_available=True,
                    exception=exc,
                )
            self.logger.error("Command not found: %s", command[0])
            return CommandResult(
                command=command,
                return_code=None,
                output=f"Command not found: {command[0]}",
                duration=duration,
                timed_out=False,
                tool_available=False,
                exception=exc,
            )
        except OSError as exc:
            duration = time.time() - start
            self.logger.error("Command execution failed: %s", exc)
            return CommandResult(
                command=command,
                return_code=None,
                output=redact(str(exc), masked),
                duration=duration,
                timed_out=False,
                tool_available=True,
                exception=exc,
            )

    def _trace_output(self, output: str) -> None:
        if output.strip():
            self.logger.info("%s", output.rstrip("\n"))
