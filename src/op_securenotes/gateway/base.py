"""Base Gateway Class.

Process plumbing shared by CLI gateways: asynchronous and blocking
execution, environment, timeout and CLI verification.
"""

from __future__ import annotations

import asyncio
import logging
import os
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Optional

from op_securenotes.config import SecureNotesConfig
from op_securenotes.core.discovery import discover_cli, is_supported_version
from op_securenotes.types import CliNotFoundError, CommandResult

logger = logging.getLogger(__name__)


class BaseGateway(ABC):
    """Abstract base class for CLI gateways.

    Subclasses implement _build_base_args() and build per-operation
    argument lists on top of it. Commands never raise for CLI failures:
    spawn errors, timeouts and non-zero exits all come back as a
    CommandResult with error lines.
    """

    def __init__(
        self,
        config: Optional[SecureNotesConfig] = None,
        verify_cli: bool = True,
    ):
        """Initialize gateway.

        Args:
            config: Configuration (uses defaults if None)
            verify_cli: Whether to verify the CLI exists (default: True)

        Raises:
            CliNotFoundError: If verify_cli=True and the CLI is not found
        """
        self.config = config or SecureNotesConfig()
        self._cli_path: Optional[str] = self.config.cli_path

        if verify_cli and not self._cli_path:
            info = discover_cli(self.config.cli_name)
            if not info.available:
                raise CliNotFoundError(self.config.cli_name)
            self._cli_path = info.path
            if not is_supported_version(info.version, self.config.min_cli_version):
                logger.warning(
                    f"{self.config.cli_name} {info.version} is older than "
                    f"{self.config.min_cli_version}; some commands may fail"
                )

    @property
    def cli_executable(self) -> str:
        """Full CLI path if known, otherwise the bare CLI name."""
        return self._cli_path or self.config.cli_name

    @abstractmethod
    def _build_base_args(self) -> list[str]:
        """Arguments every command starts with (executable and global flags)."""
        pass

    def _build_env(self) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self.config.env)
        return env

    def _describe(self, args: list[str]) -> str:
        # Never log assignment values; they carry secrets
        return " ".join(arg.split("=", 1)[0] + "=***" if "=" in arg else arg for arg in args[1:])

    # ========================================================================
    # Execution
    # ========================================================================

    async def execute(self, args: list[str], timeout: Optional[float] = None) -> CommandResult:
        """Run a command asynchronously and collect its output.

        Args:
            args: Full argument list, executable first
            timeout: Timeout in seconds (overrides config)

        Returns:
            CommandResult
        """
        effective_timeout = timeout if timeout is not None else self.config.timeout
        start_time = time.monotonic()
        logger.debug(f"Running: {self._describe(args)}")

        try:
            # NOTE: asyncio.create_subprocess_exec is shell-injection safe (no shell)
            process = await asyncio.create_subprocess_exec(
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._build_env(),
            )
        except (FileNotFoundError, OSError) as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            return CommandResult.failure(f"Failed to run {args[0]}: {e}", duration_ms)

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(),
                timeout=effective_timeout,
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            duration_ms = int((time.monotonic() - start_time) * 1000)
            return CommandResult.failure(
                f"Timeout after {effective_timeout}s: {self._describe(args)}", duration_ms
            )

        duration_ms = int((time.monotonic() - start_time) * 1000)
        return CommandResult.from_output(
            stdout_bytes.decode("utf-8", errors="replace"),
            stderr_bytes.decode("utf-8", errors="replace"),
            process.returncode or 0,
            duration_ms,
        )

    def execute_sync(self, args: list[str], timeout: Optional[float] = None) -> CommandResult:
        """Run a command, blocking the caller until it finishes.

        Args:
            args: Full argument list, executable first
            timeout: Timeout in seconds (overrides config)

        Returns:
            CommandResult
        """
        effective_timeout = timeout if timeout is not None else self.config.timeout
        start_time = time.monotonic()
        logger.debug(f"Running (blocking): {self._describe(args)}")

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=effective_timeout,
                env=self._build_env(),
            )
        except subprocess.TimeoutExpired:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            return CommandResult.failure(
                f"Timeout after {effective_timeout}s: {self._describe(args)}", duration_ms
            )
        except (FileNotFoundError, OSError) as e:
            duration_ms = int((time.monotonic() - start_time) * 1000)
            return CommandResult.failure(f"Failed to run {args[0]}: {e}", duration_ms)

        duration_ms = int((time.monotonic() - start_time) * 1000)
        return CommandResult.from_output(
            completed.stdout or "",
            completed.stderr or "",
            completed.returncode,
            duration_ms,
        )


__all__ = ["BaseGateway"]
