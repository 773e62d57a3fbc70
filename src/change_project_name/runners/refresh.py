"""Dependency refresh after the package cache has been rewritten."""

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Callable, Sequence
from contextlib import suppress
from pathlib import Path

from change_project_name.config import RefreshConfig
from change_project_name.core.errors import SubprocessFailure
from change_project_name.core.models import RefreshResult, RefreshStepResult

logger = logging.getLogger(__name__)

OutputCallback = Callable[[str], None]

# Exit code recorded when the command could not be started at all
LAUNCH_FAILED = -1
# Exit code recorded when forwarding output failed and the process was killed
STREAM_FAILED = -2

# Raise the StreamReader line limit from the 64KB default so long tool output
# lines do not abort forwarding
LINE_LIMIT = 2 * 1024 * 1024


def _write_stdout(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _write_stderr(text: str) -> None:
    sys.stderr.write(text)
    sys.stderr.flush()


class RefreshRunner:
    """Runs ``<command> clean`` then ``<command> pub get``.

    The fetch step only runs when clean exits with status 0. Child output is
    forwarded line by line while the process runs. Failures are logged and
    returned, never raised.
    """

    def __init__(
        self,
        project_root: Path,
        command: str = "flutter",
        clean_args: Sequence[str] = ("clean",),
        fetch_args: Sequence[str] = ("pub", "get"),
        on_stdout: OutputCallback | None = None,
        on_stderr: OutputCallback | None = None,
        line_limit: int = LINE_LIMIT,
    ) -> None:
        self.project_root = project_root
        self.command = command
        self.clean_args = list(clean_args)
        self.fetch_args = list(fetch_args)
        self._on_stdout = on_stdout or _write_stdout
        self._on_stderr = on_stderr or _write_stderr
        self.line_limit = line_limit

    @classmethod
    def from_config(cls, project_root: Path, config: RefreshConfig) -> RefreshRunner:
        return cls(
            project_root,
            command=config.command,
            clean_args=config.clean_args,
            fetch_args=config.fetch_args,
        )

    async def run(self) -> RefreshResult:
        """Run the clean + fetch pipeline.

        Returns:
            RefreshResult; ``fetch`` is None when clean did not succeed
        """
        clean = await self.run_step(self.clean_args)
        if not clean.succeeded:
            logger.warning(f"Skipping '{self.command} {' '.join(self.fetch_args)}' because clean failed")
            return RefreshResult(clean=clean)

        fetch = await self.run_step(self.fetch_args)
        return RefreshResult(clean=clean, fetch=fetch)

    async def run_step(self, args: Sequence[str]) -> RefreshStepResult:
        """Run one command to completion, forwarding its output."""
        cmd = [self.command, *args]
        self._on_stdout(f"Running command: {' '.join(cmd)}\n")
        logger.debug(f"Starting {cmd} in {self.project_root}")

        try:
            process = await asyncio.create_subprocess_exec(
                cmd[0],
                *cmd[1:],
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.project_root,
                limit=self.line_limit,
            )
        except OSError as e:
            logger.warning(f"Failed to run command {' '.join(cmd)}: {e}")
            self._on_stderr(f"Failed to run command: {' '.join(cmd)}\nError: {e}\n")
            return RefreshStepResult(command=cmd, exit_code=LAUNCH_FAILED)

        if process.stdout is None or process.stderr is None:
            raise RuntimeError("Subprocess streams not initialized.")

        try:
            await asyncio.gather(
                self._forward(process.stdout, self._on_stdout),
                self._forward(process.stderr, self._on_stderr),
            )
            exit_code = await process.wait()
        except (ValueError, OSError) as e:
            logger.warning(f"Lost output of {' '.join(cmd)}, killing process {process.pid}: {e}")
            self._on_stderr(f"Could not read output of: {' '.join(cmd)}\nError: {e}\n")
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            return RefreshStepResult(command=cmd, exit_code=STREAM_FAILED)

        if exit_code != 0:
            failure = SubprocessFailure(cmd, exit_code)
            logger.warning(str(failure))
            self._on_stderr(f"Command failed with exit code: {exit_code}\n")
        else:
            self._on_stdout("\n")

        return RefreshStepResult(command=cmd, exit_code=exit_code)

    @staticmethod
    async def _forward(stream: asyncio.StreamReader, sink: OutputCallback) -> None:
        while True:
            line = await stream.readline()
            if not line:
                break
            sink(line.decode("utf-8", errors="replace"))
