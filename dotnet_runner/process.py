"""Process runner for rendered commands.

Provides a compile-style runner that streams output while the command runs,
and a fire-and-forget runner whose output goes to a labelled log file.
"""

import subprocess
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from dotnet_runner.errors import ProcessError
from dotnet_runner.log import get_logger

logger = get_logger(__name__)


def _write_stdout(line: str) -> None:
    sys.stdout.write(line)
    sys.stdout.flush()


@dataclass
class ProcessRunner:
    """Hands rendered command text to the shell.

    The runner never inspects what the wrapped tool printed; exit codes are
    returned to the caller for display only.
    """

    log_dir: Path = field(default_factory=lambda: Path("logs"))

    def run_compile(
        self,
        command: str,
        cwd: Path,
        on_output: Callable[[str], None] | None = None,
    ) -> int:
        """Run a command and stream its output until it exits.

        Args:
            command: Shell command text, passed to the shell unchanged
            cwd: Working directory for the command
            on_output: Called with each output line (stdout and stderr
                merged); defaults to writing to sys.stdout

        Returns:
            The process exit code

        Raises:
            ProcessError: If the process cannot be started
        """
        emit = on_output or _write_stdout
        logger.debug(f"Running in {cwd}: {command}")

        try:
            process = subprocess.Popen(
                command,
                shell=True,
                cwd=cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                bufsize=1,
            )
        except OSError as e:
            raise ProcessError(f"Failed to start command in {cwd}: {e}") from e

        assert process.stdout is not None
        with process.stdout:
            for line in process.stdout:
                emit(line)
        returncode = process.wait()

        logger.debug(f"Command exited with status {returncode}: {command}")
        return returncode

    def run_detached(
        self, command: str, label: str, cwd: Path | None = None
    ) -> subprocess.Popen:
        """Launch a command without waiting for it.

        Output is appended to ``<log_dir>/<label>.log``.

        Args:
            command: Shell command text, passed to the shell unchanged
            label: Output label, used as the log file name
            cwd: Working directory, defaults to the current directory

        Returns:
            The launched process

        Raises:
            ProcessError: If the process cannot be started
        """
        self.log_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.log_dir / f"{label}.log"
        logger.debug(f"Launching detached ({label}): {command}")

        try:
            with open(output_path, "a") as output:
                return subprocess.Popen(
                    command,
                    shell=True,
                    cwd=cwd,
                    stdin=subprocess.DEVNULL,
                    stdout=output,
                    stderr=subprocess.STDOUT,
                    start_new_session=True,
                )
        except OSError as e:
            raise ProcessError(f"Failed to start {label} command: {e}") from e

    def output_path(self, label: str) -> Path:
        """Path of the log file a detached command with ``label`` writes to."""
        return self.log_dir / f"{label}.log"
