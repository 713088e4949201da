"""
Command execution capability used by git automation.

Callers depend on the CommandRunner protocol so tests can substitute a fake
runner; SubprocessRunner is the real implementation.
"""
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from releasy.errors import ReleasyError


logger = logging.getLogger(__name__)


class UnsafeCommandError(ReleasyError):
    """Raised when attempting to execute a program that is not allowed."""
    pass


@dataclass(frozen=True)
class CommandResult:
    """Exit status and captured output of a finished command."""
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    """Runs a program with arguments in a working directory."""

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        ...


class SubprocessRunner:
    """Executes commands with subprocess, restricted to an allow-list of programs."""

    def __init__(self, allowed_programs: Sequence[str] = ('git',)):
        self.allowed_programs = tuple(allowed_programs)

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """
        Run a command from a program and list of arguments (no shell).

        Args:
            program: Executable name
            args: Arguments passed to the program
            cwd: Working directory (defaults to the process cwd)

        Returns:
            CommandResult; a non-zero exit status is not raised here

        Raises:
            UnsafeCommandError: If `program` is not in the allow-list
        """
        if program not in self.allowed_programs:
            raise UnsafeCommandError(
                f"Program `{program}` is not allowed. Allowed: {', '.join(self.allowed_programs)}"
            )

        command = [program, *args]
        logger.debug(f"Running {' '.join(command)} (cwd={cwd})")
        completed = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=False,
        )
        return CommandResult(
            returncode=completed.returncode,
            stdout=completed.stdout,
            stderr=completed.stderr,
        )
