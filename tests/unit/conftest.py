"""
Pytest configuration for unit tests.

Provides manifest fixtures and a fake command runner for git automation.
"""
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import pytest

from releasy.commands import CommandResult


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class FakeRunner:
    """Records git invocations and answers them without touching a repository."""

    def __init__(self, remote_branches: Sequence[str] = ()):
        self.calls: List[List[str]] = []
        self.remote_branches = set(remote_branches)
        self.failures: Dict[str, CommandResult] = {}

    def fail(self, subcommand: str, stderr: str = "boom", returncode: int = 1) -> None:
        self.failures[subcommand] = CommandResult(returncode=returncode, stderr=stderr)

    @staticmethod
    def subcommand(args: Sequence[str]) -> str:
        args = list(args)
        while args and args[0] == '-c':
            args = args[2:]
        return args[0] if args else ''

    def git_calls(self, subcommand: str) -> List[List[str]]:
        return [call for call in self.calls if self.subcommand(call[1:]) == subcommand]

    def run(self, program: str, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        self.calls.append([program, *args])
        subcommand = self.subcommand(args)
        if subcommand in self.failures:
            return self.failures[subcommand]
        if subcommand == 'ls-remote':
            branch = args[-1]
            if branch in self.remote_branches:
                return CommandResult(0, stdout=f"1234abcd\trefs/heads/{branch}\n")
            return CommandResult(0)
        return CommandResult(0)


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR



@pytest.fixture
def sway_sdk_manifest_toml():
    """Two repos: sway depends on the rust sdk."""
    return """
[current-repo]
name = "sway"
owner = "FuelLabs"

[repo.sway.details]
name = "sway"
owner = "FuelLabs"

[repo.sway]
dependencies = ["rust-sdk"]

[repo.rust-sdk.details]
name = "fuels-rs"
owner = "FuelLabs"
"""
