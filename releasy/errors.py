"""
Error types raised by releasy.

Every error derives from ReleasyError so the command line tools can report
any failure with a single handler.
"""
from typing import Optional, Sequence

from releasy.repo import Repo


class ReleasyError(Exception):
    """Base class for all releasy errors."""
    pass


# Manifest loading

class ManifestFileError(ReleasyError):
    """Raised when a manifest file cannot be loaded."""
    pass


class MissingManifestFile(ManifestFileError):
    """Raised when the manifest file cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to read manifest file at `{path}`: {reason}")


class FailedToParseManifest(ManifestFileError):
    """Raised when the manifest text is not a valid manifest."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"failed to parse manifest: {reason}")


# Dependency graph

class BuildPlanError(ReleasyError):
    """Raised for dependency graph construction and query failures."""
    pass


class MissingDependencyDefinition(BuildPlanError):
    """Raised when a dependency key has no entry in the manifest."""

    def __init__(self, repo_name: str, dependency_key: str):
        self.repo_name = repo_name
        self.dependency_key = dependency_key
        super().__init__(
            f"`{repo_name}` is depending on a project (`{dependency_key}`) "
            f"that does not have a definition in the manifest file"
        )


class RepoNotFoundInGraph(BuildPlanError):
    """Raised when a queried repo is not part of the dependency graph."""

    def __init__(self, repo: Repo):
        self.repo = repo
        super().__init__(f"provided repo `{repo}` not found in dependency graph")


# Events

class EventError(ReleasyError):
    """Raised when an event cannot be built or handled."""
    pass


class InvalidEventType(EventError):
    """Raised when a string does not name a known event type."""

    def __init__(self, value: str, allowed: Sequence[str]):
        self.value = value
        self.allowed = list(allowed)
        choices = ", ".join(f"`{a}`" for a in self.allowed)
        super().__init__(
            f"failed to convert str (`{value}`) to `EventType`, possible values are: [{choices}]"
        )


class InvalidEventInput(EventError):
    """Raised when command line event input is incomplete or contradictory."""
    pass


class UnrelatedEvent(EventError):
    """Raised when an event comes from a repo the current repo does not depend on."""

    def __init__(self, source: Repo, current: Repo):
        self.source = source
        self.current = current
        super().__init__(f"`{current}` does not depend on `{source}`")


# Dispatch

class DispatchError(ReleasyError):
    """Raised when an event cannot be dispatched."""
    pass


class MissingDispatchToken(DispatchError):
    """Raised when DISPATCH_TOKEN is not configured."""

    def __init__(self):
        super().__init__(
            "DISPATCH_TOKEN env variable is missing.\n"
            "Please set the variable to a token that grants read and write access "
            "to repos in the dependency tree."
        )


class DispatchFailed(DispatchError):
    """Raised when the GitHub API rejects or never receives a dispatch request."""

    def __init__(self, repo: Repo, reason: str, status_code: Optional[int] = None):
        self.repo = repo
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"failed to send dispatch request to {repo}, reason: `{reason}`")


# Git

class GitCommandError(ReleasyError):
    """Raised when a git command exits with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"`{' '.join(self.command)}` exited with status {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)
