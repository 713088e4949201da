"""
Git automation for tracking branches.

A dependent repo keeps one tracking branch per upstream repo. The branch is
advanced with an empty commit whenever the upstream repo reports a change,
which re-triggers CI against the new upstream state, and it is rebased onto
the base branch whenever the dependent repo itself receives a new commit.

The commit identity is passed to each git invocation with `-c`; nothing is
written to global or repository git config.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from releasy.commands import CommandResult, CommandRunner, SubprocessRunner
from releasy.config import ReleasyConfig
from releasy.defaults import DEFAULT_BASE_BRANCH, DEFAULT_REMOTE, TRACKING_BRANCH_PREFIX
from releasy.errors import GitCommandError
from releasy.event import EventDetails
from releasy.repo import Repo


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitIdentity:
    """Author and committer identity for commits made by releasy."""
    name: str
    email: str

    @classmethod
    def from_config(cls, config: ReleasyConfig) -> 'GitIdentity':
        return cls(name=config.commit_author_name, email=config.commit_author_email)

    def as_config_args(self) -> List[str]:
        return ['-c', f'user.name={self.name}', '-c', f'user.email={self.email}']


def tracking_branch_name(upstream_repo: Repo, base_branch: str = DEFAULT_BASE_BRANCH) -> str:
    """
    Name of the branch tracking `upstream_repo`.

    Example: releasy/FuelLabs-fuels-rs-master
    """
    return f"{TRACKING_BRANCH_PREFIX}/{upstream_repo.owner}-{upstream_repo.name}-{base_branch}"


def tracking_commit_message(upstream_repo: Repo, details: EventDetails) -> str:
    if details.release_tag:
        return f"releasy: new release {details.release_tag} of {upstream_repo.slug}"
    if details.commit_hash:
        return f"releasy: new commit {details.commit_hash} in {upstream_repo.slug}"
    return f"releasy: new changes in {upstream_repo.slug}"


class GitAutomation:
    """Creates, advances and rebases tracking branches in a local clone."""

    def __init__(
        self,
        workdir: Path,
        identity: GitIdentity,
        base_branch: str = DEFAULT_BASE_BRANCH,
        remote: str = DEFAULT_REMOTE,
        runner: Optional[CommandRunner] = None,
    ):
        self.workdir = Path(workdir)
        self.identity = identity
        self.base_branch = base_branch
        self.remote = remote
        self.runner = runner or SubprocessRunner()

    def _git(self, args: Sequence[str], check: bool = True) -> CommandResult:
        result = self.runner.run('git', list(args), cwd=self.workdir)
        if check and not result.ok:
            raise GitCommandError(['git', *args], result.returncode, result.stderr)
        return result

    def _git_as_identity(self, args: Sequence[str]) -> CommandResult:
        return self._git([*self.identity.as_config_args(), *args])

    def tracking_branch(self, upstream_repo: Repo) -> str:
        return tracking_branch_name(upstream_repo, self.base_branch)

    def fetch(self) -> None:
        self._git(['fetch', self.remote, '--prune'])

    def remote_branch_exists(self, branch_name: str) -> bool:
        """Check if branch exists on the remote."""
        result = self._git(['ls-remote', '--heads', self.remote, branch_name])
        return bool(result.stdout.strip())

    def update_tracking_branch(self, upstream_repo: Repo, details: EventDetails) -> str:
        """
        Advance the tracking branch for `upstream_repo` with an empty commit.

        The branch is created from the remote base branch if it does not exist
        on the remote yet.

        Args:
            upstream_repo: Repo that reported the change
            details: Commit hash and/or release tag of the change

        Returns:
            Name of the pushed branch

        Raises:
            GitCommandError: If any git command fails
        """
        branch = self.tracking_branch(upstream_repo)
        self.fetch()

        if self.remote_branch_exists(branch):
            start_point = f"{self.remote}/{branch}"
        else:
            logger.info(f"Creating tracking branch {branch} from {self.remote}/{self.base_branch}")
            start_point = f"{self.remote}/{self.base_branch}"

        self._git(['checkout', '-B', branch, start_point])
        message = tracking_commit_message(upstream_repo, details)
        self._git_as_identity(['commit', '--allow-empty', '-m', message])
        self._git(['push', '-u', self.remote, branch])

        logger.info(f"Updated tracking branch {branch}: {message}")
        return branch

    def rebase_tracking_branches(self, upstream_repos: Sequence[Repo]) -> List[str]:
        """
        Rebase the tracking branch of each upstream repo onto the base branch.

        Repos without a tracking branch on the remote are skipped. A failed
        rebase is aborted before the error is raised, leaving the clone clean.

        Args:
            upstream_repos: Repos whose tracking branches should be rebased

        Returns:
            Names of the rebased branches, in the order processed

        Raises:
            GitCommandError: If any git command fails
        """
        self.fetch()
        onto = f"{self.remote}/{self.base_branch}"
        rebased = []

        for upstream_repo in upstream_repos:
            branch = self.tracking_branch(upstream_repo)
            if not self.remote_branch_exists(branch):
                logger.debug(f"No tracking branch {branch} on {self.remote}, skipping")
                continue

            self._git(['checkout', '-B', branch, f"{self.remote}/{branch}"])
            try:
                self._git_as_identity(['rebase', onto])
            except GitCommandError:
                self._git(['rebase', '--abort'], check=False)
                raise
            self._git(['push', '--force-with-lease', self.remote, branch])

            logger.info(f"Rebased {branch} onto {onto}")
            rebased.append(branch)

        return rebased
