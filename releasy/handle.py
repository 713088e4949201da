"""
Handles events received by a repository.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from releasy.errors import UnrelatedEvent
from releasy.event import Event, EventType
from releasy.git import GitAutomation
from releasy.graph.plan import Plan
from releasy.repo import Repo


logger = logging.getLogger(__name__)


@dataclass
class HandleResult:
    """What the handler did for one event."""
    event_type: EventType
    updated_branches: List[str] = field(default_factory=list)
    rebased_branches: List[str] = field(default_factory=list)


class EventHandler:
    """
    Reacts to events in the repo described by the manifest's current repo.

    - new-commit-to-dependency: advance the tracking branch for the upstream repo
    - new-commit-to-self: rebase every upstream tracking branch onto the base branch
    - new-release: record the release on the tracking branch for the upstream repo
    """

    def __init__(self, plan: Plan, current_repo: Repo, git: GitAutomation):
        self.plan = plan
        self.current_repo = current_repo
        self.git = git

    def handle(self, event: Event) -> HandleResult:
        """
        Handle a single event.

        Raises:
            RepoNotFoundInGraph: If the current repo is not in the plan
            UnrelatedEvent: If a dependency or release event comes from a repo that is not
                upstream, or a self commit event names a repo other than the current one
            GitCommandError: If git automation fails
        """
        event_type = event.event_type
        if event_type == EventType.NEW_COMMIT_TO_DEPENDENCY:
            return self._handle_new_commit_to_dependency(event)
        elif event_type == EventType.NEW_COMMIT_TO_SELF:
            return self._handle_new_commit_to_self(event)
        elif event_type == EventType.NEW_RELEASE:
            return self._handle_new_release(event)
        else:
            raise ValueError(f"Unhandled event type: {event_type}")

    def _require_upstream(self, source: Repo) -> None:
        if source not in self.plan.upstream(self.current_repo):
            raise UnrelatedEvent(source, self.current_repo)

    def _handle_new_commit_to_dependency(self, event: Event) -> HandleResult:
        logger.info(
            f"New commit event received from {event.repo}, commit hash: {event.details.commit_hash}"
        )
        self._require_upstream(event.repo)
        branch = self.git.update_tracking_branch(event.repo, event.details)
        return HandleResult(event.event_type, updated_branches=[branch])

    def _handle_new_commit_to_self(self, event: Event) -> HandleResult:
        logger.info(
            f"New commit event received for {event.repo}, commit hash: {event.details.commit_hash}"
        )
        if event.repo != self.current_repo:
            raise UnrelatedEvent(event.repo, self.current_repo)
        upstream = self.plan.upstream(self.current_repo)
        rebased = self.git.rebase_tracking_branches(upstream)
        return HandleResult(event.event_type, rebased_branches=rebased)

    def _handle_new_release(self, event: Event) -> HandleResult:
        logger.info(
            f"New release event received from {event.repo}, release_tag: {event.details.release_tag}"
        )
        if event.repo == self.current_repo:
            return HandleResult(event.event_type)
        self._require_upstream(event.repo)
        branch = self.git.update_tracking_branch(event.repo, event.details)
        return HandleResult(event.event_type, updated_branches=[branch])
