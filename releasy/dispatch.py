"""
Sends events to repositories through the GitHub repository dispatch API.
"""
import logging
from typing import List, Optional

import requests

from releasy.config import ReleasyConfig
from releasy.defaults import GITHUB_ACCEPT, USER_AGENT
from releasy.errors import DispatchFailed, MissingDispatchToken
from releasy.event import Event
from releasy.graph.plan import Plan
from releasy.repo import Repo


logger = logging.getLogger(__name__)


class Dispatcher:
    """Posts `repository_dispatch` events to GitHub."""

    def __init__(self, config: ReleasyConfig, session: Optional[requests.Session] = None):
        if not config.dispatch_token:
            raise MissingDispatchToken()

        self.config = config
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'Bearer {config.dispatch_token}',
            'Accept': GITHUB_ACCEPT,
            'User-Agent': USER_AGENT,
            'Content-Type': 'application/json',
        })

    def dispatch_url(self, target_repo: Repo) -> str:
        return f"{self.config.api_url}/repos/{target_repo.owner}/{target_repo.name}/dispatches"

    def send(self, event: Event, target_repo: Repo) -> None:
        """
        Send `event` to `target_repo`.

        Raises:
            DispatchFailed: On transport errors or a non-2xx response
        """
        url = self.dispatch_url(target_repo)
        try:
            response = self.session.post(
                url,
                data=event.to_json(),
                timeout=self.config.request_timeout,
            )
        except requests.exceptions.RequestException as e:
            raise DispatchFailed(target_repo, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise DispatchFailed(
                target_repo,
                f"GitHub returned {response.status_code}: {response.text}",
                status_code=response.status_code,
            )

        logger.info(f"Sent {event.event_type} event to {target_repo.slug}")

    def dispatch_to_neighbors(self, plan: Plan, event: Event, current_repo: Repo) -> List[Repo]:
        """
        Send `event` to every direct dependent of `current_repo`, one at a time.

        Returns:
            Target repos in the order they were sent

        Raises:
            RepoNotFoundInGraph: If `current_repo` is not in the plan
            DispatchFailed: On the first failed request
        """
        targets = plan.neighbors(current_repo)
        for target_repo in targets:
            self.send(event, target_repo)
        return targets
