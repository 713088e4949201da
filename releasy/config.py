"""
Configuration for releasy commands.

Loads configuration from environment variables.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from releasy.defaults import (
    DEFAULT_BASE_BRANCH,
    DEFAULT_COMMIT_AUTHOR_EMAIL,
    DEFAULT_COMMIT_AUTHOR_NAME,
    GITHUB_API_URL,
)


@dataclass(frozen=True)
class ReleasyConfig:
    """Settings shared by the emit and handler commands."""
    dispatch_token: Optional[str] = None
    github_token: Optional[str] = None
    api_url: str = GITHUB_API_URL
    commit_author_name: str = DEFAULT_COMMIT_AUTHOR_NAME
    commit_author_email: str = DEFAULT_COMMIT_AUTHOR_EMAIL
    base_branch: str = DEFAULT_BASE_BRANCH
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ReleasyConfig':
        """
        Load configuration from environment.

        Args:
            environ: Mapping to read instead of os.environ (for tests)

        Raises:
            ValueError: If RELEASY_REQUEST_TIMEOUT is not a number
        """
        env = os.environ if environ is None else environ

        timeout_raw = env.get("RELEASY_REQUEST_TIMEOUT", "10")
        try:
            timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(f"RELEASY_REQUEST_TIMEOUT must be a number, got {timeout_raw!r}") from None

        return cls(
            dispatch_token=env.get("DISPATCH_TOKEN") or None,
            github_token=env.get("GITHUB_TOKEN") or None,
            api_url=env.get("RELEASY_GITHUB_API_URL", GITHUB_API_URL).rstrip('/'),
            commit_author_name=env.get("RELEASY_COMMIT_AUTHOR_NAME", DEFAULT_COMMIT_AUTHOR_NAME),
            commit_author_email=env.get("RELEASY_COMMIT_AUTHOR_EMAIL", DEFAULT_COMMIT_AUTHOR_EMAIL),
            base_branch=env.get("RELEASY_BASE_BRANCH", DEFAULT_BASE_BRANCH),
            request_timeout=timeout,
        )


def get_config() -> ReleasyConfig:
    """Get releasy configuration from the process environment."""
    return ReleasyConfig.from_env()
