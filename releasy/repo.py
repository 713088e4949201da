"""
Repository identity used as graph payload and lookup key.
"""
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Repo:
    """
    Represents a repository, a node in the dependency graph.

    Equality, hashing and ordering are structural over (name, owner).
    """
    name: str
    owner: str

    @property
    def slug(self) -> str:
        """Return `owner/name` as used in GitHub API paths."""
        return f"{self.owner}/{self.name}"

    def github_url(self) -> str:
        return f"git@github.com:{self.owner}/{self.name}.git"

    def __str__(self) -> str:
        return f"name: {self.name} - owner: {self.owner}"
