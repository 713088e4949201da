"""
Traversal queries over the frozen dependency graph.
"""
from collections import deque
from types import MappingProxyType
from typing import TYPE_CHECKING, List, Mapping

from releasy.errors import RepoNotFoundInGraph
from releasy.graph.store import DependencyGraph, NodeIx
from releasy.repo import Repo

if TYPE_CHECKING:
    from releasy.manifest import Manifest


class Plan:
    """
    A plan describes dependency relations between different repos.

    A node in the plan's graph represents a repository. An edge from node `a`
    to node `b` means `b` depends on `a`, so any event happening in `a` should
    be reported to `b`.
    """

    def __init__(self, graph: DependencyGraph, repo_to_node: Mapping[Repo, NodeIx]):
        self._graph = graph
        self._repo_to_node = MappingProxyType(dict(repo_to_node))

    @classmethod
    def try_from_manifest(cls, manifest: 'Manifest') -> 'Plan':
        """Build a Plan from a manifest (see GraphBuilder.build)."""
        from releasy.graph.builder import GraphBuilder
        return GraphBuilder().build(manifest)

    @property
    def graph(self) -> DependencyGraph:
        return self._graph

    @property
    def node_count(self) -> int:
        return self._graph.node_count

    @property
    def edge_count(self) -> int:
        return self._graph.edge_count

    def repos(self) -> List[Repo]:
        """All repos in node order."""
        return [repo for _, repo in self._graph.nodes()]

    def __contains__(self, repo: object) -> bool:
        return repo in self._repo_to_node

    def _node_ix(self, repo: Repo) -> NodeIx:
        try:
            return self._repo_to_node[repo]
        except KeyError:
            raise RepoNotFoundInGraph(repo) from None

    def neighbors(self, repo: Repo) -> List[Repo]:
        """
        Return the immediate dependents of `repo`.

        These are the repos that must be notified when `repo` changes, in
        graph edge-iteration order.

        Raises:
            RepoNotFoundInGraph: If `repo` is not in the graph
        """
        node_ix = self._node_ix(repo)
        return [self._graph.node(ix) for ix in self._graph.neighbors(node_ix)]

    def upstream(self, repo: Repo) -> List[Repo]:
        """
        Return every repo `repo` depends on, directly or transitively.

        Breadth-first over reverse edges. `repo` itself is never part of the
        result, even when a cycle leads back to it, and each repo appears once.

        Raises:
            RepoNotFoundInGraph: If `repo` is not in the graph
        """
        start = self._node_ix(repo)
        visited = {start}
        queue = deque([start])
        result: List[Repo] = []

        while queue:
            node_ix = queue.popleft()
            for dependency_ix in self._graph.predecessors(node_ix):
                if dependency_ix in visited:
                    continue
                visited.add(dependency_ix)
                result.append(self._graph.node(dependency_ix))
                queue.append(dependency_ix)

        return result
