"""
Immutable dependency graph storage.

Nodes are addressed by integer index in insertion order and carry a Repo.
Edges are (source, target) index pairs. An edge from `a` to `b` means `b`
depends on `a`, so anything happening in `a` must be reported to `b`.
"""
from typing import Dict, Iterator, List, Sequence, Tuple

from releasy.repo import Repo


NodeIx = int
Edge = Tuple[NodeIx, NodeIx]


class DependencyGraph:
    """
    Frozen directed graph of repositories.

    Outgoing and incoming adjacency are precomputed at construction. Edges
    leaving a node are iterated most recently added first, matching the
    adjacency list order of a linked edge list.
    """

    def __init__(self, nodes: Sequence[Repo], edges: Sequence[Edge]):
        self._nodes: Tuple[Repo, ...] = tuple(nodes)
        self._edges: Tuple[Edge, ...] = tuple(edges)

        outgoing: Dict[NodeIx, List[NodeIx]] = {ix: [] for ix in range(len(self._nodes))}
        incoming: Dict[NodeIx, List[NodeIx]] = {ix: [] for ix in range(len(self._nodes))}
        for source, target in self._edges:
            if not (0 <= source < len(self._nodes) and 0 <= target < len(self._nodes)):
                raise IndexError(f"Edge ({source}, {target}) references a missing node")
            outgoing[source].insert(0, target)
            incoming[target].insert(0, source)

        self._outgoing = {ix: tuple(targets) for ix, targets in outgoing.items()}
        self._incoming = {ix: tuple(sources) for ix, sources in incoming.items()}

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def edges(self) -> Tuple[Edge, ...]:
        """Edges in insertion order."""
        return self._edges

    def node(self, ix: NodeIx) -> Repo:
        """Return the repo carried by node `ix`."""
        return self._nodes[ix]

    def nodes(self) -> Iterator[Tuple[NodeIx, Repo]]:
        return iter(enumerate(self._nodes))

    def neighbors(self, ix: NodeIx) -> Tuple[NodeIx, ...]:
        """Targets of edges leaving `ix`."""
        return self._outgoing[ix]

    def predecessors(self, ix: NodeIx) -> Tuple[NodeIx, ...]:
        """Sources of edges arriving at `ix`."""
        return self._incoming[ix]
