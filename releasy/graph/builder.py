"""
Builds the dependency graph from a manifest.
"""
import logging
from typing import Dict, List

from releasy.errors import MissingDependencyDefinition
from releasy.graph.plan import Plan
from releasy.graph.store import DependencyGraph, Edge, NodeIx
from releasy.manifest import Manifest
from releasy.repo import Repo


logger = logging.getLogger(__name__)


class GraphBuilder:
    """
    Two-pass construction of a Plan.

    Construction is all-or-nothing: a dependency key without a manifest entry
    fails the whole build and no graph is returned.
    """

    def build(self, manifest: Manifest) -> Plan:
        """
        Build a Plan from a manifest.

        Entries are visited in sorted key order and dependency keys in the
        order they are declared, so the resulting edge order only depends on
        the manifest content.

        Args:
            manifest: Parsed manifest

        Returns:
            Frozen Plan

        Raises:
            MissingDependencyDefinition: If a dependency key has no entry
        """
        keys = sorted(manifest.repo)

        # First pass: one node per manifest key
        nodes: List[Repo] = []
        key_to_node: Dict[str, NodeIx] = {}
        repo_to_node: Dict[Repo, NodeIx] = {}
        for key in keys:
            repo = manifest.repo[key].details
            node_ix = len(nodes)
            nodes.append(repo)
            key_to_node[key] = node_ix
            if repo in repo_to_node:
                logger.warning(f"Repo `{repo}` is defined by more than one manifest key, using `{key}`")
            repo_to_node[repo] = node_ix

        # Second pass: edge from each dependency to the repo depending on it
        edges: List[Edge] = []
        for key in keys:
            entry = manifest.repo[key]
            node_ix = key_to_node[key]
            for dependency_key in entry.dependency_keys():
                if dependency_key not in key_to_node:
                    raise MissingDependencyDefinition(entry.details.name, dependency_key)
                edges.append((key_to_node[dependency_key], node_ix))

        graph = DependencyGraph(nodes, edges)
        logger.debug(f"Built dependency graph: {graph.node_count} nodes, {graph.edge_count} edges")
        return Plan(graph, repo_to_node)
