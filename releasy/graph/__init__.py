"""
Dependency graph between repositories.

GraphBuilder turns a Manifest into a frozen Plan; Plan answers who must be
notified when a repo changes (`neighbors`) and what a repo depends on
(`upstream`).
"""
from releasy.graph.builder import GraphBuilder
from releasy.graph.plan import Plan
from releasy.graph.store import DependencyGraph

__all__ = ["DependencyGraph", "GraphBuilder", "Plan"]
