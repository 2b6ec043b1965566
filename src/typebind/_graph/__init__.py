"""Graph module providing the declaration reference graph.

This module contains:
- ReferenceGraph: An immutable directed graph of declaration references
- reachable: Algorithm collecting every node reachable from a start node
"""

from ._algorithms import reachable
from ._reference_graph import ReferenceGraph

__all__ = ["ReferenceGraph", "reachable"]
