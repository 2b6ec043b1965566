"""Directed graph of references between declarations."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

from ._algorithms import reachable


@dataclass(frozen=True, slots=True)
class ReferenceGraph:
    """Which declarations refer to which, by name.

    An edge ``a -> b`` means a shape inside declaration ``a`` holds a
    reference to declaration ``b``. Cycles are allowed: references are weak
    links, so a self-referencing record is an ordinary graph with a loop.

    Attributes:
        _references: Mapping from declaration to the declarations it refers to.
        _referrers: Mapping from declaration to the declarations referring to it.

    """

    _references: dict[str, frozenset[str]] = field(default_factory=dict)
    _referrers: dict[str, frozenset[str]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, nodes: Iterable[str], edges: Iterable[tuple[str, str]]) -> ReferenceGraph:
        """Build a graph from declaration names and ``(source, target)`` edges.

        Example:
            >>> graph = ReferenceGraph.from_edges(["Node", "Tree"], [("Tree", "Node"), ("Node", "Node")])
            >>> graph.is_recursive("Node")
            True

        """
        references: defaultdict[str, set[str]] = defaultdict(set)
        referrers: defaultdict[str, set[str]] = defaultdict(set)
        for node in nodes:
            references.setdefault(node, set())
            referrers.setdefault(node, set())

        for src, dst in edges:
            references[src].add(dst)
            referrers[dst].add(src)
            references.setdefault(dst, set())
            referrers.setdefault(src, set())

        return cls(
            _references={k: frozenset(v) for k, v in references.items()},
            _referrers={k: frozenset(v) for k, v in referrers.items()},
        )

    @property
    def nodes(self) -> frozenset[str]:
        """All declaration names in the graph."""
        return frozenset(self._references)

    def references(self, name: str) -> frozenset[str]:
        """Declarations directly referenced from ``name``."""
        return self._references.get(name, frozenset())

    def referrers(self, name: str) -> frozenset[str]:
        """Declarations that directly reference ``name``."""
        return self._referrers.get(name, frozenset())

    def reachable_from(self, name: str) -> frozenset[str]:
        """Declarations transitively referenced from ``name``."""
        return reachable(self._references, name)

    def is_recursive(self, name: str) -> bool:
        """Check whether ``name`` refers back to itself, directly or transitively."""
        return name in self.reachable_from(name)

    def recursive_declarations(self) -> frozenset[str]:
        """All declarations that lie on a reference cycle."""
        return frozenset(n for n in self._references if self.is_recursive(n))

    def __len__(self) -> int:
        return len(self._references)

    def __contains__(self, name: object) -> bool:
        return name in self._references
