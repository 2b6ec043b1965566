"""Graph algorithms for reference graph queries."""

from collections.abc import Collection, Hashable, Mapping
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def reachable(successors: Mapping[T, Collection[T]], start: T) -> frozenset[T]:
    """Collect every node reachable from ``start`` through at least one edge.

    ``start`` itself is included only when it lies on a cycle.

    Args:
        successors: Mapping from node to the nodes it points at.
        start: The node to search from.

    Returns:
        Set of nodes reachable from ``start``.

    Example:
        >>> sorted(reachable({"a": ["b"], "b": ["c"], "c": []}, "a"))
        ['b', 'c']
        >>> sorted(reachable({"a": ["b"], "b": ["a"]}, "a"))
        ['a', 'b']

    """
    visited: set[T] = set()
    stack = list(successors.get(start, ()))
    while stack:
        current = stack.pop()
        if current not in visited:
            visited.add(current)
            stack.extend(successors.get(current, ()))
    return frozenset(visited)
