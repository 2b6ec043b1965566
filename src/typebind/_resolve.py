"""Resolution of by-name references between declarations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from ._errors import Location, UnresolvedReferenceError
from ._graph import ReferenceGraph

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ._ir import TypeDeclaration, TypeLibrary

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ResolvedLibrary:
    """A library in which every reference is known to name a declaration.

    The links are by name only: the owning declaration stays the single
    source of truth for the referenced shape.

    Attributes:
        library: The library that was resolved.
        links: Read-only mapping from the location of each reference to the
            name of the declaration it links to.
        graph: Reference graph between the library's declarations.

    """

    library: TypeLibrary
    links: Mapping[Location, str] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    graph: ReferenceGraph = field(default_factory=ReferenceGraph, hash=False)

    @property
    def namespace(self) -> str:
        return self.library.namespace

    @property
    def declarations(self) -> tuple[TypeDeclaration, ...]:
        return self.library.declarations

    def declaration(self, name: str) -> TypeDeclaration:
        """Get a declaration by name.

        Raises:
            KeyError: If no declaration has the given name.

        """
        return self.library.get(name)

    def target_of(self, location: Location) -> TypeDeclaration:
        """Get the declaration linked from the reference at ``location``.

        Raises:
            KeyError: If there is no reference at ``location``.

        """
        return self.library.get(self.links[location])


def resolve(library: TypeLibrary) -> ResolvedLibrary:
    """Resolve every reference of a library by name.

    References are visited in the library's traversal order, so for a
    canonical library the first dangling reference reported is always the
    same one. Reference cycles are legal.

    Args:
        library: The (canonicalized) library to resolve.

    Returns:
        The resolved library.

    Raises:
        UnresolvedReferenceError: If a reference names a declaration that does
            not exist in the library.

    """
    names = set(library.names)
    links: dict[Location, str] = {}
    edges: list[tuple[str, str]] = []

    for location, reference in library.iter_references():
        if reference.target not in names:
            raise UnresolvedReferenceError(reference.target, location)
        logger.debug(f"Resolved {'.'.join(location)} -> {reference.target}")
        links[location] = reference.target
        edges.append((location[0], reference.target))

    graph = ReferenceGraph.from_edges(library.names, edges)
    recursive = graph.recursive_declarations()
    if recursive:
        logger.debug(f"Recursive declarations: {sorted(recursive)}")

    return ResolvedLibrary(library=library, links=MappingProxyType(links), graph=graph)
