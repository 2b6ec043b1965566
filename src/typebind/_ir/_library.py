"""Declarations and type libraries."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from typebind._errors import DuplicateNameError, Location

from ._shapes import Reference, TypeShape, iter_shapes


@dataclass(frozen=True, slots=True)
class TypeDeclaration:
    """A name bound to one shape."""

    name: str
    shape: TypeShape


@dataclass(frozen=True, slots=True)
class TypeLibrary:
    """A named collection of type declarations.

    Declaration names are unique. The order of ``declarations`` is whatever
    the caller supplied; emission order comes from the canonicalizer.

    Attributes:
        namespace: Logical namespace of the library, used to name output units.
        declarations: The declarations, in insertion or canonical order.

    """

    namespace: str = "index"
    declarations: tuple[TypeDeclaration, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for decl in self.declarations:
            if decl.name in seen:
                raise DuplicateNameError(decl.name, f"library '{self.namespace}'")
            seen.add(decl.name)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(decl.name for decl in self.declarations)

    def get(self, name: str) -> TypeDeclaration:
        """Get a declaration by name.

        Raises:
            KeyError: If no declaration has the given name.

        """
        for decl in self.declarations:
            if decl.name == name:
                return decl
        raise KeyError(name)

    def iter_shapes(self) -> Iterator[tuple[Location, TypeShape]]:
        """Walk every declaration's shape in declaration order."""
        for decl in self.declarations:
            yield from iter_shapes(decl.shape, (decl.name,))

    def iter_references(self) -> Iterator[tuple[Location, Reference]]:
        """Yield every reference shape in the library with its location."""
        for location, shape in self.iter_shapes():
            if isinstance(shape, Reference):
                yield location, shape

    def __len__(self) -> int:
        return len(self.declarations)

    def __contains__(self, name: object) -> bool:
        return any(decl.name == name for decl in self.declarations)


def build_library(
    declarations: Iterable[TypeDeclaration | tuple[str, TypeShape]],
    namespace: str = "index",
) -> TypeLibrary:
    """Build a TypeLibrary from declarations or ``(name, shape)`` pairs.

    Args:
        declarations: The declarations, in any order.
        namespace: Logical namespace of the library.

    Returns:
        The library, holding declarations in the given order.

    Raises:
        DuplicateNameError: If two declarations share a name.

    Example:
        >>> library = build_library([("User", Record.of({"id": STRING}))])
        >>> library.names
        ('User',)

    """
    decls = tuple(
        decl if isinstance(decl, TypeDeclaration) else TypeDeclaration(*decl) for decl in declarations
    )
    return TypeLibrary(namespace=namespace, declarations=decls)
