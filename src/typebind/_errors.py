"""Error types raised by the typebind pipeline.

Every stage fails fast: an error stops the run and no partial output is
considered valid.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeAlias

Location: TypeAlias = tuple[str, ...]


def format_location(location: Sequence[str]) -> str:
    """Render a location as a dotted path (``Message.details.user``)."""
    return ".".join(location) if location else "<library>"


class TypebindError(Exception):
    """Base class for all typebind errors."""


class DuplicateNameError(TypebindError):
    """Two sibling entities in one container share a name or key."""

    def __init__(self, name: str, container: str) -> None:
        self.name = name
        self.container = container
        super().__init__(f"Duplicate name '{name}' in {container}")


class UnresolvedReferenceError(TypebindError):
    """A reference targets a declaration that does not exist."""

    def __init__(self, name: str, location: Location = ()) -> None:
        self.name = name
        self.location = location
        msg = f"Unresolved reference '{name}'"
        if location:
            msg += f" at {format_location(location)}"
        super().__init__(msg)


class NameCollisionError(TypebindError):
    """Two distinct generated declarations would receive the same identifier."""

    def __init__(self, name: str, first: Location, second: Location) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Generated name '{name}' is derived from both "
            f"{format_location(first)} and {format_location(second)}",
        )


class SchemaFormatError(TypebindError):
    """A schema document does not describe a valid shape."""


class InvalidNameError(TypebindError):
    """A generated identifier is empty or not a valid identifier."""

    def __init__(self, name: str, location: Location) -> None:
        self.name = name
        self.location = location
        super().__init__(f"Generated name '{name}' derived from {format_location(location)} is not a valid identifier")


class AliasCycleError(TypebindError):
    """Declarations alias each other without any shape in between."""

    def __init__(self, names: Sequence[str]) -> None:
        self.names = tuple(names)
        super().__init__(f"Declarations alias each other in a cycle: {' -> '.join(self.names)}")
