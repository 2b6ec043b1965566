"""Derived identifiers for generated declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from typebind._errors import InvalidNameError, Location, NameCollisionError

_WORD_SEPARATOR = re.compile(r"[^0-9A-Za-z]+")
_IDENTIFIER = re.compile(r"[A-Za-z_][0-9A-Za-z_]*")


def pascal_case(*segments: str) -> str:
    """Join path segments into one PascalCase identifier.

    Every word (split on non-alphanumeric characters) gets its first letter
    upper-cased; the rest of the word is kept as written.

    Example:
        >>> pascal_case("message", "details", "user_deleted")
        'MessageDetailsUserDeleted'
        >>> pascal_case("Gamut", "enum", "BAR")
        'GamutEnumBAR'

    """
    words = (word for segment in segments for word in _WORD_SEPARATOR.split(segment) if word)
    return "".join(word[0].upper() + word[1:] for word in words)


def snake_case(value: str) -> str:
    """Convert an identifier to snake_case.

    Example:
        >>> snake_case("MessageDetails")
        'message_details'

    """
    value = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", value)
    return "_".join(word.lower() for word in _WORD_SEPARATOR.split(value) if word)


@dataclass(slots=True)
class NameAllocator:
    """Hands out derived identifiers for one emission run.

    An owner is a location plus a role. The same owner may ask for its name
    repeatedly; two different owners may never share one. Roles tell apart
    declarations that a backend derives from the same location (a Go union
    case and the union's tag type, for example).
    """

    _owners: dict[str, tuple[Location, str]] = field(default_factory=dict)

    def claim(self, location: Location, *suffix: str, role: str = "") -> str:
        """Derive the identifier for ``location`` (plus ``suffix``) and reserve it.

        Raises:
            InvalidNameError: If the derived identifier is not valid.
            NameCollisionError: If the identifier already belongs to another
                owner.

        """
        owner = (*location, *suffix)
        return self.claim_as(pascal_case(*owner), owner, role=role)

    def claim_as(self, name: str, owner: Location, *, role: str = "") -> str:
        """Reserve an explicit identifier ``name`` for ``owner``.

        Raises:
            InvalidNameError: If ``name`` is empty or starts with a digit.
            NameCollisionError: If the identifier already belongs to another
                owner.

        """
        if not _IDENTIFIER.fullmatch(name):
            raise InvalidNameError(name, owner)
        first, first_role = self._owners.setdefault(name, (owner, role))
        if (first, first_role) != (owner, role):
            raise NameCollisionError(name, first, owner)
        return name

    def __contains__(self, name: object) -> bool:
        return name in self._owners
