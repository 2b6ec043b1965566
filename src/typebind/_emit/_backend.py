"""Backend contract for turning a resolved library into source text."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from typebind._canonical import canonicalize, is_canonical
from typebind._errors import AliasCycleError
from typebind._ir import Reference, TypeDeclaration, TypeLibrary, build_library
from typebind._resolve import ResolvedLibrary, resolve

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from typebind._ir import TypeShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EmittedUnit:
    """One file-like unit of generated source.

    Attributes:
        identifier: Output identifier relative to the backend's output
            directory (e.g. ``index.ts``).
        source: The generated text.

    """

    identifier: str
    source: str


class Backend(ABC):
    """A target-language emitter.

    Implementations must be deterministic: the same resolved library always
    yields the same units, byte for byte.
    """

    tag: ClassVar[str]

    @abstractmethod
    def emit(self, resolved: ResolvedLibrary) -> list[EmittedUnit]:
        """Generate source units for a canonical, resolved library."""


def check_alias_cycles(resolved: ResolvedLibrary) -> None:
    """Reject declarations that are plain references to each other in a loop.

    A cycle through a record, union or container is legal. A cycle made only
    of aliases (``A = B``, ``B = A``) has no shape to bottom out in, so no
    target language accepts it.

    Raises:
        AliasCycleError: If such a cycle exists.

    """
    aliases = {
        decl.name: decl.shape.target for decl in resolved.declarations if isinstance(decl.shape, Reference)
    }
    for start in aliases:
        chain = [start]
        while (target := aliases.get(chain[-1])) is not None:
            if target in chain:
                raise AliasCycleError([*chain[chain.index(target) :], target])
            chain.append(target)


def emit(resolved: ResolvedLibrary, backend: Backend) -> list[EmittedUnit]:
    """Run one backend over a resolved library.

    A library that is not in canonical order is canonicalized and resolved
    again first, so the output never depends on declaration order.
    """
    if not is_canonical(resolved.library):
        logger.debug(f"Library '{resolved.namespace}' is not canonical, canonicalizing before emission")
        resolved = resolve(canonicalize(resolved.library))
    units = backend.emit(resolved)
    logger.debug(f"Backend '{backend.tag}' emitted {len(units)} unit(s) for '{resolved.namespace}'")
    return units


def generate(
    library: TypeLibrary | Iterable[TypeDeclaration | tuple[str, TypeShape]],
    backends: Sequence[Backend],
) -> dict[str, list[EmittedUnit]]:
    """Run the whole pipeline: canonicalize, resolve, then emit every backend.

    Stages run in order and the first error stops the run, so either every
    backend's output is returned or none is.

    Args:
        library: A library, or declarations to build one from.
        backends: The backends to run.

    Returns:
        Mapping from backend tag to that backend's units.

    Raises:
        DuplicateNameError: If the declarations contain a duplicate name.
        UnresolvedReferenceError: If a reference cannot be resolved.
        NameCollisionError: If a backend derives one identifier twice.

    """
    if not isinstance(library, TypeLibrary):
        library = build_library(library)
    resolved = resolve(canonicalize(library))
    return {backend.tag: emit(resolved, backend) for backend in backends}
