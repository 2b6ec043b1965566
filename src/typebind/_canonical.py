"""Canonical ordering of type libraries.

Two libraries that differ only in the order their declarations, fields,
union cases or enum variants were written canonicalize to equal values, so
every backend sees the same input and produces the same text.
"""

import logging
from dataclasses import replace

from ._ir import (
    Array,
    Dictionary,
    DiscriminatedUnion,
    Enum,
    Opaque,
    Record,
    Reference,
    Scalar,
    TypeDeclaration,
    TypeLibrary,
    TypeShape,
    UnionCase,
)

logger = logging.getLogger(__name__)


def _canonical_record(record: Record) -> Record:
    return Record(
        fields=tuple(
            replace(member, shape=canonicalize_shape(member.shape))
            for member in sorted(record.fields, key=lambda f: f.name)
        ),
    )


def canonicalize_shape(shape: TypeShape) -> TypeShape:
    """Return ``shape`` with every ordered container sorted by name or key.

    Sorting is lexicographic ascending (code point order) and applied
    recursively, depth first.
    """
    match shape:
        case Record():
            return _canonical_record(shape)
        case Enum(variants=variants):
            return Enum(variants=tuple(sorted(variants)))
        case DiscriminatedUnion(discriminant=discriminant, cases=cases):
            return DiscriminatedUnion(
                discriminant=discriminant,
                cases=tuple(
                    UnionCase(case.value, _canonical_record(case.record))
                    for case in sorted(cases, key=lambda c: c.value)
                ),
            )
        case Array(element=element):
            return Array(canonicalize_shape(element))
        case Dictionary(value=value):
            return Dictionary(canonicalize_shape(value))
        case Reference() | Opaque() | Scalar():
            return shape
        case _:
            msg = f"Unknown shape type: {type(shape)}"
            raise TypeError(msg)


def canonicalize(library: TypeLibrary) -> TypeLibrary:
    """Return a new library in canonical order.

    The operation is pure, total and idempotent:
    ``canonicalize(canonicalize(lib)) == canonicalize(lib)``.

    Example:
        >>> lib = build_library([("B", STRING), ("A", Record.of({"y": NUMBER, "x": NUMBER}))])
        >>> canonicalize(lib).names
        ('A', 'B')

    """
    declarations = tuple(
        TypeDeclaration(decl.name, canonicalize_shape(decl.shape))
        for decl in sorted(library.declarations, key=lambda d: d.name)
    )
    logger.debug(f"Canonicalized library '{library.namespace}' ({len(declarations)} declarations)")
    return TypeLibrary(namespace=library.namespace, declarations=declarations)


def is_canonical(library: TypeLibrary) -> bool:
    """Check whether a library is already in canonical order."""
    return canonicalize(library) == library
