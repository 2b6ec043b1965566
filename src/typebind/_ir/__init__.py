"""Intermediate Representation (IR) module for typebind.

This module provides pure data structures describing the shapes of a type
library independent of any target language. The IR sits between:
- Schema readers (which build it)
- Backends (which turn it into source text)

Key types:
- TypeShape: Union of Record, Enum, DiscriminatedUnion, Array, Dictionary,
  Reference, Opaque and Scalar
- TypeDeclaration: A name bound to one shape
- TypeLibrary: Collection of declarations with a namespace
- build_library: Function to build a library from ``(name, shape)`` pairs
"""

from ._library import TypeDeclaration, TypeLibrary, build_library
from ._shapes import (
    BOOLEAN,
    NUMBER,
    OPAQUE,
    STRING,
    TIMESTAMP,
    Array,
    Dictionary,
    DiscriminatedUnion,
    Enum,
    Field,
    Opaque,
    Record,
    Reference,
    Scalar,
    ScalarKind,
    TypeShape,
    UnionCase,
    iter_shapes,
)

__all__ = [
    "BOOLEAN",
    "NUMBER",
    "OPAQUE",
    "STRING",
    "TIMESTAMP",
    "Array",
    "Dictionary",
    "DiscriminatedUnion",
    "Enum",
    "Field",
    "Opaque",
    "Record",
    "Reference",
    "Scalar",
    "ScalarKind",
    "TypeDeclaration",
    "TypeLibrary",
    "TypeShape",
    "UnionCase",
    "build_library",
    "iter_shapes",
]
