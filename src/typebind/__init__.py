"""Schema-driven type binding generator."""

__all__ = [
    "BOOLEAN",
    "NUMBER",
    "OPAQUE",
    "STRING",
    "TIMESTAMP",
    "AliasCycleError",
    "Array",
    "Backend",
    "Dictionary",
    "DiscriminatedUnion",
    "DuplicateNameError",
    "EmittedUnit",
    "Enum",
    "Field",
    "GoBackend",
    "InvalidNameError",
    "NameCollisionError",
    "Opaque",
    "Record",
    "Reference",
    "ReferenceGraph",
    "ResolvedLibrary",
    "Scalar",
    "ScalarKind",
    "SchemaFormatError",
    "TypeDeclaration",
    "TypeLibrary",
    "TypeScriptBackend",
    "TypeShape",
    "TypebindError",
    "UnionCase",
    "UnresolvedReferenceError",
    "build_library",
    "canonicalize",
    "emit",
    "generate",
    "load_schema",
    "parse_schema",
    "resolve",
]

from ._canonical import canonicalize
from ._emit import Backend, EmittedUnit, GoBackend, TypeScriptBackend, emit, generate
from ._errors import (
    AliasCycleError,
    DuplicateNameError,
    InvalidNameError,
    NameCollisionError,
    SchemaFormatError,
    TypebindError,
    UnresolvedReferenceError,
)
from ._graph import ReferenceGraph
from ._ir import (
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
    TypeDeclaration,
    TypeLibrary,
    TypeShape,
    UnionCase,
    build_library,
)
from ._resolve import ResolvedLibrary, resolve
from ._schema import load_schema, parse_schema
