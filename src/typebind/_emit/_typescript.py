"""TypeScript type declaration backend."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from typebind._ir import (
    Array,
    Dictionary,
    DiscriminatedUnion,
    Enum,
    Opaque,
    Record,
    Reference,
    Scalar,
    ScalarKind,
    TypeDeclaration,
    TypeShape,
)

from ._backend import Backend, EmittedUnit, check_alias_cycles
from ._naming import NameAllocator, pascal_case

if TYPE_CHECKING:
    from typebind._errors import Location
    from typebind._resolve import ResolvedLibrary

logger = logging.getLogger(__name__)

_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")

_PRIMITIVES = {
    ScalarKind.STRING: "string",
    ScalarKind.NUMBER: "number",
    ScalarKind.BOOLEAN: "boolean",
}


@dataclass(frozen=True, slots=True)
class Property:
    name: str
    type_expr: str
    optional: bool = False

    def render(self) -> str:
        key = self.name if _IDENTIFIER.fullmatch(self.name) else json.dumps(self.name)
        return f"  {key}{'?' if self.optional else ''}: {self.type_expr};\n"


@dataclass(frozen=True, slots=True)
class Interface:
    name: str
    properties: tuple[Property, ...]

    def render(self) -> str:
        body = "".join(prop.render() for prop in self.properties)
        return f"export interface {self.name} {{\n{body}}}\n"


@dataclass(frozen=True, slots=True)
class TypeAlias:
    name: str
    type_expr: str

    def render(self) -> str:
        return f"export type {self.name} = {self.type_expr};\n"


TsDeclaration = Interface | TypeAlias


def _literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass(slots=True)
class _Transformer:
    """Lowers IR shapes into TypeScript declarations for one library.

    Dependent declarations are appended before the declaration that uses
    them.
    """

    names: NameAllocator = field(default_factory=NameAllocator)
    output: list[TsDeclaration] = field(default_factory=list)

    def declaration(self, decl: TypeDeclaration) -> None:
        location = (decl.name,)
        match decl.shape:
            case Record() | DiscriminatedUnion():
                self.type_expr(decl.shape, location)
            case _:
                name = self.names.claim(location)
                # Shapes nested in a top-level container are named after its items.
                self.output.append(TypeAlias(name, self.type_expr(decl.shape, (*location, "item"))))

    def type_expr(self, shape: TypeShape, location: Location) -> str:
        match shape:
            case Record():
                name = self.names.claim(location)
                self.output.append(Interface(name, self.properties(shape, location)))
                return name
            case DiscriminatedUnion():
                return self.union(shape, location)
            case Enum(variants=variants):
                return " | ".join(_literal(v) for v in variants)
            case Array(element=element):
                inner = self.type_expr(element, location)
                return f"({inner})[]" if isinstance(element, Enum) and len(element.variants) > 1 else f"{inner}[]"
            case Dictionary(value=value):
                return f"{{ [name: string]: {self.type_expr(value, location)} }}"
            case Reference(target=target):
                return pascal_case(target)
            case Opaque():
                return "any"
            case Scalar(kind=kind):
                return _PRIMITIVES[kind.primitive]
            case _:
                msg = f"Unknown shape type: {type(shape)}"
                raise TypeError(msg)

    def properties(self, record: Record, location: Location) -> tuple[Property, ...]:
        return tuple(
            Property(member.name, self.type_expr(member.shape, (*location, member.name)), member.optional)
            for member in record.fields
        )

    def union(self, union: DiscriminatedUnion, location: Location) -> str:
        name = self.names.claim(location)
        case_names: list[str] = []
        for case in union.cases:
            case_location = (*location, case.value)
            case_name = self.names.claim(case_location)
            tag = Property(union.discriminant, _literal(case.value))
            self.output.append(Interface(case_name, (tag, *self.properties(case.record, case_location))))
            case_names.append(case_name)
        self.output.append(TypeAlias(name, " | ".join(case_names) or "never"))
        return name


class TypeScriptBackend(Backend):
    """Emits one ``index.ts`` of exported interfaces and type aliases per library.

    Example:
        >>> [unit] = TypeScriptBackend().emit(resolve(canonicalize(library)))
        >>> print(unit.source)
        export interface User {
          id: string;
          name: string;
        }

    """

    tag: ClassVar[str] = "ts"
    file_name: ClassVar[str] = "index.ts"

    def emit(self, resolved: ResolvedLibrary) -> list[EmittedUnit]:
        check_alias_cycles(resolved)
        transformer = _Transformer()
        for decl in resolved.declarations:
            transformer.declaration(decl)

        logger.debug(f"Generated {len(transformer.output)} TypeScript declarations")
        source = "".join(f"{ts_decl.render()}\n" for ts_decl in transformer.output)
        return [EmittedUnit(self.file_name, source)]
