"""Go struct and constant backend."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, TypeAlias

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
from ._naming import NameAllocator, pascal_case, snake_case

if TYPE_CHECKING:
    from typebind._errors import Location
    from typebind._graph import ReferenceGraph
    from typebind._resolve import ResolvedLibrary

logger = logging.getLogger(__name__)

_SCALARS = {
    ScalarKind.STRING: "string",
    ScalarKind.NUMBER: "float64",
    ScalarKind.BOOLEAN: "bool",
    ScalarKind.TIMESTAMP: "time.Time",
    ScalarKind.INT8: "int8",
    ScalarKind.UINT8: "uint8",
    ScalarKind.INT16: "int16",
    ScalarKind.UINT16: "uint16",
    ScalarKind.INT32: "int32",
    ScalarKind.UINT32: "uint32",
    ScalarKind.FLOAT32: "float32",
    ScalarKind.FLOAT64: "float64",
}


@dataclass(frozen=True, slots=True)
class Property:
    name: str
    json_name: str
    type_expr: str
    pointer: bool = False

    def render(self) -> str:
        return f"\t{self.name} {'*' if self.pointer else ''}{self.type_expr} `json:{json.dumps(self.json_name)}`\n"


def _render_struct(name: str, properties: tuple[Property, ...]) -> str:
    return f"type {name} struct {{\n{''.join(p.render() for p in properties)}}}\n"


@dataclass(frozen=True, slots=True)
class Typedef:
    name: str
    type_expr: str

    def render(self) -> str:
        return f"type {self.name} = {self.type_expr}\n"


@dataclass(frozen=True, slots=True)
class Const:
    name: str
    type_name: str
    value: str

    def render(self) -> str:
        return f"const {self.name} {self.type_name} = {json.dumps(self.value)}\n"


@dataclass(frozen=True, slots=True)
class Struct:
    name: str
    properties: tuple[Property, ...]

    def render(self) -> str:
        return _render_struct(self.name, self.properties)


@dataclass(frozen=True, slots=True)
class Variant:
    name: str
    json_name: str
    properties: tuple[Property, ...]


@dataclass(frozen=True, slots=True)
class DiscriminatorStruct:
    """A tagged struct embedding one struct per union case.

    Attributes:
        name: Name of the struct.
        tag: Name of the tag's string type.
        tag_short: Name of the tag member inside the struct.
        tag_json: Name of the tag as it appears in JSON.
        variants: One entry per union case.

    """

    name: str
    tag: str
    tag_short: str
    tag_json: str
    variants: tuple[Variant, ...]

    def render(self) -> str:
        tag_json = json.dumps(self.tag_json)
        lines = [f"type {self.name} struct {{", f"\t{self.tag_short} {self.tag} `json:{tag_json}`"]
        lines.extend(f"\t{v.name}" for v in self.variants)
        lines += ["}", ""]

        lines.append(f"func (v {self.name}) MarshalJSON() ([]byte, error) {{")
        lines.append(f"\tswitch v.{self.tag_short} {{")
        for v in self.variants:
            value = json.dumps(v.json_name)
            lines.append(f"\tcase {value}:")
            lines.append(
                f"\t\treturn json.Marshal(struct {{ Tag string `json:{tag_json}`; {v.name} }}"
                f"{{ Tag: {value}, {v.name}: v.{v.name} }});",
            )
        lines += ["\t}", "\treturn nil, ErrUnknownVariant", "}"]

        lines.append(f"func (v *{self.name}) UnmarshalJSON(b []byte) error {{")
        lines.append("\tvar obj map[string]interface{}")
        lines.append("\tif err := json.Unmarshal(b, &obj); err != nil { return err }")
        lines.append(f"\ttag, ok := obj[{tag_json}].(string)")
        lines.append("\tif !ok { return ErrUnknownVariant }")
        lines.append(f"\tv.{self.tag_short} = tag")
        lines.append("\tswitch tag {")
        for v in self.variants:
            lines.append(f"\tcase {json.dumps(v.json_name)}:")
            lines.append(f"\t\treturn json.Unmarshal(b, &v.{v.name})")
        lines += ["\t}", "\treturn ErrUnknownVariant", "}"]

        text = "\n".join(lines) + "\n"
        return text + "".join(_render_struct(v.name, v.properties) for v in self.variants)


GoDeclaration: TypeAlias = Typedef | Const | Struct | DiscriminatorStruct


@dataclass(slots=True)
class _Transformer:
    graph: ReferenceGraph
    names: NameAllocator = field(default_factory=NameAllocator)
    output: list[GoDeclaration] = field(default_factory=list)
    uses_time: bool = False
    uses_unions: bool = False

    def declaration(self, decl: TypeDeclaration) -> None:
        location = (decl.name,)
        match decl.shape:
            case Record() | Enum() | DiscriminatedUnion():
                self.type_expr(decl.shape, location)
            case _:
                name = self.names.claim(location)
                # Shapes nested in a top-level container are named after its items.
                self.output.append(Typedef(name, self.type_expr(decl.shape, (*location, "item"))))

    def type_expr(self, shape: TypeShape, location: Location) -> str:  # noqa: PLR0911
        match shape:
            case Record():
                name = self.names.claim(location)
                self.output.append(Struct(name, self.properties(shape, location)))
                return name
            case Enum(variants=variants):
                name = self.names.claim(location)
                self.output.append(Typedef(name, "string"))
                self.output.extend(Const(self.names.claim(location, v, role="enum value"), name, v) for v in variants)
                return name
            case DiscriminatedUnion():
                return self.union(shape, location)
            case Array(element=element):
                return f"[]{self.type_expr(element, location)}"
            case Dictionary(value=value):
                return f"map[string]{self.type_expr(value, location)}"
            case Reference(target=target):
                return pascal_case(target)
            case Opaque():
                return "interface{}"
            case Scalar(kind=kind):
                if kind is ScalarKind.TIMESTAMP:
                    self.uses_time = True
                return _SCALARS[kind]
            case _:
                msg = f"Unknown shape type: {type(shape)}"
                raise TypeError(msg)

    def properties(self, record: Record, location: Location) -> tuple[Property, ...]:
        members = NameAllocator()
        props: list[Property] = []
        for member in record.fields:
            member_location = (*location, member.name)
            # A struct may only hold a recursive type through a pointer.
            recursive = isinstance(member.shape, Reference) and self.graph.is_recursive(member.shape.target)
            props.append(
                Property(
                    name=members.claim_as(pascal_case(member.name), member_location),
                    json_name=member.name,
                    type_expr=self.type_expr(member.shape, member_location),
                    pointer=member.optional or recursive,
                ),
            )
        return tuple(props)

    def union(self, union: DiscriminatedUnion, location: Location) -> str:
        self.uses_unions = True
        name = self.names.claim(location)
        tag_name = self.names.claim(location, union.discriminant, role="tag")
        self.output.append(Typedef(tag_name, "string"))

        members = NameAllocator()
        tag_short = members.claim_as(pascal_case(union.discriminant), (*location, union.discriminant))
        variants: list[Variant] = []
        for case in union.cases:
            const_name = self.names.claim(location, union.discriminant, case.value, role="tag value")
            self.output.append(Const(const_name, tag_name, case.value))
            case_location = (*location, case.value)
            variant_name = self.names.claim(case_location)
            variants.append(
                Variant(
                    name=members.claim_as(variant_name, case_location),
                    json_name=case.value,
                    properties=self.properties(case.record, case_location),
                ),
            )

        self.output.append(
            DiscriminatorStruct(
                name=name,
                tag=tag_name,
                tag_short=tag_short,
                tag_json=union.discriminant,
                variants=tuple(variants),
            ),
        )
        return name


class GoBackend(Backend):
    """Emits one ``<namespace>.go`` file of structs, typedefs and constants.

    Discriminated unions get ``MarshalJSON``/``UnmarshalJSON`` methods that
    dispatch on the tag field.
    """

    tag: ClassVar[str] = "golang"

    def __init__(self, package_name: str | None = None) -> None:
        self.package_name = package_name

    def emit(self, resolved: ResolvedLibrary) -> list[EmittedUnit]:
        check_alias_cycles(resolved)
        transformer = _Transformer(graph=resolved.graph)
        for decl in resolved.declarations:
            transformer.declaration(decl)

        package = self.package_name or snake_case(resolved.namespace)
        header = [f"package {package}"]
        if transformer.uses_time:
            header.append('import "time"')
        if transformer.uses_unions:
            header.append('import "encoding/json"')
            header.append('import "errors"')
            header.append(f'var ErrUnknownVariant = errors.New("{package}: unknown discriminator tag value")')

        logger.debug(f"Generated {len(transformer.output)} Go declarations in package '{package}'")
        source = "\n".join(header) + "\n" + "".join(f"{go_decl.render()}\n" for go_decl in transformer.output)
        return [EmittedUnit(f"{snake_case(resolved.namespace)}.go", source)]
