"""Shape variants of the schema intermediate representation."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Self, TypeAlias, TypeVar

from typebind._errors import DuplicateNameError, Location


class ScalarKind(StrEnum):
    """Primitive value kinds."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @property
    def primitive(self) -> ScalarKind:
        """The coarse primitive (string, number or boolean) this kind belongs to."""
        match self:
            case ScalarKind.STRING | ScalarKind.TIMESTAMP:
                return ScalarKind.STRING
            case ScalarKind.BOOLEAN:
                return ScalarKind.BOOLEAN
            case _:
                return ScalarKind.NUMBER


V = TypeVar("V")


def _pairs(items: Mapping[str, V] | Iterable[tuple[str, V]]) -> list[tuple[str, V]]:
    if isinstance(items, Mapping):
        return list(items.items())
    return list(items)


def _check_unique(names: Iterable[str], container: str) -> None:
    seen: set[str] = set()
    for name in names:
        if name in seen:
            raise DuplicateNameError(name, container)
        seen.add(name)


@dataclass(frozen=True, slots=True)
class Field:
    """A named member of a record."""

    name: str
    shape: TypeShape
    optional: bool = False


@dataclass(frozen=True, slots=True)
class Record:
    """A structured shape with one named field per member.

    Field order is kept as given; only the canonicalizer decides the order
    used for emission.
    """

    fields: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        _check_unique((f.name for f in self.fields), "record fields")

    @classmethod
    def of(
        cls,
        fields: Mapping[str, TypeShape] | Iterable[tuple[str, TypeShape]] = (),
        optional: Mapping[str, TypeShape] | Iterable[tuple[str, TypeShape]] | None = None,
    ) -> Self:
        """Build a record from required and optional ``(name, shape)`` pairs."""
        members = [Field(name, shape) for name, shape in _pairs(fields)]
        if optional is not None:
            members.extend(Field(name, shape, optional=True) for name, shape in _pairs(optional))
        return cls(fields=tuple(members))

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get_field(self, name: str) -> Field:
        """Get a field by name.

        Raises:
            KeyError: If the record has no such field.

        """
        for member in self.fields:
            if member.name == name:
                return member
        raise KeyError(name)


@dataclass(frozen=True, slots=True)
class Enum:
    """A closed set of string literal values."""

    variants: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.variants:
            msg = "Enum must have at least one variant"
            raise ValueError(msg)
        _check_unique(self.variants, "enum variants")

    @classmethod
    def of(cls, *variants: str) -> Self:
        return cls(variants=tuple(variants))


@dataclass(frozen=True, slots=True)
class UnionCase:
    """One case of a discriminated union, selected by ``value``."""

    value: str
    record: Record


@dataclass(frozen=True, slots=True)
class DiscriminatedUnion:
    """A tagged sum type.

    The field named ``discriminant`` holds the literal ``value`` of the case
    in use; the remaining fields come from that case's record.
    """

    discriminant: str
    cases: tuple[UnionCase, ...]

    def __post_init__(self) -> None:
        _check_unique((case.value for case in self.cases), "union cases")
        for case in self.cases:
            if self.discriminant in case.record.field_names:
                raise DuplicateNameError(self.discriminant, f"union case '{case.value}'")

    @classmethod
    def of(
        cls,
        discriminant: str,
        cases: Mapping[str, Record] | Iterable[tuple[str, Record]],
    ) -> Self:
        return cls(
            discriminant=discriminant,
            cases=tuple(UnionCase(value, record) for value, record in _pairs(cases)),
        )

    @property
    def case_values(self) -> tuple[str, ...]:
        return tuple(case.value for case in self.cases)


@dataclass(frozen=True, slots=True)
class Array:
    """A homogeneous ordered sequence."""

    element: TypeShape


@dataclass(frozen=True, slots=True)
class Dictionary:
    """A mapping from arbitrary string keys to ``value``."""

    value: TypeShape


@dataclass(frozen=True, slots=True)
class Reference:
    """A weak, by-name link to another declaration of the same library."""

    target: str


@dataclass(frozen=True, slots=True)
class Opaque:
    """An unconstrained value with no further shape information."""


@dataclass(frozen=True, slots=True)
class Scalar:
    """A primitive value."""

    kind: ScalarKind = field(default=ScalarKind.STRING)


TypeShape: TypeAlias = Record | Enum | DiscriminatedUnion | Array | Dictionary | Reference | Opaque | Scalar

STRING = Scalar(ScalarKind.STRING)
NUMBER = Scalar(ScalarKind.NUMBER)
BOOLEAN = Scalar(ScalarKind.BOOLEAN)
TIMESTAMP = Scalar(ScalarKind.TIMESTAMP)
OPAQUE = Opaque()


def iter_shapes(shape: TypeShape, location: Location = ()) -> Iterator[tuple[Location, TypeShape]]:
    """Walk a shape depth first, yielding ``(location, shape)`` pairs.

    Record fields and union cases extend the location by their name or value.
    Array elements and dictionary values share the location of their
    container.

    Example:
        >>> shape = Record.of({"tags": Array(STRING)})
        >>> [(loc, type(s).__name__) for loc, s in iter_shapes(shape, ("Post",))]
        [(('Post',), 'Record'), (('Post', 'tags'), 'Array'), (('Post', 'tags'), 'Scalar')]

    """
    yield location, shape
    match shape:
        case Record(fields=fields):
            for member in fields:
                yield from iter_shapes(member.shape, (*location, member.name))
        case DiscriminatedUnion(cases=cases):
            for case in cases:
                yield from iter_shapes(case.record, (*location, case.value))
        case Array(element=element):
            yield from iter_shapes(element, location)
        case Dictionary(value=value):
            yield from iter_shapes(value, location)
        case Enum() | Reference() | Opaque() | Scalar():
            pass
        case _:
            msg = f"Unknown shape type: {type(shape)}"
            raise TypeError(msg)
