"""Reader for JSON schema documents (JDDF-style).

A schema document is a JSON object in exactly one of these forms:

- ``{}``: any value (opaque)
- ``{"ref": "Name"}``: a reference to an entry of the root ``definitions``
- ``{"type": "string"}``: a scalar (``boolean``, ``string``, ``timestamp``,
  ``int8`` .. ``uint32``, ``float32``, ``float64``, ``number``)
- ``{"enum": ["A", "B"]}``: an enumeration
- ``{"elements": {...}}``: an array
- ``{"properties": {...}, "optionalProperties": {...}}``: a record
- ``{"values": {...}}``: a dictionary
- ``{"discriminator": {"tag": "type", "mapping": {"a": {...}}}}``: a union

Only the root may carry ``definitions``.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ._emit._naming import pascal_case
from ._errors import DuplicateNameError, Location, SchemaFormatError
from ._ir import (
    OPAQUE,
    Array,
    Dictionary,
    DiscriminatedUnion,
    Enum,
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

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_FORMS = ("ref", "type", "enum", "elements", "properties", "values", "discriminator")


class DiscriminatorDocument(BaseModel):
    """The ``discriminator`` keyword of a schema document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tag: str
    mapping: dict[str, SchemaDocument]


class SchemaDocument(BaseModel):
    """A schema document as it appears in JSON."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    definitions: dict[str, SchemaDocument] | None = None
    metadata: dict[str, Any] | None = None
    ref: str | None = None
    type: ScalarKind | None = None
    enum: list[str] | None = None
    elements: SchemaDocument | None = None
    properties: dict[str, SchemaDocument] | None = None
    optional_properties: dict[str, SchemaDocument] | None = Field(default=None, alias="optionalProperties")
    additional_properties: bool = Field(default=False, alias="additionalProperties")
    values_: SchemaDocument | None = Field(default=None, alias="values")
    discriminator: DiscriminatorDocument | None = None

    @model_validator(mode="after")
    def _check_single_form(self) -> Self:
        """Reject documents that mix keywords of several forms."""
        present = [name for name in _FORMS if self.form_value(name) is not None]
        if self.optional_properties is not None and "properties" not in present:
            present.append("properties")
        if len(present) > 1:
            msg = f"Schema mixes keywords of several forms: {', '.join(present)}"
            raise ValueError(msg)
        return self

    def form_value(self, name: str) -> object:
        return self.values_ if name == "values" else getattr(self, name)

    @property
    def form(self) -> str:
        """The form of the document (``empty`` when no form keyword is present)."""
        for name in _FORMS:
            if self.form_value(name) is not None:
                return name
        if self.optional_properties is not None:
            return "properties"
        return "empty"


DiscriminatorDocument.model_rebuild()


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    obj: dict[str, Any] = {}
    for key, value in pairs:
        if key in obj:
            raise DuplicateNameError(key, "schema object")
        obj[key] = value
    return obj


def _record(doc: SchemaDocument, location: Location) -> Record:
    required = [(name, _shape(sub, (*location, name))) for name, sub in (doc.properties or {}).items()]
    optional = [(name, _shape(sub, (*location, name))) for name, sub in (doc.optional_properties or {}).items()]
    return Record.of(required, optional)


def _shape(doc: SchemaDocument, location: Location) -> TypeShape:  # noqa: PLR0911
    if doc.definitions is not None:
        msg = f"'definitions' is only allowed at the root (found at {'.'.join(location)})"
        raise SchemaFormatError(msg)

    match doc.form:
        case "empty":
            return OPAQUE
        case "ref":
            return Reference(doc.ref)  # type: ignore[arg-type]
        case "type":
            return Scalar(doc.type)  # type: ignore[arg-type]
        case "enum":
            try:
                return Enum(tuple(doc.enum or ()))
            except ValueError as e:
                msg = f"Enum at {'.'.join(location)} has no values"
                raise SchemaFormatError(msg) from e
        case "elements":
            return Array(_shape(doc.elements, location))  # type: ignore[arg-type]
        case "values":
            return Dictionary(_shape(doc.values_, location))  # type: ignore[arg-type]
        case "properties":
            return _record(doc, location)
        case "discriminator":
            cases: list[UnionCase] = []
            for value, sub in doc.discriminator.mapping.items():  # type: ignore[union-attr]
                if sub.form != "properties":
                    msg = f"Discriminator mapping '{value}' at {'.'.join(location)} must be of the properties form"
                    raise SchemaFormatError(msg)
                cases.append(UnionCase(value, _record(sub, (*location, value))))
            return DiscriminatedUnion(doc.discriminator.tag, tuple(cases))  # type: ignore[union-attr]
        case _:
            msg = f"Unknown schema form: {doc.form}"
            raise SchemaFormatError(msg)


def to_library(doc: SchemaDocument, namespace: str) -> TypeLibrary:
    """Convert a root schema document into a type library.

    Every entry of ``definitions`` becomes a declaration of the same name.
    The root schema becomes a declaration named after the namespace in
    PascalCase, unless it is empty and the document only carries
    definitions.

    Raises:
        DuplicateNameError: If the root name clashes with a definition.
        SchemaFormatError: If the document is not a valid schema.

    """
    declarations = [
        TypeDeclaration(name, _shape(sub, (name,))) for name, sub in (doc.definitions or {}).items()
    ]

    root_name = pascal_case(namespace)
    if doc.form != "empty" or not declarations:
        root = doc.model_copy(update={"definitions": None})
        declarations.append(TypeDeclaration(root_name, _shape(root, (root_name,))))

    library = build_library(declarations, namespace=namespace)
    logger.debug(f"Built library '{namespace}' with {len(library)} declarations")
    return library


def parse_schema(text: str, namespace: str) -> TypeLibrary:
    """Parse a JSON schema document into a type library.

    Args:
        text: The JSON text.
        namespace: Namespace of the resulting library (also names the root).

    Returns:
        The library described by the document, in document order.

    Raises:
        DuplicateNameError: If a JSON object repeats a key.
        SchemaFormatError: If the text is not a valid schema document.

    """
    try:
        raw = json.loads(text, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SchemaFormatError(msg) from e

    try:
        doc = SchemaDocument.model_validate(raw)
    except ValidationError as e:
        msg = f"Invalid schema document: {e}"
        raise SchemaFormatError(msg) from e

    return to_library(doc, namespace)


def load_schema(path: Path) -> TypeLibrary:
    """Load a schema file; the namespace is the file name up to its first dot.

    Raises:
        SchemaFormatError: If the file cannot be read as UTF-8 text, or is not
            a valid schema document.

    """
    logger.debug(f"Loading schema from {path}")
    namespace = path.name.split(".")[0]
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read schema file {path}: {e}"
        raise SchemaFormatError(msg) from e
    return parse_schema(text, namespace)
