"""Tests for reference resolution."""

import pytest

from typebind._canonical import canonicalize
from typebind._errors import UnresolvedReferenceError
from typebind._ir import STRING, Array, Dictionary, DiscriminatedUnion, Record, Reference, build_library
from typebind._resolve import ResolvedLibrary, resolve


def test_resolve_links_every_reference(message_library) -> None:
    resolved = resolve(canonicalize(message_library))

    assert isinstance(resolved, ResolvedLibrary)
    assert resolved.links == {("Message", "details", "user_created", "user"): "User"}
    assert resolved.target_of(("Message", "details", "user_created", "user")).name == "User"
    assert resolved.graph.references("Message") == frozenset({"User"})
    assert resolved.graph.referrers("User") == frozenset({"Message"})


def test_links_are_by_name_not_copies(message_library) -> None:
    resolved = resolve(message_library)
    assert resolved.target_of(("Message", "details", "user_created", "user")) is resolved.declaration("User")


def test_resolve_library_without_references() -> None:
    resolved = resolve(build_library([("Id", STRING)]))
    assert resolved.links == {}
    assert resolved.graph.nodes == frozenset({"Id"})
    assert resolved.namespace == "index"


def test_dangling_reference_rejected() -> None:
    library = build_library([("Holder", Record.of({"missing": Reference("Missing")}))])

    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve(library)

    assert exc_info.value.name == "Missing"
    assert exc_info.value.location == ("Holder", "missing")
    assert "Holder.missing" in str(exc_info.value)


def test_dangling_reference_inside_containers_rejected() -> None:
    library = build_library(
        [
            ("Ok", STRING),
            ("Holder", Record.of({"items": Array(Dictionary(Reference("Ok")))})),
            ("Other", DiscriminatedUnion.of("kind", {"x": Record.of({"y": Reference("Nope")})})),
        ],
    )
    with pytest.raises(UnresolvedReferenceError, match="'Nope'"):
        resolve(library)


def test_first_dangling_reference_in_canonical_order_is_reported() -> None:
    library = build_library(
        [
            ("Zeta", Record.of({"a": Reference("Second")})),
            ("Alpha", Record.of({"b": Reference("First")})),
        ],
    )
    with pytest.raises(UnresolvedReferenceError) as exc_info:
        resolve(canonicalize(library))
    assert exc_info.value.name == "First"


def test_self_reference_resolves() -> None:
    library = build_library([("Node", Record.of({"next": Reference("Node"), "value": STRING}))])

    resolved = resolve(library)

    assert resolved.links == {("Node", "next"): "Node"}
    assert resolved.graph.is_recursive("Node") is True


def test_mutual_references_resolve() -> None:
    library = build_library(
        [
            ("Folder", Record.of({"files": Array(Reference("File"))})),
            ("File", Record.of({"parent": Reference("Folder")})),
            ("Name", STRING),
        ],
    )

    resolved = resolve(library)

    assert resolved.graph.recursive_declarations() == frozenset({"Folder", "File"})


def test_target_of_unknown_location() -> None:
    resolved = resolve(build_library([("Id", STRING)]))
    with pytest.raises(KeyError):
        resolved.target_of(("Id",))


def test_links_are_read_only(message_library) -> None:
    resolved = resolve(canonicalize(message_library))

    with pytest.raises(TypeError):
        resolved.links[("Message", "other")] = "User"  # type: ignore[index]

    assert len(resolved.links) == 1


def test_resolved_library_is_hashable(message_library) -> None:
    library = canonicalize(message_library)
    assert hash(resolve(library)) == hash(resolve(library))
