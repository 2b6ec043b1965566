"""Shared libraries used across the test suite."""

import pytest

from typebind._ir import (
    BOOLEAN,
    OPAQUE,
    STRING,
    Array,
    Dictionary,
    DiscriminatedUnion,
    Enum,
    Record,
    Reference,
    Scalar,
    ScalarKind,
    TypeLibrary,
    build_library,
)


def _scalar(kind: str) -> Scalar:
    return Scalar(ScalarKind(kind))


@pytest.fixture
def gamut_library() -> TypeLibrary:
    """Every shape at least once, in one declaration order."""
    return build_library(
        [
            ("Ref", Record.of({"a": STRING})),
            (
                "Gamut",
                Record.of(
                    [
                        (
                            "type",
                            Record.of(
                                [
                                    ("a", BOOLEAN),
                                    ("c", _scalar("timestamp")),
                                    ("j", _scalar("float32")),
                                    ("k", _scalar("float64")),
                                    ("b", STRING),
                                    ("f", _scalar("int16")),
                                    ("d", _scalar("int8")),
                                    ("h", _scalar("int32")),
                                    ("e", _scalar("uint8")),
                                    ("g", _scalar("uint16")),
                                    ("i", _scalar("uint32")),
                                ],
                            ),
                        ),
                        ("ref", Reference("Ref")),
                        ("enum", Enum.of("FOO", "BAR", "BAZ")),
                        (
                            "discriminator",
                            DiscriminatedUnion.of(
                                "tag",
                                [("b", Record.of({"b": STRING})), ("a", Record.of({"a": STRING}))],
                            ),
                        ),
                        ("elements", Array(Record.of({"a": STRING}))),
                        ("empty", OPAQUE),
                        ("values", Dictionary(Record.of({"a": STRING}))),
                    ],
                ),
            ),
        ],
        namespace="gamut",
    )


@pytest.fixture
def gamut_library_permuted() -> TypeLibrary:
    """The same declarations as ``gamut_library`` written in another order."""
    return build_library(
        [
            (
                "Gamut",
                Record.of(
                    [
                        ("ref", Reference("Ref")),
                        (
                            "type",
                            Record.of(
                                [
                                    ("i", _scalar("uint32")),
                                    ("b", STRING),
                                    ("c", _scalar("timestamp")),
                                    ("h", _scalar("int32")),
                                    ("j", _scalar("float32")),
                                    ("f", _scalar("int16")),
                                    ("d", _scalar("int8")),
                                    ("a", BOOLEAN),
                                    ("g", _scalar("uint16")),
                                    ("k", _scalar("float64")),
                                    ("e", _scalar("uint8")),
                                ],
                            ),
                        ),
                        ("enum", Enum.of("BAR", "FOO", "BAZ")),
                        ("values", Dictionary(Record.of({"a": STRING}))),
                        ("empty", OPAQUE),
                        ("elements", Array(Record.of({"a": STRING}))),
                        (
                            "discriminator",
                            DiscriminatedUnion.of(
                                "tag",
                                [("a", Record.of({"a": STRING})), ("b", Record.of({"b": STRING}))],
                            ),
                        ),
                    ],
                ),
            ),
            ("Ref", Record.of({"a": STRING})),
        ],
        namespace="gamut",
    )


@pytest.fixture
def message_library() -> TypeLibrary:
    return build_library(
        [
            (
                "Message",
                Record.of(
                    {
                        "details": DiscriminatedUnion.of(
                            "type",
                            {
                                "user_created": Record.of({"user": Reference("User")}),
                                "user_deleted": Record.of({"userId": STRING}),
                            },
                        ),
                        "messageId": STRING,
                        "timestamp": STRING,
                    },
                ),
            ),
            ("User", Record.of({"id": STRING, "name": STRING})),
        ],
        namespace="message",
    )
