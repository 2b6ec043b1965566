"""Emission module for typebind.

This module turns a canonical, resolved library into target-language source.

Key types:
- Backend: Abstract base class every target implements
- EmittedUnit: One generated file (identifier and source text)
- TypeScriptBackend: Reference backend emitting TypeScript declarations
- GoBackend: Backend emitting Go structs with JSON tags
- emit / generate: Run one backend, or the whole pipeline
"""

from types import MappingProxyType

from ._backend import Backend, EmittedUnit, check_alias_cycles, emit, generate
from ._golang import GoBackend
from ._naming import NameAllocator, pascal_case, snake_case
from ._typescript import TypeScriptBackend

BACKENDS: MappingProxyType[str, type[Backend]] = MappingProxyType(
    {
        TypeScriptBackend.tag: TypeScriptBackend,
        GoBackend.tag: GoBackend,
    },
)

__all__ = [
    "BACKENDS",
    "Backend",
    "EmittedUnit",
    "GoBackend",
    "NameAllocator",
    "TypeScriptBackend",
    "check_alias_cycles",
    "emit",
    "generate",
    "pascal_case",
    "snake_case",
]
