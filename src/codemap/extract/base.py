"""Core extractor protocol and declaration types."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, frozen=True)
class MemberMatch:
    """Field or method found anywhere in a file, with its text offset."""

    kind: str
    descriptor: str
    offset: int


@dataclass(slots=True, frozen=True)
class TypeDeclaration:
    """Single type declaration with its brace-scoped members."""

    name: str
    base_type: str | None
    interfaces: tuple[str, ...]
    fields: tuple[str, ...]
    methods: tuple[str, ...]
    offset: int
    body_closed: bool


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Collapse duplicates while keeping first-occurrence order."""
    return tuple(dict.fromkeys(values))


def split_parent_list(raw: str) -> list[str]:
    """Split an inheritance list on commas outside of generic brackets."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in raw:
        if char == "<":
            depth += 1
        elif char == ">":
            depth = max(0, depth - 1)
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [" ".join(part.split()) for part in parts if part.strip()]


class DeclarationExtractor(Protocol):
    """Protocol implemented by declaration extractors."""

    name: str

    def supports_path(self, path: str) -> bool:
        """Return True when extractor supports a file path."""

    def extract_declarations(self, text: str) -> list[TypeDeclaration]:
        """Return brace-scoped declarations in source order, first name wins."""

    def scan_type_offsets(self, text: str) -> list[tuple[str, int]]:
        """Return every type name occurrence with its offset, duplicates included."""

    def scan_members(self, text: str) -> list[MemberMatch]:
        """Return every field and method match in the whole file, in source order."""
