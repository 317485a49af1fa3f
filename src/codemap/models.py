"""Typed models for the published code index."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class TypeNode:
    """Declared type with its inheritance list and member descriptors."""

    name: str
    base_type: str | None
    interfaces: tuple[str, ...]
    fields: tuple[str, ...]
    methods: tuple[str, ...]


@dataclass(slots=True, frozen=True)
class FileNode:
    """Source file and the distinct types declared in it."""

    relative_path: str
    classes: tuple[TypeNode, ...]


@dataclass(slots=True, frozen=True)
class FolderNode:
    """Folder with uniquely named subfolders and its files."""

    name: str
    subfolders: tuple[FolderNode, ...] = ()
    files: tuple[FileNode, ...] = ()


@dataclass(slots=True, frozen=True)
class IndexSnapshot:
    """Immutable result of one full refresh."""

    root: FolderNode
    flat: tuple[str, ...]
    warnings: tuple[str, ...]
    refreshed_at: str
    file_count: int
    type_count: int


@dataclass(slots=True, frozen=True)
class SourceFile:
    """Source file discovered under the scan root."""

    relative_path: str
    full_path: Path
