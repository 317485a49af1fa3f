"""Folder tree assembly from slash-separated relative paths."""

from __future__ import annotations

from codemap.extract.base import TypeDeclaration
from codemap.models import FileNode, FolderNode, TypeNode


class FolderBuilder:
    """Mutable folder node used while a refresh assembles the tree."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._subfolders: dict[str, FolderBuilder] = {}
        self._files: list[FileNode] = []

    def child(self, name: str) -> FolderBuilder:
        """Return the subfolder with this exact name, creating it on first use."""
        existing = self._subfolders.get(name)
        if existing is not None:
            return existing
        created = FolderBuilder(name)
        self._subfolders[name] = created
        return created

    def insert_file(self, relative_path: str, file_node: FileNode) -> None:
        """Append file_node under the folder chain named by relative_path."""
        parts = [part for part in relative_path.replace("\\", "/").split("/") if part]
        folder = self
        for segment in parts[:-1]:
            folder = folder.child(segment)
        folder._files.append(file_node)

    def freeze(self) -> FolderNode:
        """Return an immutable copy of this subtree."""
        return FolderNode(
            name=self.name,
            subfolders=tuple(sub.freeze() for sub in self._subfolders.values()),
            files=tuple(self._files),
        )


def build_type_nodes(declarations: list[TypeDeclaration]) -> tuple[TypeNode, ...]:
    """Convert declarations to type nodes; the first declaration of a name wins."""
    nodes: dict[str, TypeNode] = {}
    for declaration in declarations:
        if declaration.name in nodes:
            continue
        nodes[declaration.name] = TypeNode(
            name=declaration.name,
            base_type=declaration.base_type,
            interfaces=declaration.interfaces,
            fields=declaration.fields,
            methods=declaration.methods,
        )
    return tuple(nodes.values())


def count_types(folder: FolderNode) -> int:
    """Total number of type nodes in a subtree."""
    own = sum(len(file_node.classes) for file_node in folder.files)
    return own + sum(count_types(sub) for sub in folder.subfolders)


def count_files(folder: FolderNode) -> int:
    """Total number of file nodes in a subtree."""
    return len(folder.files) + sum(count_files(sub) for sub in folder.subfolders)
