"""JSON document form of the code hierarchy."""

from __future__ import annotations

import json

from codemap.models import FileNode, FolderNode, TypeNode


def folder_to_dict(folder: FolderNode) -> dict[str, object]:
    """Convert a folder subtree to plain dicts and lists."""
    return {
        "name": folder.name,
        "subfolders": [folder_to_dict(sub) for sub in folder.subfolders],
        "files": [_file_to_dict(file_node) for file_node in folder.files],
    }


def folder_from_dict(payload: object) -> FolderNode:
    """Rebuild a folder subtree from folder_to_dict output.

    Raises ValueError when the document does not have the expected shape.
    """
    table = _expect_dict(payload, "folder")
    return FolderNode(
        name=_expect_str(table.get("name"), "folder.name"),
        subfolders=tuple(
            folder_from_dict(item) for item in _expect_list(table.get("subfolders"), "subfolders")
        ),
        files=tuple(_file_from_dict(item) for item in _expect_list(table.get("files"), "files")),
    )


def dumps_tree(root: FolderNode) -> str:
    """Serialize the tree as pretty-printed JSON."""
    return json.dumps(folder_to_dict(root), indent=2) + "\n"


def loads_tree(raw: str) -> FolderNode:
    """Parse dumps_tree output back into a tree."""
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as error:
        raise ValueError(f"Invalid code hierarchy JSON: {error}") from error
    return folder_from_dict(payload)


def _file_to_dict(file_node: FileNode) -> dict[str, object]:
    return {
        "relativePath": file_node.relative_path,
        "classes": [_type_to_dict(node) for node in file_node.classes],
    }


def _type_to_dict(node: TypeNode) -> dict[str, object]:
    return {
        "name": node.name,
        "baseType": node.base_type,
        "interfaces": list(node.interfaces),
        "fields": list(node.fields),
        "methods": list(node.methods),
    }


def _file_from_dict(payload: object) -> FileNode:
    table = _expect_dict(payload, "file")
    return FileNode(
        relative_path=_expect_str(table.get("relativePath"), "file.relativePath"),
        classes=tuple(
            _type_from_dict(item) for item in _expect_list(table.get("classes"), "classes")
        ),
    )


def _type_from_dict(payload: object) -> TypeNode:
    table = _expect_dict(payload, "class")
    base_type = table.get("baseType")
    if base_type is not None and not isinstance(base_type, str):
        raise ValueError("Field 'class.baseType' must be a string or null.")
    return TypeNode(
        name=_expect_str(table.get("name"), "class.name"),
        base_type=base_type,
        interfaces=_string_tuple(table.get("interfaces"), "class.interfaces"),
        fields=_string_tuple(table.get("fields"), "class.fields"),
        methods=_string_tuple(table.get("methods"), "class.methods"),
    )


def _expect_dict(value: object, name: str) -> dict[str, object]:
    if not isinstance(value, dict):
        raise ValueError(f"Expected an object for '{name}'.")
    return value


def _expect_list(value: object, name: str) -> list[object]:
    if not isinstance(value, list):
        raise ValueError(f"Field '{name}' must be a list.")
    return value


def _expect_str(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Field '{name}' must be a string.")
    return value


def _string_tuple(value: object, name: str) -> tuple[str, ...]:
    items = _expect_list(value, name)
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"Field '{name}' must contain only strings.")
    return tuple(items)
