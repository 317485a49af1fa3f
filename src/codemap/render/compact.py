"""Compact indented text report of the code hierarchy."""

from __future__ import annotations

from codemap.models import FolderNode, TypeNode

_TYPE_INDENT = "  "
_MEMBER_INDENT = "    "


def render_compact(root: FolderNode) -> str:
    """Render files depth-first: a folder's own files, then its subfolders."""
    lines: list[str] = []
    _write_folder(root, lines)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def type_heading(node: TypeNode) -> str:
    """Return ``Name : Base | I1 | I2``, or the bare name without inheritance."""
    parents = [node.base_type] if node.base_type else []
    parents.extend(node.interfaces)
    if not parents:
        return node.name
    return f"{node.name} : {' | '.join(parents)}"


def _write_folder(folder: FolderNode, lines: list[str]) -> None:
    for file_node in folder.files:
        lines.append(file_node.relative_path)
        emitted: set[str] = set()
        for node in file_node.classes:
            if node.name in emitted:
                continue
            emitted.add(node.name)
            lines.append(f"{_TYPE_INDENT}{type_heading(node)}")
            lines.extend(f"{_MEMBER_INDENT}{field}" for field in node.fields)
            lines.extend(f"{_MEMBER_INDENT}{method}" for method in node.methods)
        lines.append("")
    for sub in folder.subfolders:
        _write_folder(sub, lines)
