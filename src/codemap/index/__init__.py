"""Indexing package."""

from codemap.models import FileNode, FolderNode, IndexSnapshot, SourceFile, TypeNode

from .discovery import discover_source_files, read_source_text, should_exclude
from .flat import flat_entries
from .manager import IndexService, IndexStatus
from .tree import FolderBuilder, build_type_nodes, count_files, count_types

__all__ = [
    "FileNode",
    "FolderBuilder",
    "FolderNode",
    "IndexService",
    "IndexSnapshot",
    "IndexStatus",
    "SourceFile",
    "TypeNode",
    "build_type_nodes",
    "count_files",
    "count_types",
    "discover_source_files",
    "flat_entries",
    "read_source_text",
    "should_exclude",
]
