"""Deterministic source file discovery."""

from __future__ import annotations

import fnmatch
import os
from pathlib import Path

from codemap.config import IndexConfig
from codemap.models import SourceFile


def discover_source_files(root: Path, config: IndexConfig) -> list[SourceFile]:
    """Walk root depth-first in name order and collect files with the source extension.

    A missing root yields an empty list; reporting it is left to the caller.
    """
    if not root.is_dir():
        return []
    resolved = root.resolve()
    extension = config.source_extension.lower()
    excluded_dir_names = _excluded_dir_names(config.exclude_globs)
    output: list[SourceFile] = []
    stack: list[Path] = [resolved]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as entries:
                ordered_entries = sorted(entries, key=lambda item: item.name)
        except OSError:
            continue
        subdirs: list[Path] = []
        for entry in ordered_entries:
            full_path = Path(entry.path)
            relative = full_path.relative_to(resolved).as_posix()
            if entry.is_dir(follow_symlinks=False):
                if entry.name in excluded_dir_names and should_exclude(
                    f"{relative}/", config.exclude_globs
                ):
                    continue
                subdirs.append(full_path)
                continue
            if not entry.is_file(follow_symlinks=False):
                continue
            if Path(relative).suffix.lower() != extension:
                continue
            if should_exclude(relative, config.exclude_globs):
                continue
            output.append(SourceFile(relative_path=relative, full_path=full_path))
        stack.extend(reversed(subdirs))
    return output


def read_source_text(path: Path) -> str:
    """Read a source file as strict UTF-8, dropping a leading byte order mark.

    Raises OSError or UnicodeDecodeError when the file cannot be read.
    """
    return path.read_text(encoding="utf-8-sig")


def should_exclude(relative_path: str, exclude_globs: tuple[str, ...]) -> bool:
    """Return True when a path matches configured ignore globs."""
    anchored = f"/{relative_path}"
    return any(
        fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(anchored, pattern)
        for pattern in exclude_globs
    )


def _excluded_dir_names(exclude_globs: tuple[str, ...]) -> set[str]:
    """Extract directory-name prunes from **/name/** glob patterns."""
    output: set[str] = set()
    for pattern in exclude_globs:
        if not pattern.startswith("**/") or not pattern.endswith("/**"):
            continue
        name = pattern[3:-3].strip("/")
        if not name:
            continue
        if any(char in name for char in "*?[]{}"):
            continue
        output.add(name)
    return output
