"""Report file writing."""

from __future__ import annotations

from pathlib import Path


class ReportWriteError(Exception):
    """Raised when a report cannot be written to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to write {path}: {reason}")
        self.path = path
        self.reason = reason


def render_flat(entries: tuple[str, ...] | list[str]) -> str:
    """Render flat entries as newline-delimited text, one entry per line."""
    return "".join(f"{entry}\n" for entry in entries)


def atomic_write_text(path: Path, text: str) -> Path:
    """Write text through a temporary sibling file and replace the target."""
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tmp.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        tmp.replace(path)
    except OSError as error:
        if tmp.exists():
            tmp.unlink()
        raise ReportWriteError(path, str(error)) from error
    return path
