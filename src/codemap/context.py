"""Prompt context assembly from flat index entries."""

from __future__ import annotations

from collections.abc import Iterable


def select_entries(entries: Iterable[str], selected: Iterable[str] | None = None) -> list[str]:
    """Keep the selected entries in index order; None selects everything."""
    ordered = list(entries)
    if selected is None:
        return ordered
    wanted = set(selected)
    return [entry for entry in ordered if entry in wanted]


def assemble_context(entries: Iterable[str]) -> str:
    """Join entries into a single newline-separated context block."""
    return "\n".join(entries)


def format_prompt(prompt: str, context: str) -> str:
    """Render the user message sent to the completion service."""
    return f"Context:\n{context}\n\nPrompt:\n{prompt}"
