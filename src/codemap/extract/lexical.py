"""Lexical helpers shared by pattern-based extractors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class LexicalRules:
    """Markers for text that must not take part in pattern matching."""

    line_comment_prefixes: tuple[str, ...] = ("//",)
    block_comment_pairs: tuple[tuple[str, str], ...] = (("/*", "*/"),)
    string_delimiters: tuple[str, ...] = ('"', "'")
    verbatim_prefixes: tuple[str, ...] = ("$@", "@$", "@")
    escape_char: str = "\\"


CSHARP_RULES = LexicalRules()


def mask_comments_and_strings(text: str, rules: LexicalRules | None = None) -> str:
    """Blank out comments and string literals, keeping every offset and newline."""
    active_rules = rules or CSHARP_RULES
    line_prefixes = _longest_first(active_rules.line_comment_prefixes)
    block_pairs = tuple(
        sorted(
            ((start, end) for start, end in active_rules.block_comment_pairs if start and end),
            key=lambda pair: len(pair[0]),
            reverse=True,
        )
    )
    delimiters = _longest_first(active_rules.string_delimiters)
    verbatim_prefixes = _longest_first(active_rules.verbatim_prefixes)

    chars = list(text)
    length = len(text)
    index = 0
    while index < length:
        if _match_any(text, index, line_prefixes) is not None:
            newline = text.find("\n", index)
            end = length if newline == -1 else newline
            _blank(chars, index, end)
            index = end
            continue

        pair = _match_block_start(text, index, block_pairs)
        if pair is not None:
            start_marker, end_marker = pair
            close = text.find(end_marker, index + len(start_marker))
            end = length if close == -1 else close + len(end_marker)
            _blank(chars, index, end)
            index = end
            continue

        prefix = _match_any(text, index, verbatim_prefixes)
        if prefix is not None:
            delimiter = _match_any(text, index + len(prefix), delimiters)
            if delimiter == '"':
                body_start = index + len(prefix) + len(delimiter)
                end = _string_end(text, body_start, delimiter, None)
                _blank(chars, index, end)
                index = end
                continue

        delimiter = _match_any(text, index, delimiters)
        if delimiter is not None:
            end = _string_end(text, index + len(delimiter), delimiter, active_rules.escape_char)
            _blank(chars, index, end)
            index = end
            continue

        index += 1

    return "".join(chars)


def find_matching_brace(
    text: str,
    open_index: int,
    open_char: str = "{",
    close_char: str = "}",
) -> int:
    """Return the index of the brace closing the one at open_index, or -1.

    Depth is tracked over the whole remainder of the text, so nested scopes
    never end the match early.
    """
    if open_index < 0 or open_index >= len(text) or text[open_index] != open_char:
        raise ValueError(f"No '{open_char}' at offset {open_index}.")
    depth = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
    return -1


def _string_end(text: str, start: int, delimiter: str, escape_char: str | None) -> int:
    """Offset just past the closing delimiter; regular strings stop at a newline."""
    verbatim = escape_char is None
    length = len(text)
    cursor = start
    while cursor < length:
        if not verbatim and text[cursor] == "\n":
            return cursor
        if not verbatim and text[cursor] == escape_char:
            cursor += 2
            continue
        if text.startswith(delimiter, cursor):
            # "" is an escaped quote inside a verbatim string
            if verbatim and text.startswith(delimiter, cursor + len(delimiter)):
                cursor += 2 * len(delimiter)
                continue
            return cursor + len(delimiter)
        cursor += 1
    return length


def _blank(chars: list[str], start: int, end: int) -> None:
    for offset in range(start, min(end, len(chars))):
        if chars[offset] != "\n":
            chars[offset] = " "


def _longest_first(markers: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(sorted((marker for marker in markers if marker), key=len, reverse=True))


def _match_any(text: str, index: int, markers: tuple[str, ...]) -> str | None:
    for marker in markers:
        if text.startswith(marker, index):
            return marker
    return None


def _match_block_start(
    text: str,
    index: int,
    pairs: tuple[tuple[str, str], ...],
) -> tuple[str, str] | None:
    for start, end in pairs:
        if text.startswith(start, index):
            return start, end
    return None
