"""Lexical C# declaration extractor."""

from __future__ import annotations

import re

from codemap.config import DEFAULT_TYPE_KEYWORDS
from codemap.extract.base import (
    MemberMatch,
    TypeDeclaration,
    split_parent_list,
    unique_in_order,
)
from codemap.extract.lexical import CSHARP_RULES, find_matching_brace, mask_comments_and_strings

_VISIBILITY = r"(?:public|private|protected|internal)"
_MODIFIERS = (
    r"(?:(?:static|readonly|const|volatile|new|virtual|override|abstract|sealed"
    r"|async|extern|unsafe|partial)\s+)*"
)
_TYPE_TOKEN = r"[\w<>\[\],.?]+"

_FIELD_RE = re.compile(
    rf"\b{_VISIBILITY}\s+{_MODIFIERS}(?P<type>{_TYPE_TOKEN})\s+(?P<name>\w+)\s*(?:=(?!>)|;)"
)
_METHOD_RE = re.compile(
    rf"\b{_VISIBILITY}\s+{_MODIFIERS}(?P<type>{_TYPE_TOKEN})\s+(?P<name>\w+)"
    r"\s*(?:<[^<>(){};]*>)?\s*\((?P<params>[^)]*)\)"
)


class CSharpDeclarationExtractor:
    """Pattern-based extractor for C# type declarations and members."""

    name = "csharp_lexical"

    def __init__(
        self,
        type_keywords: tuple[str, ...] = DEFAULT_TYPE_KEYWORDS,
        mask_comments: bool = True,
    ) -> None:
        keywords = "|".join(re.escape(keyword) for keyword in type_keywords)
        self._declaration_re = re.compile(
            rf"\b(?:{keywords})\s+(?P<name>\w+)\s*(?:<[^<>{{}};]*>)?"
            r"(?:\s*:\s*(?P<parents>[\w\s,<>.\[\]?]+))?(?:\s+where\b[^{};]*)?\s*\{"
        )
        self._type_name_re = re.compile(
            rf"\b(?:{keywords})\s+(?P<name>\w+)(?=\s*[<:{{(]|\s+where\b|\s*$)", re.MULTILINE
        )
        self._mask_comments = mask_comments

    def supports_path(self, path: str) -> bool:
        """Return True when path is a C# source file."""
        return path.lower().endswith(".cs")

    def extract_declarations(self, text: str) -> list[TypeDeclaration]:
        """Extract brace-scoped type declarations in order of appearance."""
        masked = self._prepare(text)
        declarations: list[TypeDeclaration] = []
        seen: set[str] = set()
        for match in self._declaration_re.finditer(masked):
            name = match.group("name")
            if name in seen:
                continue
            seen.add(name)
            base_type, interfaces = _classify_parents(match.group("parents"))
            open_index = match.end() - 1
            close_index = find_matching_brace(masked, open_index)
            fields: tuple[str, ...] = ()
            methods: tuple[str, ...] = ()
            if close_index != -1:
                body_start = open_index + 1
                fields = unique_in_order(
                    _render_field(found)
                    for found in _FIELD_RE.finditer(masked, body_start, close_index)
                )
                methods = unique_in_order(
                    _render_method(found, text)
                    for found in _METHOD_RE.finditer(masked, body_start, close_index)
                )
            declarations.append(
                TypeDeclaration(
                    name=name,
                    base_type=base_type,
                    interfaces=interfaces,
                    fields=fields,
                    methods=methods,
                    offset=match.start(),
                    body_closed=close_index != -1,
                )
            )
        return declarations

    def scan_type_offsets(self, text: str) -> list[tuple[str, int]]:
        """Find every keyword-led type name, without requiring an opening brace."""
        masked = self._prepare(text)
        return [
            (found.group("name"), found.start()) for found in self._type_name_re.finditer(masked)
        ]

    def scan_members(self, text: str) -> list[MemberMatch]:
        """Find fields and methods anywhere in the file, ordered by offset."""
        masked = self._prepare(text)
        members = [
            MemberMatch(kind="field", descriptor=_render_field(found), offset=found.start())
            for found in _FIELD_RE.finditer(masked)
        ]
        members.extend(
            MemberMatch(kind="method", descriptor=_render_method(found, text), offset=found.start())
            for found in _METHOD_RE.finditer(masked)
        )
        members.sort(key=lambda member: member.offset)
        return members

    def _prepare(self, text: str) -> str:
        if not self._mask_comments:
            return text
        return mask_comments_and_strings(text, CSHARP_RULES)


def _classify_parents(raw: str | None) -> tuple[str | None, tuple[str, ...]]:
    if raw is None:
        return None, ()
    parents = split_parent_list(raw)
    if not parents:
        return None, ()
    return parents[0], tuple(parents[1:])


def _render_field(match: re.Match[str]) -> str:
    return f"{match.group('type')} {match.group('name')}"


def _render_method(match: re.Match[str], original: str) -> str:
    # parameter text comes from the unmasked source so default string values survive
    start, end = match.span("params")
    params = " ".join(original[start:end].split())
    return f"{match.group('type')} {match.group('name')}({params})"
