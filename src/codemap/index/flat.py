"""Flat line-oriented index entries."""

from __future__ import annotations

from codemap.extract.base import DeclarationExtractor, MemberMatch, unique_in_order

FILE_PREFIX = "File: "
CLASS_PREFIX = "  Class: "
FIELD_PREFIX = "    Field: "
METHOD_PREFIX = "    Method: "


def flat_entries(
    path: str,
    text: str,
    extractor: DeclarationExtractor,
    attribution: str = "offset",
) -> list[str]:
    """Return the flat entries for one file.

    ``offset`` attribution credits a type with every member that appears after
    its declaration anywhere in the file, so later types' members are also
    listed under earlier ones. ``scoped`` attribution only lists members inside
    the type's own braces.
    """
    if attribution == "scoped":
        return _scoped_entries(path, text, extractor)
    if attribution == "offset":
        return _offset_entries(path, text, extractor)
    raise ValueError(f"Unknown flat attribution mode: {attribution}")


def _offset_entries(path: str, text: str, extractor: DeclarationExtractor) -> list[str]:
    entries = [f"{FILE_PREFIX}{path}"]
    type_offsets = extractor.scan_type_offsets(text)
    if not type_offsets:
        return entries
    members = extractor.scan_members(text)
    for type_name, type_offset in type_offsets:
        entries.append(f"{CLASS_PREFIX}{type_name}")
        following = [member for member in members if member.offset > type_offset]
        entries.extend(_member_entries(following))
    return entries


def _scoped_entries(path: str, text: str, extractor: DeclarationExtractor) -> list[str]:
    entries = [f"{FILE_PREFIX}{path}"]
    for declaration in extractor.extract_declarations(text):
        entries.append(f"{CLASS_PREFIX}{declaration.name}")
        entries.extend(f"{FIELD_PREFIX}{field}" for field in declaration.fields)
        entries.extend(f"{METHOD_PREFIX}{method}" for method in declaration.methods)
    return entries


def _member_entries(members: list[MemberMatch]) -> list[str]:
    rendered = (
        f"{FIELD_PREFIX if member.kind == 'field' else METHOD_PREFIX}{member.descriptor}"
        for member in members
    )
    return list(unique_in_order(rendered))
