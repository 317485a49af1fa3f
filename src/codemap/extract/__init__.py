"""Declaration extraction interfaces."""

from .base import (
    DeclarationExtractor,
    MemberMatch,
    TypeDeclaration,
    split_parent_list,
    unique_in_order,
)
from .csharp import CSharpDeclarationExtractor
from .lexical import CSHARP_RULES, LexicalRules, find_matching_brace, mask_comments_and_strings
from .registry import build_extractor

__all__ = [
    "CSHARP_RULES",
    "CSharpDeclarationExtractor",
    "DeclarationExtractor",
    "LexicalRules",
    "MemberMatch",
    "TypeDeclaration",
    "build_extractor",
    "find_matching_brace",
    "mask_comments_and_strings",
    "split_parent_list",
    "unique_in_order",
]
