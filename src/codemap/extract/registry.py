"""Extractor selection for the configured source extension."""

from __future__ import annotations

from codemap.config import IndexConfig
from codemap.extract.base import DeclarationExtractor
from codemap.extract.csharp import CSharpDeclarationExtractor


def build_extractor(config: IndexConfig) -> DeclarationExtractor:
    """Build the extractor that handles config.source_extension."""
    candidates: list[DeclarationExtractor] = [
        CSharpDeclarationExtractor(
            type_keywords=config.type_keywords,
            mask_comments=config.mask_comments,
        ),
    ]
    probe = f"probe{config.source_extension}"
    for extractor in candidates:
        if extractor.supports_path(probe):
            return extractor
    raise LookupError(f"No extractor supports source extension: {config.source_extension}")
