"""Shared plumbing for format extractors."""

from __future__ import annotations

from .interfaces import BaseExtractor, ExtractionContext
from .pipeline import DEFAULT_EXTRACTOR, ExtractorRegistry, register_extractor, registry

__all__ = [
    "DEFAULT_EXTRACTOR",
    "BaseExtractor",
    "ExtractionContext",
    "ExtractorRegistry",
    "register_extractor",
    "registry",
]
