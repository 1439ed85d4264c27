"""Plugin registry dispatching documents to format extractors."""

from __future__ import annotations

from typing import Dict, Iterable

from ...exceptions import ExtractorRegistrationError, UnknownExtractorError
from .interfaces import BaseExtractor, ExtractionContext

DEFAULT_EXTRACTOR = "text"


class ExtractorRegistry:
    """Registry storing available extractors and the suffixes they claim."""

    def __init__(self, default: str = DEFAULT_EXTRACTOR) -> None:
        self.default = default
        self._extractors: Dict[str, type[BaseExtractor]] = {}
        self._suffixes: Dict[str, str] = {}

    def register(self, name: str, extractor_class: type[BaseExtractor]) -> None:
        if name in self._extractors:
            raise ExtractorRegistrationError(f"Extractor '{name}' is already registered")
        for suffix in extractor_class.suffixes:
            key = suffix.lower()
            if key in self._suffixes:
                raise ExtractorRegistrationError(
                    f"Suffix '{key}' is already claimed by '{self._suffixes[key]}'"
                )
        self._extractors[name] = extractor_class
        for suffix in extractor_class.suffixes:
            self._suffixes[suffix.lower()] = name

    def resolve(self, filename: str | None) -> str:
        """Return the extractor name for ``filename``, case-insensitively.

        A name matches when it ends with a claimed suffix, so dot-files such
        as ``.pdf`` dispatch too. Longer suffixes win over shorter ones.
        """

        lowered = (filename or "").lower()
        for suffix in sorted(self._suffixes, key=len, reverse=True):
            if lowered.endswith(suffix):
                return self._suffixes[suffix]
        return self.default

    def create(self, name: str, context: ExtractionContext) -> BaseExtractor:
        try:
            extractor_class = self._extractors[name]
        except KeyError as exc:
            raise UnknownExtractorError(name) from exc
        return extractor_class(context)

    def names(self) -> Iterable[str]:
        return sorted(self._extractors.keys())

    def get(self, name: str) -> type[BaseExtractor] | None:
        return self._extractors.get(name)


registry = ExtractorRegistry()


def register_extractor(name: str):
    def decorator(cls: type[BaseExtractor]) -> type[BaseExtractor]:
        cls.name = name
        registry.register(name, cls)
        return cls

    return decorator


__all__ = [
    "DEFAULT_EXTRACTOR",
    "ExtractorRegistry",
    "registry",
    "register_extractor",
    "ExtractionContext",
    "BaseExtractor",
]
