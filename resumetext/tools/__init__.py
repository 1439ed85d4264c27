"""Namespace for pluggable format extractors."""

from __future__ import annotations

from .common.pipeline import registry


def load_builtin_plugins() -> None:
    from . import formats  # noqa: F401  # register pdf, docx and text extractors


__all__ = ["registry", "load_builtin_plugins"]
