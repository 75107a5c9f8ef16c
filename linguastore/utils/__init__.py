"""Utility helpers for the linguastore backend."""

from .translation_samples import (
    generate_translation_samples,
    sample_translation_map,
)

__all__ = [
    "generate_translation_samples",
    "sample_translation_map",
]
