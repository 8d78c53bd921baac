"""Hypothesis strategies for doclocalize property-based testing.

Usage:
    from tests.strategies import locale_ids, key_paths, entry_maps, document_texts
"""

from .dictionaries import (
    dictionary_sets,
    document_texts,
    entry_maps,
    key_paths,
    key_segments,
    locale_ids,
    plain_texts,
)

__all__ = [
    "dictionary_sets",
    "document_texts",
    "entry_maps",
    "key_paths",
    "key_segments",
    "locale_ids",
    "plain_texts",
]
