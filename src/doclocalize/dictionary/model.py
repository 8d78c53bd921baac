"""Immutable locale dictionary and dictionary set.

LocaleDictionary holds one locale's nested translations; DictionarySet is
the ordered, filtered collection shared by every document expansion of a
run. Both are frozen after construction and safe to share across threads.

Python 3.13+.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from doclocalize.constants import PATH_SEPARATOR
from doclocalize.dictionary.types import EntryTree, KeyPath, LocaleId
from doclocalize.locale_utils import try_babel_locale

if TYPE_CHECKING:
    from babel import Locale

    from doclocalize.dictionary.loading import LoadSummary
    from doclocalize.enums import DictionaryFormat

__all__ = [
    "DictionarySet",
    "LocaleDictionary",
    "freeze_entries",
]


def freeze_entries(tree: Mapping[str, object]) -> EntryTree:
    """Return a read-only deep copy of a nested string map.

    Args:
        tree: Mapping whose values are strings or nested mappings

    Returns:
        MappingProxyType tree with the same shape

    Raises:
        TypeError: If a key is not a string or a value is neither a string
            nor a mapping
    """
    frozen: dict[str, EntryTree | str] = {}
    for key, value in tree.items():
        if not isinstance(key, str):
            msg = f"Dictionary keys must be strings, got {type(key).__name__}"
            raise TypeError(msg)
        match value:
            case str():
                frozen[key] = value
            case Mapping():
                frozen[key] = freeze_entries(value)
            case _:
                msg = (
                    f"Dictionary value for '{key}' must be a string or mapping, "
                    f"got {type(value).__name__}"
                )
                raise TypeError(msg)
    return MappingProxyType(frozen)


@dataclass(frozen=True, slots=True)
class LocaleDictionary:
    """Translations for a single locale.

    Attributes:
        id: Locale identifier from the source file's base name
        entries: Read-only nested map; each key path segment is one level
        source_path: File the dictionary was loaded from (None for in-memory)
        format: On-disk format of source_path (None for in-memory)

    Example:
        >>> de = LocaleDictionary("de_DE", {"section1": {"token2": "Inhalt2"}})
        >>> de.lookup("section1.token2")
        'Inhalt2'
        >>> de.lookup("section1") is None
        True
    """

    id: LocaleId
    entries: EntryTree
    source_path: str | None = None
    format: DictionaryFormat | None = None

    def __post_init__(self) -> None:
        """Validate the id and freeze entries.

        Raises:
            ValueError: If id is empty or contains a path separator
        """
        if not self.id:
            msg = "Locale id cannot be empty"
            raise ValueError(msg)
        if "/" in self.id or "\\" in self.id:
            msg = f"Path separators not allowed in locale id: '{self.id}'"
            raise ValueError(msg)
        object.__setattr__(self, "entries", freeze_entries(self.entries))

    def lookup(self, path: KeyPath) -> str | None:
        """Resolve a dotted key path to its translated string.

        Descends one segment at a time. Resolution only succeeds when every
        intermediate segment names a nested map and the final segment names
        a string leaf.

        Args:
            path: Dotted key path (e.g., 'section1.subsection2.token3')

        Returns:
            Translated string, or None if the path does not resolve to a leaf
        """
        node: EntryTree | str = self.entries
        for segment in path.split(PATH_SEPARATOR):
            if isinstance(node, str):
                return None
            child = node.get(segment)
            if child is None:
                return None
            node = child
        return node if isinstance(node, str) else None

    def iter_entries(self) -> Iterator[tuple[KeyPath, str]]:
        """Yield (dotted path, translation) pairs in insertion order."""
        stack: list[tuple[str, EntryTree]] = [("", self.entries)]
        while stack:
            prefix, node = stack.pop()
            children: list[tuple[str, EntryTree]] = []
            for key, value in node.items():
                path = f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key
                if isinstance(value, str):
                    yield path, value
                else:
                    children.append((path, value))
            stack.extend(reversed(children))

    @property
    def entry_count(self) -> int:
        """Number of translated strings (leaves) in the dictionary."""
        return sum(1 for _ in self.iter_entries())

    @property
    def locale(self) -> Locale | None:
        """Babel locale for this id, or None if Babel does not recognize it."""
        return try_babel_locale(self.id)


@dataclass(frozen=True, slots=True)
class DictionarySet:
    """Ordered, non-empty collection of locale dictionaries.

    Dictionaries are kept in ascending lexicographic order of their ids.
    This order is the order in which expanded documents are emitted.

    Attributes:
        dictionaries: Locale dictionaries sorted by id
        summary: Load summary of the directory scan that produced the set
            (None when built in memory)

    Example:
        >>> dictionaries = DictionarySet.from_mapping({
        ...     "en_US": {"token1": "content1"},
        ...     "de_DE": {"token1": "Inhalt1"},
        ... })
        >>> dictionaries.ids
        ('de_DE', 'en_US')
    """

    dictionaries: tuple[LocaleDictionary, ...]
    summary: LoadSummary | None = None

    def __post_init__(self) -> None:
        """Sort dictionaries by id and validate set invariants.

        Raises:
            ValueError: If the set is empty or contains duplicate ids
        """
        ordered = tuple(sorted(self.dictionaries, key=lambda d: d.id))
        if not ordered:
            msg = "DictionarySet requires at least one dictionary"
            raise ValueError(msg)
        ids = [d.id for d in ordered]
        if len(set(ids)) != len(ids):
            duplicates = sorted({i for i in ids if ids.count(i) > 1})
            msg = f"Duplicate locale ids in DictionarySet: {duplicates}"
            raise ValueError(msg)
        object.__setattr__(self, "dictionaries", ordered)

    @classmethod
    def from_mapping(cls, mapping: Mapping[LocaleId, Mapping[str, object]]) -> DictionarySet:
        """Build a set from in-memory translations.

        Keys of the inner mappings may be nested mappings, dotted paths, or
        both; they are normalized the same way as loaded files.

        Args:
            mapping: Locale id -> translations

        Returns:
            DictionarySet sorted by locale id

        Raises:
            DictionaryParseError: If translations contain conflicting keys
            ValueError: If mapping is empty
        """
        # Deferred: formats imports this module
        from doclocalize.dictionary.formats import tree_from_mapping  # noqa: PLC0415

        return cls(
            tuple(
                LocaleDictionary(locale_id, tree_from_mapping(entries, f"<{locale_id}>"))
                for locale_id, entries in mapping.items()
            )
        )

    def __iter__(self) -> Iterator[LocaleDictionary]:
        return iter(self.dictionaries)

    def __len__(self) -> int:
        return len(self.dictionaries)

    def __getitem__(self, index: int) -> LocaleDictionary:
        return self.dictionaries[index]

    def __contains__(self, locale_id: object) -> bool:
        return any(d.id == locale_id for d in self.dictionaries)

    @property
    def ids(self) -> tuple[LocaleId, ...]:
        """Locale ids in set order."""
        return tuple(d.id for d in self.dictionaries)

    def get(self, locale_id: LocaleId) -> LocaleDictionary | None:
        """Return the dictionary for locale_id, or None if not in the set."""
        for dictionary in self.dictionaries:
            if dictionary.id == locale_id:
                return dictionary
        return None
