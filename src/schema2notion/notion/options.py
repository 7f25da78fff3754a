"""Option vocabularies shared by select, multi_select and status fields.

A vocabulary maps local option keys to the display names Notion stores, and
back. Options may be declared as a bare list of names (key == name) or as a
mapping from key to either a display name or a ``SelectOption``.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field

from schema2notion.models import SelectOption, SelectOptions, StatusGroup


@dataclass(frozen=True)
class OptionVocabulary:
    """Bidirectional key <-> name lookup for one field."""

    key_to_name: dict[str, str] = field(default_factory=dict)
    name_to_key: dict[str, str] = field(default_factory=dict)

    def to_name(self, key: str) -> str:
        """Display name for a key, or the key itself when unknown."""
        return self.key_to_name.get(key, key)

    def to_key(self, name: str) -> str:
        """Local key for a display name, or the name itself when unknown."""
        return self.name_to_key.get(name, name)


def iter_options(options: SelectOptions | None) -> Iterator[tuple[str, str, str | None]]:
    """Yield ``(key, name, color)`` for each declared option, in order."""
    if not options:
        return
    if isinstance(options, list):
        for name in options:
            yield name, name, None
        return
    for key, value in options.items():
        if isinstance(value, SelectOption):
            yield key, value.label or key, value.color
        else:
            yield key, value, None


def _build(entries: Iterator[tuple[str, str, str | None]]) -> OptionVocabulary:
    vocabulary = OptionVocabulary()
    for key, name, _ in entries:
        vocabulary.key_to_name[key] = name
        vocabulary.name_to_key[name] = key
    return vocabulary


def build_vocabulary(options: SelectOptions | None) -> OptionVocabulary:
    """Build the vocabulary of a select or multi_select field."""
    return _build(iter_options(options))


def build_status_vocabulary(groups: Mapping[str, StatusGroup] | None) -> OptionVocabulary:
    """Build the vocabulary of a status field by flattening all of its groups."""

    def entries() -> Iterator[tuple[str, str, str | None]]:
        for group in (groups or {}).values():
            yield from iter_options(group.options)

    return _build(entries())
