"""
Direct song id mappings.

A song id found in the table is sent with its stored data bytes as-is,
bypassing the offset mapping of the notifiers.
"""

from dataclasses import dataclass
from typing import Iterator, Mapping

from .messages import midi_byte


@dataclass(frozen=True)
class Found:
    """Lookup result carrying the stored data bytes."""
    data1: int
    data2: int


@dataclass(frozen=True)
class NotFound:
    """Lookup result for a song id without a direct mapping."""


NOT_FOUND = NotFound()

LookupResult = Found | NotFound


class IdLookupTable:
    """
    Maps song ids onto pre-built pairs of MIDI data bytes.

    Bytes are validated when an entry is added, so notifiers reading the
    table never have to. The pair is stored in transmission order.
    """

    def __init__(self, entries: Mapping[int, tuple[int, int]] | None = None):
        self._entries: dict[int, Found] = {}
        for song_id, (data1, data2) in (entries or {}).items():
            self.set(song_id, data1, data2)

    def set(self, song_id: int, data1: int, data2: int) -> None:
        """Add or replace the direct mapping for a song id."""
        self._entries[song_id] = Found(midi_byte(data1), midi_byte(data2))

    def remove(self, song_id: int) -> None:
        self._entries.pop(song_id, None)

    def clear(self) -> None:
        self._entries.clear()

    def lookup(self, song_id: int) -> LookupResult:
        return self._entries.get(song_id, NOT_FOUND)

    def __contains__(self, song_id: object) -> bool:
        return song_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def items(self) -> Iterator[tuple[int, Found]]:
        return iter(self._entries.items())
