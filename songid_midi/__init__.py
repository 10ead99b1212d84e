"""
Song id notifier.

Maps media player song ids onto MIDI messages.
"""

from .lookup import NOT_FOUND, Found, IdLookupTable, NotFound
from .messages import EMPTY_MSG, MidiCommand, MidiMsg, midi_byte, midi_channel, status_byte
from .notifier import SongIdNotifier

__all__ = [
    "EMPTY_MSG",
    "Found",
    "IdLookupTable",
    "MidiCommand",
    "MidiMsg",
    "NOT_FOUND",
    "NotFound",
    "SongIdNotifier",
    "midi_byte",
    "midi_channel",
    "status_byte",
]
