"""
MIDI message types.

Provides the notification commands, checked 7-bit data bytes and the
three-byte message produced for every song id.
"""

from dataclasses import dataclass
from enum import IntEnum

import mido


class MidiCommand(IntEnum):
    """MIDI commands a song id notifier can send.

    Values are the status byte high nibbles of the corresponding commands.
    """
    NONE = 0x00  # don't send anything
    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_AFTERTOUCH = 0xA0
    CONTROL_CHANGE = 0xB0

    @classmethod
    def parse(cls, name: str) -> "MidiCommand":
        """Parse a command from its config name (e.g. "control_change")."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            names = ", ".join(c.name.lower() for c in cls)
            raise ValueError(f"Unknown MIDI command: {name} (expected one of {names})") from None


def midi_byte(value: int) -> int:
    """Validate a MIDI data byte (7 bits)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"MIDI data byte must be an integer, got {value!r}")
    if not 0 <= value <= 0x7F:
        raise ValueError(f"MIDI data byte out of range [0..127]: {value}")
    return value


def midi_channel(value: int) -> int:
    """Validate a MIDI channel as sent over the wire [0..15]."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"MIDI channel must be an integer, got {value!r}")
    if not 0 <= value <= 0x0F:
        raise ValueError(f"MIDI channel out of range [0..15]: {value}")
    return value


def status_byte(command: int, channel: int) -> int:
    """Pack a command (high nibble) and channel (low nibble) into a status byte."""
    return (command & 0xF0) | (channel & 0x0F)


@dataclass(frozen=True)
class MidiMsg:
    """
    A three-byte MIDI message.

    The all-zero message means "don't send anything" and is falsy.
    """
    status: int = 0
    data1: int = 0
    data2: int = 0

    @property
    def is_empty(self) -> bool:
        return self.status == 0

    def __bool__(self) -> bool:
        return not self.is_empty

    @property
    def command(self) -> MidiCommand:
        return MidiCommand(self.status & 0xF0)

    @property
    def channel(self) -> int:
        return self.status & 0x0F

    def to_bytes(self) -> bytes:
        return bytes((self.status, self.data1, self.data2))

    def hex(self) -> str:
        return " ".join(f"{b:02X}" for b in self.to_bytes())

    def to_mido(self) -> mido.Message:
        """Convert to a mido message ready for any output port."""
        if self.is_empty:
            raise ValueError("Cannot convert the empty message")
        return mido.Message.from_bytes(list(self.to_bytes()))

    def __str__(self) -> str:
        if self.is_empty:
            return "(nothing)"
        return f"{self.hex()} | {self.to_mido()}"


EMPTY_MSG = MidiMsg()
