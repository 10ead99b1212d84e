"""
Song id notifier.

Builds the MIDI message to send upon a change of the song id (song start
and/or song stop):

- if a direct mapping exists use it, otherwise add the offset
- use the configured MIDI command and channel
- keep the lowest 14 bits only, clipping the rest
- place them in the two data bytes in little or big endian

Little endian means the less significant bits go into the first data byte.
"""

from .lookup import Found, IdLookupTable
from .messages import EMPTY_MSG, MidiCommand, MidiMsg, midi_channel, status_byte

SONG_ID_MASK = 0x3FFF
DATA_BITS = 7
DATA_MASK = 0x7F


class SongIdNotifier:
    """
    Maps song ids onto MIDI messages.

    The lookup table is shared with the caller and only ever read. A notifier
    is not thread-safe: setters and get_msg() called from different threads
    need external synchronization, as do changes to the table made while
    messages are being built.
    """

    def __init__(
        self,
        table: IdLookupTable,
        offset: int = 0,
        command: MidiCommand = MidiCommand.NONE,
        channel: int = 0,
        little_endian: bool = False,
    ):
        self._table = table
        self._offset = offset
        self._command = MidiCommand(command)
        self._channel = midi_channel(channel)
        self._status = status_byte(self._command, self._channel)
        self._little_endian = little_endian

    @property
    def table(self) -> IdLookupTable:
        return self._table

    @property
    def command(self) -> MidiCommand:
        return self._command

    @property
    def channel(self) -> int:
        return self._channel

    @property
    def status(self) -> int:
        return self._status

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def little_endian(self) -> bool:
        return self._little_endian

    def set_midi_command(self, command: MidiCommand) -> None:
        self._command = MidiCommand(command)
        self._status = status_byte(self._command, self._channel)

    def set_midi_channel(self, channel: int) -> None:
        """Set the MIDI channel as sent over the wire [0..15]."""
        self._channel = midi_channel(channel)
        self._status = status_byte(self._command, self._channel)

    def set_endian(self, little_endian: bool) -> None:
        """Set the transfer endian. True sends the least significant bits first."""
        self._little_endian = bool(little_endian)

    def set_song_id_offset(self, offset: int) -> None:
        """Set the offset added to song ids without a direct mapping."""
        self._offset = offset

    def get_msg(self, song_id: int) -> MidiMsg:
        """
        Build the MIDI message for a song id.

        Args:
            song_id: The song id to send.

        Returns:
            The message (status byte, data byte 1, data byte 2). Negative
            adjusted ids are sent in 14-bit two's complement. Returns the
            empty message if the command is MidiCommand.NONE.
        """
        if self._command is MidiCommand.NONE:
            return EMPTY_MSG

        # Direct mappings are sent as stored, endianness included
        result = self._table.lookup(song_id)
        if isinstance(result, Found):
            assert result.data1 <= DATA_MASK and result.data2 <= DATA_MASK, "direct mapping is not 7-bit"
            return MidiMsg(self._status, result.data1, result.data2)

        value = (song_id + self._offset) & SONG_ID_MASK
        high = (value >> DATA_BITS) & DATA_MASK
        low = value & DATA_MASK

        if self._little_endian:
            return MidiMsg(self._status, low, high)
        return MidiMsg(self._status, high, low)

    encode = get_msg

    def __repr__(self) -> str:
        endian = "LE" if self._little_endian else "BE"
        return (
            f"SongIdNotifier(command={self._command.name.lower()}, "
            f"channel={self._channel}, offset={self._offset}, {endian})"
        )
