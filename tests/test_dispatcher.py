"""
Tests for the song change dispatcher.
"""

import pytest

from songid_midi import IdLookupTable, MidiCommand, MidiMsg, SongIdNotifier
from songid_midi.config import parse_config
from songid_midi.dispatcher import SongChangeDispatcher, create_dispatcher


@pytest.fixture
def sent() -> list[MidiMsg]:
    return []


@pytest.fixture
def dispatcher(table: IdLookupTable, sent: list[MidiMsg]) -> SongChangeDispatcher:
    """Note on for song start, note off for song stop, channel 1."""
    return SongChangeDispatcher(
        start=SongIdNotifier(table, command=MidiCommand.NOTE_ON, channel=1),
        stop=SongIdNotifier(table, command=MidiCommand.NOTE_OFF, channel=1),
        sink=sent.append,
    )


class TestSongChangeDispatcher:
    """Tests for SongChangeDispatcher."""

    def test_first_song(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.song_changed(5)
        assert sent == [MidiMsg(0x91, 0, 5)]
        assert dispatcher.current == 5

    def test_song_change_stops_previous(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.song_changed(5)
        dispatcher.song_changed(42)
        assert sent == [
            MidiMsg(0x91, 0, 5),
            MidiMsg(0x81, 0, 5),
            MidiMsg(0x91, 0x10, 0x20),
        ]

    def test_same_song_ignored(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.song_changed(5)
        dispatcher.song_changed(5)
        assert len(sent) == 1

    def test_song_stopped(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.song_changed(42)
        dispatcher.song_stopped()
        assert sent[-1] == MidiMsg(0x81, 0x10, 0x20)
        assert dispatcher.current is None

        # Nothing playing: nothing to stop
        dispatcher.song_stopped()
        assert len(sent) == 2

    def test_restart_after_stop(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.song_changed(5)
        dispatcher.song_stopped()
        dispatcher.song_changed(5)
        assert sent[-1] == MidiMsg(0x91, 0, 5)
        assert len(sent) == 3

    def test_empty_messages_not_sent(self, dispatcher: SongChangeDispatcher, sent: list[MidiMsg]) -> None:
        dispatcher.stop.set_midi_command(MidiCommand.NONE)
        dispatcher.song_changed(1)
        dispatcher.song_changed(2)
        dispatcher.song_stopped()
        assert sent == [MidiMsg(0x91, 0, 1), MidiMsg(0x91, 0, 2)]

    def test_sink_error(self, table: IdLookupTable, capsys) -> None:
        def broken(msg: MidiMsg) -> None:
            raise OSError("port closed")

        dispatcher = SongChangeDispatcher(
            start=SongIdNotifier(table, command=MidiCommand.NOTE_ON),
            stop=SongIdNotifier(table),
            sink=broken,
        )
        dispatcher.song_changed(3)

        assert "Error sending 90 00 03: port closed" in capsys.readouterr().out
        assert dispatcher.current == 3


class TestCreateDispatcher:
    """Tests for create_dispatcher."""

    def test_from_config(self, sent: list[MidiMsg]) -> None:
        config = parse_config({
            "notifiers": {
                "start": {"command": "control_change", "channel": 3, "offset": 2},
                "stop": {"command": "control_change", "channel": 4, "little_endian": True},
            },
            "mapping": {42: [0x10, 0x20]},
        })
        dispatcher = create_dispatcher(config, sent.append)

        assert dispatcher.start.table is dispatcher.stop.table

        dispatcher.song_changed(10)
        dispatcher.song_changed(42)
        assert sent == [
            MidiMsg(0xB3, 0x00, 0x0C),
            MidiMsg(0xB4, 0x0A, 0x00),
            MidiMsg(0xB3, 0x10, 0x20),
        ]

    def test_missing_notifiers_send_nothing(self, sent: list[MidiMsg]) -> None:
        dispatcher = create_dispatcher(parse_config({}), sent.append)
        dispatcher.song_changed(1)
        dispatcher.song_stopped()
        assert sent == []
