"""
Dispatcher for routing song changes to notifiers.
"""

from dataclasses import dataclass
from typing import Callable

from .config import Config, build_notifier, build_table
from .messages import MidiMsg
from .notifier import SongIdNotifier

Sink = Callable[[MidiMsg], None]


@dataclass
class SongChangeDispatcher:
    """
    Turns song change events into MIDI messages.

    Handles:
    - Song stop notification for the previous song
    - Song start notification for the new song
    - Suppression of repeated events for the current song
    """
    start: SongIdNotifier
    stop: SongIdNotifier
    sink: Sink
    current: int | None = None

    def song_changed(self, song_id: int) -> None:
        """
        Handle a new current song.

        Args:
            song_id: Id of the song that is playing now.
        """
        if song_id == self.current:
            return

        if self.current is not None:
            self._send(self.stop.get_msg(self.current))

        self.current = song_id
        self._send(self.start.get_msg(song_id))

    def song_stopped(self) -> None:
        """Handle playback stopping."""
        if self.current is None:
            return

        song_id, self.current = self.current, None
        self._send(self.stop.get_msg(song_id))

    def _send(self, msg: MidiMsg) -> None:
        """Forward a message to the sink unless it is empty."""
        if not msg:
            return

        try:
            self.sink(msg)
        except Exception as e:
            print(f"  -> Error sending {msg.hex()}: {e}")


def create_dispatcher(config: Config, sink: Sink) -> SongChangeDispatcher:
    """
    Create a dispatcher with the given configuration.

    Both notifiers share one direct mapping table.

    Args:
        config: Loaded configuration.
        sink: Called with every message to send.

    Returns:
        Configured SongChangeDispatcher.
    """
    table = build_table(config)
    return SongChangeDispatcher(
        start=build_notifier(config.notifier("start"), table),
        stop=build_notifier(config.notifier("stop"), table),
        sink=sink,
    )
