"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from songid_midi import IdLookupTable, MidiCommand, SongIdNotifier


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test configs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def write_config(temp_dir: Path):
    """Write YAML text to a config file and return its path."""
    def write(text: str) -> Path:
        path = temp_dir / "config.yaml"
        path.write_text(text)
        return path

    return write


@pytest.fixture
def table() -> IdLookupTable:
    """A table with a single direct mapping."""
    return IdLookupTable({42: (0x10, 0x20)})


@pytest.fixture
def notifier(table: IdLookupTable) -> SongIdNotifier:
    """A big endian control change notifier on channel 3 with offset 2."""
    return SongIdNotifier(table, offset=2, command=MidiCommand.CONTROL_CHANGE, channel=3)
