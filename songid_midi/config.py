"""
Configuration loading and validation.

Handles YAML config parsing with environment variable expansion.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .lookup import IdLookupTable
from .messages import MidiCommand, midi_byte, midi_channel
from .notifier import SongIdNotifier

NOTIFIER_NAMES = ("start", "stop")

ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')


@dataclass
class NotifierConfig:
    """Configuration for a song id notifier."""
    command: MidiCommand = MidiCommand.NONE
    channel: int = 0
    little_endian: bool = False
    offset: int = 0


@dataclass
class Config:
    """Root configuration object."""
    notifiers: dict[str, NotifierConfig] = field(default_factory=dict)
    mapping: dict[int, tuple[int, int]] = field(default_factory=dict)  # song id -> data bytes

    def notifier(self, name: str) -> NotifierConfig:
        """Get a notifier config, defaulting to one that sends nothing."""
        return self.notifiers.get(name, NotifierConfig())


def expand_env_vars(value: str) -> str:
    """Expand ${VAR} references in a string. Unset variables expand to ""."""
    return ENV_VAR_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)


def expand_config_values(obj: Any) -> Any:
    """Expand environment variables in every string value.

    Keys are left alone, so song ids stay as YAML parsed them.
    """
    if isinstance(obj, str):
        return expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: expand_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [expand_config_values(item) for item in obj]
    return obj


def require_dict(value: Any, what: str) -> dict:
    """Check a config section is a mapping. A missing section is empty."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}: {value!r}")
    return value


def parse_number(text: str) -> int:
    """Parse a decimal integer, or one with a 0x/0o/0b prefix.

    Zero-padded decimals such as "010" read as decimal.
    """
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return int(text, 0)


def parse_int(value: Any, what: str) -> int:
    """Parse an integer that may come from an expanded ${VAR} string."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid {what}: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return parse_number(value)
        except ValueError:
            pass
    raise ValueError(f"Invalid {what}: {value!r}")


def parse_bool(value: Any, what: str) -> bool:
    """Parse a boolean that may come from an expanded ${VAR} string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("", "0", "false", "no", "off"):
            return False
    raise ValueError(f"Invalid {what}: {value!r}")


def parse_notifier(name: str, data: dict[str, Any] | None) -> NotifierConfig:
    """Parse a notifier config from config data."""
    data = require_dict(data, f"Notifier '{name}'")
    command = data.get("command", "none")
    # YAML reads a bare `none` as a string but `null` as None
    if command is None:
        command = "none"

    try:
        return NotifierConfig(
            command=MidiCommand.parse(str(command)),
            channel=midi_channel(parse_int(data.get("channel", 0), "channel")),
            little_endian=parse_bool(data.get("little_endian", False), "little_endian"),
            offset=parse_int(data.get("offset", 0), "offset"),
        )
    except ValueError as e:
        raise ValueError(f"Notifier '{name}': {e}") from None


def parse_mapping(data: dict[Any, Any] | None) -> dict[int, tuple[int, int]]:
    """Parse direct mappings (song id -> [data1, data2])."""
    mapping: dict[int, tuple[int, int]] = {}
    for key, value in require_dict(data, "mapping").items():
        song_id = parse_int(key, "song id")
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"Mapping for song id {song_id} must be a pair of data bytes, got {value!r}")
        try:
            mapping[song_id] = (
                midi_byte(parse_int(value[0], "data byte")),
                midi_byte(parse_int(value[1], "data byte")),
            )
        except ValueError as e:
            raise ValueError(f"Mapping for song id {song_id}: {e}") from None
    return mapping


def parse_config(raw: dict[str, Any] | None) -> Config:
    """Parse a config from raw (already loaded) YAML data."""
    raw = expand_config_values(require_dict(raw, "Config"))

    notifiers = {}
    for name, data in require_dict(raw.get("notifiers"), "notifiers").items():
        if name not in NOTIFIER_NAMES:
            raise ValueError(f"Unknown notifier: {name} (expected one of {', '.join(NOTIFIER_NAMES)})")
        notifiers[name] = parse_notifier(name, data)

    return Config(
        notifiers=notifiers,
        mapping=parse_mapping(raw.get("mapping")),
    )


def load_config(path: Path) -> Config:
    """Load configuration from a YAML file."""
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML: {e}") from None

    return parse_config(raw)


def build_table(config: Config) -> IdLookupTable:
    """Create the direct mapping table from a config."""
    return IdLookupTable(config.mapping)


def build_notifier(notifier_config: NotifierConfig, table: IdLookupTable) -> SongIdNotifier:
    """Create a notifier bound to a table."""
    return SongIdNotifier(
        table,
        offset=notifier_config.offset,
        command=notifier_config.command,
        channel=notifier_config.channel,
        little_endian=notifier_config.little_endian,
    )
