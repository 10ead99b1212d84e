"""
Command-line interface for the song id notifier.
"""

import argparse
import sys
from pathlib import Path
from typing import TextIO

from .config import Config, NOTIFIER_NAMES, build_notifier, build_table, load_config, parse_number
from .dispatcher import create_dispatcher
from .messages import MidiMsg


def _load(args: argparse.Namespace) -> Config | None:
    config_path = Path(args.config)

    if not config_path.exists():
        print(f"Error: Config file not found: {config_path}")
        return None

    try:
        return load_config(config_path)
    except ValueError as e:
        print(f"Error: Invalid config {config_path}: {e}")
        return None


def print_msg(msg: MidiMsg) -> None:
    print(f"  -> {msg}")


def cmd_encode(args: argparse.Namespace) -> int:
    """Print the message for each song id."""
    config = _load(args)
    if config is None:
        return 1

    notifier = build_notifier(config.notifier(args.notifier), build_table(config))

    for song_id in args.song_ids:
        print(f"{song_id}: {notifier.get_msg(song_id)}")

    return 0


def watch(config: Config, stream: TextIO) -> None:
    """Feed song change events from a text stream into a dispatcher."""
    dispatcher = create_dispatcher(config, print_msg)

    for line in stream:
        event = line.strip()
        if not event:
            continue

        if event.lower() == "stop":
            print("[stop]")
            dispatcher.song_stopped()
            continue

        try:
            song_id = parse_number(event)
        except ValueError:
            print(f"  -> Warning: Ignoring invalid event '{event}'")
            continue

        print(f"[song {song_id}]")
        dispatcher.song_changed(song_id)


def cmd_watch(args: argparse.Namespace) -> int:
    """Read song changes from stdin and print the messages to send."""
    config = _load(args)
    if config is None:
        return 1

    try:
        watch(config, sys.stdin)
    except KeyboardInterrupt:
        print("\nStopped.")

    return 0


def cmd_show_config(args: argparse.Namespace) -> int:
    """Print the resolved configuration."""
    config = _load(args)
    if config is None:
        return 1

    table = build_table(config)

    print("Notifiers:")
    for name in NOTIFIER_NAMES:
        print(f"  {name}: {build_notifier(config.notifier(name), table)!r}")

    print()
    print(f"Direct mappings ({len(table)}):")
    for song_id, entry in sorted(table.items()):
        print(f"  {song_id}: {entry.data1:02X} {entry.data2:02X}")

    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="songid_midi",
        description="Map media player song ids onto MIDI messages",
    )
    parser.add_argument(
        "-c", "--config",
        default="config.yaml",
        help="Path to config file (default: config.yaml)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # encode command
    encode_parser = subparsers.add_parser("encode", help="Print the message for song ids")
    encode_parser.add_argument(
        "-n", "--notifier",
        choices=NOTIFIER_NAMES,
        default="start",
        help="Notifier to use (default: start)",
    )
    encode_parser.add_argument("song_ids", metavar="SONG_ID", type=parse_number, nargs="+")
    encode_parser.set_defaults(func=cmd_encode)

    # watch command
    watch_parser = subparsers.add_parser("watch", help="Read song changes from stdin")
    watch_parser.set_defaults(func=cmd_watch)

    # show-config command
    show_parser = subparsers.add_parser("show-config", help="Print the resolved configuration")
    show_parser.set_defaults(func=cmd_show_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    # Ensure unbuffered output
    sys.stdout.reconfigure(line_buffering=True)

    sys.exit(args.func(args))
