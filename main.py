#!/usr/bin/env python3
"""
Song id notifier - Entry point.

Maps media player song ids onto MIDI messages.
"""

from songid_midi.cli import main

if __name__ == "__main__":
    main()
