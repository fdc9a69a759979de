"""
Compiler - renders generated progressions to MIDI.
"""

from chuk_mcp_challenge.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    progression_to_events,
    progression_to_midi,
    split_progression,
)

__all__ = [
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "progression_to_events",
    "progression_to_midi",
    "split_progression",
]
