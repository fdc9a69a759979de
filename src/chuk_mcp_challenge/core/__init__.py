"""
Core music primitives.

These are the invariants the generators compose on:
- PitchClass: The 12 chromatic pitch classes (0-11)
- Interval: Distance between pitches in semitones
- ScaleType / Key: Root + scale, resolves zero-based degrees to pitches
- ChordQuality / Chord: Triads with optional extension tokens
- weighted_index / choose: The shared sampling primitives
"""

from chuk_mcp_challenge.core.chord import (
    EXTENSION_INTERVALS,
    Chord,
    ChordQuality,
    diatonic_symbols,
    get_diatonic_chords,
)
from chuk_mcp_challenge.core.pitch import Interval, PitchClass
from chuk_mcp_challenge.core.sampling import choose, ensure_rng, weighted_choice, weighted_index
from chuk_mcp_challenge.core.scale import Key, ScaleType

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    # Scale
    "ScaleType",
    "Key",
    # Chord
    "EXTENSION_INTERVALS",
    "ChordQuality",
    "Chord",
    "diatonic_symbols",
    "get_diatonic_chords",
    # Sampling
    "choose",
    "ensure_rng",
    "weighted_choice",
    "weighted_index",
]
