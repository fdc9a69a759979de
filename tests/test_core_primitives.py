"""
Tests for core music primitives.

Tests cover:
- PitchClass and Interval (pitch.py)
- ScaleType and Key (scale.py)
- ChordQuality, Chord, diatonic triads (chord.py)
- weighted_index, weighted_choice, choose (sampling.py)
"""

import random

import pytest

from chuk_mcp_challenge.core import (
    Chord,
    ChordQuality,
    Interval,
    Key,
    PitchClass,
    ScaleType,
    choose,
    diatonic_symbols,
    ensure_rng,
    get_diatonic_chords,
    weighted_choice,
    weighted_index,
)


class FixedRandom(random.Random):
    """Random source whose random() returns queued values."""

    def __init__(self, *values: float):
        super().__init__(0)
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


class TestPitchClass:
    """Tests for PitchClass enum."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.F == 5
        assert PitchClass.B == 11

    def test_transpose_wraps(self) -> None:
        """Transposing wraps around the octave."""
        assert PitchClass.B.transpose(1) == PitchClass.C
        assert PitchClass.C.transpose(-1) == PitchClass.B
        assert PitchClass.G.transpose(7) == PitchClass.D

    def test_to_midi(self) -> None:
        """Convert to MIDI note number."""
        assert PitchClass.C.to_midi(4) == 60
        assert PitchClass.A.to_midi(4) == 69
        assert PitchClass.C.to_midi(3) == 48

    def test_parse(self) -> None:
        """Parse sharps and flats to the same pitch class."""
        assert PitchClass.parse("C#") == PitchClass.Cs
        assert PitchClass.parse("Db") == PitchClass.Cs
        assert PitchClass.parse("Bb") == PitchClass.As

    def test_parse_unknown(self) -> None:
        """Unknown names are rejected."""
        with pytest.raises(ValueError):
            PitchClass.parse("H")

    def test_spell(self) -> None:
        """Spelling follows the flat preference."""
        assert PitchClass.As.spell() == "A#"
        assert PitchClass.As.spell(prefer_flats=True) == "Bb"

    def test_split_symbol(self) -> None:
        """Chord symbols split into root and suffix."""
        assert PitchClass.split_symbol("F#m") == (PitchClass.Fs, "m")
        assert PitchClass.split_symbol("Bbadd9") == (PitchClass.As, "add9")
        assert PitchClass.split_symbol("Dm7") == (PitchClass.D, "m7")
        assert PitchClass.split_symbol("B") == (PitchClass.B, "")


class TestInterval:
    """Tests for Interval."""

    def test_named_intervals(self) -> None:
        """Named intervals have the right size."""
        assert Interval.MAJOR_THIRD.semitones == 4
        assert Interval.PERFECT_FIFTH.semitones == 7
        assert Interval.NINTH.semitones == 14

    def test_comparison(self) -> None:
        """Intervals are ordered by size."""
        assert Interval.MINOR_THIRD < Interval.MAJOR_THIRD
        assert sorted([Interval.PERFECT_FIFTH, Interval.UNISON]) == [
            Interval.UNISON,
            Interval.PERFECT_FIFTH,
        ]

    def test_hashable(self) -> None:
        """Equal intervals hash equally."""
        assert len({Interval(7), Interval.PERFECT_FIFTH}) == 1


class TestKey:
    """Tests for ScaleType and Key."""

    def test_scale_steps_must_sum_to_octave(self) -> None:
        """A scale that does not span an octave is rejected."""
        with pytest.raises(ValueError):
            ScaleType((2, 2, 2))

    def test_major_offsets(self) -> None:
        """Major scale offsets."""
        assert ScaleType.MAJOR.offsets() == [0, 2, 4, 5, 7, 9, 11]

    def test_get_pitches(self) -> None:
        """C major has the white keys."""
        key = Key(PitchClass.C)
        assert key.get_pitches() == [
            PitchClass.C,
            PitchClass.D,
            PitchClass.E,
            PitchClass.F,
            PitchClass.G,
            PitchClass.A,
            PitchClass.B,
        ]

    def test_degree_out_of_range(self) -> None:
        """Degrees are zero-based 0-6."""
        with pytest.raises(ValueError):
            Key(PitchClass.C).degree_to_pitch(7)

    def test_relative_minor(self) -> None:
        """Relative minor is the sixth degree."""
        assert Key(PitchClass.C).relative_minor() == PitchClass.A
        assert Key(PitchClass.G).relative_minor() == PitchClass.E

    def test_parse_key(self) -> None:
        """Parse major key names."""
        assert Key.parse("G").root == PitchClass.G
        assert Key.parse("G_major").root == PitchClass.G
        assert Key.parse("Bb").name == "Bb"

    def test_parse_minor_rejected(self) -> None:
        """Only major keys are supported."""
        with pytest.raises(ValueError):
            Key.parse("A_minor")

    def test_flat_keys(self) -> None:
        """F is spelled with flats, G with sharps."""
        assert Key.parse("F").prefer_flats
        assert not Key.parse("G").prefer_flats


class TestChord:
    """Tests for Chord and ChordQuality."""

    def test_quality_third(self) -> None:
        """Qualities know their third."""
        assert ChordQuality.MAJOR.third == Interval.MAJOR_THIRD
        assert ChordQuality.MINOR.third == Interval.MINOR_THIRD

    def test_symbol(self) -> None:
        """Symbols combine root, triad suffix and extension."""
        assert Chord(PitchClass.D, ChordQuality.MINOR).symbol == "Dm"
        assert Chord(PitchClass.Fs, ChordQuality.DIMINISHED).symbol == "F#dim"
        assert Chord(PitchClass.G, ChordQuality.MAJOR, "7").symbol == "G7"

    def test_unknown_extension(self) -> None:
        """Extensions come from a fixed vocabulary."""
        with pytest.raises(ValueError):
            Chord(PitchClass.C, ChordQuality.MAJOR, "b13")

    def test_with_extension(self) -> None:
        """with_extension keeps the triad."""
        chord = Chord(PitchClass.A, ChordQuality.MINOR).with_extension("m9")
        assert chord.symbol == "Amm9"

    def test_get_midi_notes(self) -> None:
        """Close root-position voicing."""
        assert Chord(PitchClass.C, ChordQuality.MAJOR).get_midi_notes(4) == [60, 64, 67]
        assert Chord.parse("Dm7").get_midi_notes(3) == [50, 53, 57, 60]

    def test_suspension_drops_third(self) -> None:
        """sus chords replace the third."""
        notes = Chord.parse("Csus4").get_midi_notes(4)
        assert notes == [60, 65, 67]

    def test_parse(self) -> None:
        """Parse triads and extended chords."""
        assert Chord.parse("Am") == Chord(PitchClass.A, ChordQuality.MINOR)
        assert Chord.parse("Bdim") == Chord(PitchClass.B, ChordQuality.DIMINISHED)
        assert Chord.parse("Dmaj7") == Chord(PitchClass.D, ChordQuality.MAJOR, "maj7")
        assert Chord.parse("Dm7") == Chord(PitchClass.D, ChordQuality.MINOR, "7")

    def test_parse_keeps_flat_spelling(self) -> None:
        """Flat roots round-trip as flats."""
        assert Chord.parse("Bbadd9").symbol == "Bbadd9"
        assert Chord.parse("F#m").symbol == "F#m"

    def test_parse_invalid(self) -> None:
        """Garbage symbols are rejected."""
        with pytest.raises(ValueError):
            Chord.parse("Cfoo")
        with pytest.raises(ValueError):
            Chord.parse("X")


class TestDiatonicChords:
    """Tests for diatonic triads."""

    def test_c_major(self) -> None:
        """C major triads."""
        assert diatonic_symbols(Key.parse("C")) == ("C", "Dm", "Em", "F", "G", "Am", "Bdim")

    def test_sharp_key(self) -> None:
        """D major is spelled with sharps."""
        assert diatonic_symbols(Key.parse("D")) == ("D", "Em", "F#m", "G", "A", "Bm", "C#dim")

    def test_flat_key(self) -> None:
        """F major is spelled with flats."""
        assert diatonic_symbols(Key.parse("F")) == ("F", "Gm", "Am", "Bb", "C", "Dm", "Edim")

    def test_qualities(self) -> None:
        """I, IV and V are major; vii is diminished."""
        chords = get_diatonic_chords(Key.parse("G"))
        assert chords[0].quality == ChordQuality.MAJOR
        assert chords[1].quality == ChordQuality.MINOR
        assert chords[6].quality == ChordQuality.DIMINISHED


class TestSampling:
    """Tests for the sampling primitives."""

    def test_cumulative_walk(self) -> None:
        """First index whose running sum reaches r."""
        assert weighted_index([0.5, 0.5], FixedRandom(0.5)) == 0
        assert weighted_index([0.5, 0.5], FixedRandom(0.7)) == 1
        assert weighted_index([0.2, 0.3, 0.5], FixedRandom(0.45)) == 1

    def test_underweight_falls_back_to_first(self) -> None:
        """Weights that never reach r select index 0."""
        assert weighted_index([0.1, 0.1], FixedRandom(0.9)) == 0

    def test_normalize(self) -> None:
        """Normalized walk scales r by the total weight."""
        assert weighted_index([2.0, 2.0], FixedRandom(0.6), normalize=True) == 1
        assert weighted_index([2.0, 2.0], FixedRandom(0.4), normalize=True) == 0

    def test_empty_weights(self) -> None:
        """Empty weight vectors are rejected."""
        with pytest.raises(ValueError):
            weighted_index([], random.Random(0))

    def test_weighted_choice_length_mismatch(self) -> None:
        """Items and weights must be parallel."""
        with pytest.raises(ValueError):
            weighted_choice(["a", "b"], [1.0], random.Random(0))

    def test_choose(self) -> None:
        """Uniform pick returns a member; empty is rejected."""
        assert choose(["a", "b", "c"], random.Random(0)) in {"a", "b", "c"}
        with pytest.raises(ValueError):
            choose([], random.Random(0))

    def test_ensure_rng(self) -> None:
        """Given generators pass through; None makes a new one."""
        rng = random.Random(3)
        assert ensure_rng(rng) is rng
        assert isinstance(ensure_rng(None), random.Random)
