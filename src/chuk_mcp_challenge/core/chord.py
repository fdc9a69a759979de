"""
Chord primitives - ChordQuality, Chord, diatonic triads.

Chords are a root plus a triad quality plus an optional extension token
('7', 'maj7', 'add9', ...). The extension is kept as written so the
symbol round-trips exactly; intervals are derived from it for voicing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .pitch import Interval, PitchClass
from .scale import Key, ScaleType


@dataclass(frozen=True)
class ChordQuality:
    """
    A triad quality defined by its intervals from the root, plus its symbol suffix.

    Immutable and hashable.
    """

    intervals: frozenset[Interval]
    suffix: str
    name: str = ""

    MAJOR: ClassVar[ChordQuality]
    MINOR: ClassVar[ChordQuality]
    DIMINISHED: ClassVar[ChordQuality]

    @property
    def third(self) -> Interval | None:
        """The third of the triad (if present)."""
        for interval in self.intervals:
            if interval.semitones in (3, 4):
                return interval
        return None

    def __str__(self) -> str:
        return self.name or self.suffix


ChordQuality.MAJOR = ChordQuality(
    frozenset({Interval.UNISON, Interval.MAJOR_THIRD, Interval.PERFECT_FIFTH}), "", "major"
)
ChordQuality.MINOR = ChordQuality(
    frozenset({Interval.UNISON, Interval.MINOR_THIRD, Interval.PERFECT_FIFTH}), "m", "minor"
)
ChordQuality.DIMINISHED = ChordQuality(
    frozenset({Interval.UNISON, Interval.MINOR_THIRD, Interval.TRITONE}), "dim", "diminished"
)

# Longest suffix first so 'dim' is tried before 'm' and 'm' before ''
_QUALITIES_BY_SUFFIX: tuple[ChordQuality, ...] = (
    ChordQuality.DIMINISHED,
    ChordQuality.MINOR,
    ChordQuality.MAJOR,
)

# Intervals each extension token adds on top of the triad
EXTENSION_INTERVALS: dict[str, frozenset[Interval]] = {
    "": frozenset(),
    "7": frozenset({Interval.MINOR_SEVENTH}),
    "maj7": frozenset({Interval.MAJOR_SEVENTH}),
    "m7": frozenset({Interval.MINOR_SEVENTH}),
    "add9": frozenset({Interval.NINTH}),
    "sus4": frozenset({Interval.PERFECT_FOURTH}),
    "sus2": frozenset({Interval.MAJOR_SECOND}),
    "9": frozenset({Interval.MINOR_SEVENTH, Interval.NINTH}),
    "11": frozenset({Interval.MINOR_SEVENTH, Interval.NINTH, Interval.ELEVENTH}),
    "13": frozenset({Interval.MINOR_SEVENTH, Interval.NINTH, Interval.THIRTEENTH}),
    "maj9": frozenset({Interval.MAJOR_SEVENTH, Interval.NINTH}),
    "m9": frozenset({Interval.MINOR_SEVENTH, Interval.NINTH}),
}

# Extensions that replace the third of the triad
_SUSPENSIONS = frozenset({"sus2", "sus4"})
# Extensions whose symbol implies a minor third
_MINOR_EXTENSIONS = frozenset({"m7", "m9"})


@dataclass(frozen=True)
class Chord:
    """
    A concrete chord: root, triad quality and optional extension.

    `prefer_flats` only affects spelling; it is not part of equality.
    """

    root: PitchClass
    quality: ChordQuality
    extension: str = ""
    prefer_flats: bool = False

    def __post_init__(self) -> None:
        if self.extension not in EXTENSION_INTERVALS:
            raise ValueError(f"Unknown chord extension: {self.extension!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chord):
            return NotImplemented
        return (self.root, self.quality, self.extension) == (
            other.root,
            other.quality,
            other.extension,
        )

    def __hash__(self) -> int:
        return hash((self.root, self.quality, self.extension))

    @property
    def symbol(self) -> str:
        """Chord symbol as written in progressions ('C', 'Dm', 'F#dim', 'G7')."""
        return f"{self.root.spell(self.prefer_flats)}{self.quality.suffix}{self.extension}"

    def with_extension(self, extension: str) -> Chord:
        """Return a copy of this chord carrying an extension token."""
        return Chord(self.root, self.quality, extension, self.prefer_flats)

    def intervals(self) -> list[Interval]:
        """All intervals above the root, sorted ascending."""
        tones = set(self.quality.intervals)
        if self.extension in _SUSPENSIONS:
            third = self.quality.third
            if third is not None:
                tones.discard(third)
        elif self.extension in _MINOR_EXTENSIONS:
            tones.discard(Interval.MAJOR_THIRD)
            tones.add(Interval.MINOR_THIRD)
        tones |= EXTENSION_INTERVALS[self.extension]
        return sorted(tones)

    def get_midi_notes(self, octave: int = 3) -> list[int]:
        """
        Get MIDI note numbers for this chord in close root position.

        Args:
            octave: Octave for the root (default 3, C3 = 48)

        Returns:
            List of MIDI note numbers, ascending
        """
        root_midi = self.root.to_midi(octave)
        return [root_midi + interval.semitones for interval in self.intervals()]

    def __str__(self) -> str:
        return self.symbol

    @classmethod
    def parse(cls, symbol: str) -> Chord:
        """
        Parse a chord symbol like 'Am', 'Bbmaj7', 'F#dim', 'Dmm9'.

        The triad suffix is matched first ('dim', 'm', ''), and the rest must
        be a known extension token. 'Dmaj7' therefore reads as D + maj7,
        while 'Dm7' reads as Dm + 7.

        Raises:
            ValueError: If the symbol cannot be parsed
        """
        root, rest = PitchClass.split_symbol(symbol)
        prefer_flats = symbol.strip()[1:2] == "b"
        for quality in _QUALITIES_BY_SUFFIX:
            if not rest.startswith(quality.suffix):
                continue
            extension = rest[len(quality.suffix) :]
            if extension in EXTENSION_INTERVALS:
                return cls(root, quality, extension, prefer_flats)
        raise ValueError(f"Unknown chord symbol: {symbol}")


# Triad quality of each degree per scale type
_DIATONIC_QUALITIES: dict[ScaleType, tuple[ChordQuality, ...]] = {
    ScaleType.MAJOR: (
        ChordQuality.MAJOR,
        ChordQuality.MINOR,
        ChordQuality.MINOR,
        ChordQuality.MAJOR,
        ChordQuality.MAJOR,
        ChordQuality.MINOR,
        ChordQuality.DIMINISHED,
    ),
}


def get_diatonic_chords(key: Key) -> list[Chord]:
    """
    Get the 7 diatonic triads of a key, tonic first.

    Args:
        key: The key

    Returns:
        List of 7 chords spelled for the key
    """
    qualities = _DIATONIC_QUALITIES[key.scale]
    return [
        Chord(key.degree_to_pitch(degree), quality, prefer_flats=key.prefer_flats)
        for degree, quality in enumerate(qualities)
    ]


def diatonic_symbols(key: Key) -> tuple[str, ...]:
    """The 7 diatonic chord symbols of a key ('C', 'Dm', ..., 'Bdim')."""
    return tuple(chord.symbol for chord in get_diatonic_chords(key))
