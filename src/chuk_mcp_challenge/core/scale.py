"""
Scale primitives - ScaleType and Key.

A key is a root pitch plus a scale type. The challenge engine works with
major keys only; the 7 diatonic triads of a key form its "scale" of chord
symbols (index 0 = tonic).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from .pitch import PitchClass

# Keys spelled with flats (F major has Bb, not A#)
_FLAT_ROOTS = frozenset(
    {PitchClass.F, PitchClass.As, PitchClass.Ds, PitchClass.Gs, PitchClass.Cs}
)


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its step pattern in semitones.

    Steps are from one degree to the next (not cumulative) and must sum
    to an octave.
    """

    steps: tuple[int, ...]
    name: str = ""

    MAJOR: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        total = sum(self.steps)
        if total != 12:
            raise ValueError(f"Scale steps must sum to 12 semitones, got {total}")

    def offsets(self) -> list[int]:
        """Semitone offset of each of the 7 degrees from the root."""
        result = [0]
        for step in self.steps[:-1]:
            result.append(result[-1] + step)
        return result

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.steps})"


ScaleType.MAJOR = ScaleType((2, 2, 1, 2, 2, 2, 1), "major")


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    Examples:
        Key(PitchClass.C) = C major
        Key.parse("F") = F major (spelled with flats)
    """

    root: PitchClass
    scale: ScaleType = ScaleType.MAJOR

    @property
    def prefer_flats(self) -> bool:
        """Whether chord roots in this key are spelled with flats."""
        return self.root in _FLAT_ROOTS

    @property
    def name(self) -> str:
        """Catalog name of the key ('C', 'F#', 'Bb')."""
        return self.root.spell(self.prefer_flats)

    def degree_to_pitch(self, degree: int) -> PitchClass:
        """
        Resolve a zero-based scale degree (0 = tonic) to a pitch class.

        Raises:
            ValueError: If degree is outside 0-6
        """
        if not 0 <= degree <= 6:
            raise ValueError(f"Degree must be 0-6, got {degree}")
        return self.root.transpose(self.scale.offsets()[degree])

    def get_pitches(self) -> list[PitchClass]:
        """Get all 7 pitch classes in this key."""
        return [self.degree_to_pitch(d) for d in range(7)]

    def relative_minor(self) -> PitchClass:
        """Root of the relative minor (the sixth degree)."""
        return self.degree_to_pitch(5)

    def __str__(self) -> str:
        return f"{self.name} {self.scale}"

    @classmethod
    def parse(cls, name: str) -> Key:
        """
        Parse a key name like 'C', 'F#', 'Bb' or 'G_major'.

        Only major keys are accepted.
        """
        root_str, _, scale_str = name.strip().partition("_")
        if scale_str and scale_str.lower() != "major":
            raise ValueError(f"Only major keys are supported, got: {name}")
        return cls(PitchClass.parse(root_str))
