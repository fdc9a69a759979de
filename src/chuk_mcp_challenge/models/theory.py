"""
Theory table models - the static reference data the generators read.

Every table row is frozen. The tables are loaded once from the YAML
library and shared read-only across calls.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_mcp_challenge.constants import Complexity, ErrorMessages, StructureType


class KeyScale(BaseModel):
    """The 7 diatonic chord symbols of a major key, tonic first."""

    name: str = Field(..., description="Key name ('C', 'G', 'F')")
    chords: tuple[str, ...] = Field(..., description="Diatonic triads, index 0 = tonic")
    relative_minor: str = Field(..., description="Relative minor chord symbol")

    model_config = {"frozen": True}

    @field_validator("chords")
    @classmethod
    def _seven_chords(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if len(v) != 7:
            raise ValueError(f"A scale has exactly 7 chords, got {len(v)}")
        return v

    def chord_for_degree(self, degree: int) -> str:
        """Map a zero-based degree to its chord symbol."""
        if not 0 <= degree <= 6:
            raise ValueError(f"Degree must be 0-6, got {degree}")
        return self.chords[degree]


class ProgressionPattern(BaseModel):
    """A named progression expressed as zero-based scale degrees."""

    name: str = Field(..., description="Pattern identifier")
    label: str = Field("", description="Original catalog name")
    degrees: tuple[int, ...] = Field(..., min_length=1)
    description: str = Field("", description="Roman numeral summary")
    complexity: Complexity = Complexity.INTERMEDIATE
    mood: str = ""

    model_config = {"frozen": True}

    @field_validator("degrees")
    @classmethod
    def _degrees_in_scale(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        for degree in v:
            if not 0 <= degree <= 6:
                raise ValueError(f"Degree must be 0-6, got {degree}")
        return v


class TempoBand(BaseModel):
    """A named BPM range."""

    name: str
    min_bpm: int = Field(..., ge=20, le=300)
    max_bpm: int = Field(..., ge=20, le=300)
    description: str = ""

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _ordered(self) -> TempoBand:
        if self.min_bpm > self.max_bpm:
            raise ValueError(f"Tempo band {self.name}: min_bpm > max_bpm")
        return self

    def contains(self, bpm: int) -> bool:
        """Check if a tempo is inside the band (inclusive)."""
        return self.min_bpm <= bpm <= self.max_bpm


class SongStructure(BaseModel):
    """A section template (verse, chorus, ...)."""

    name: StructureType
    sections: tuple[str, ...]
    description: str = ""

    model_config = {"frozen": True}


class GenreProfile(BaseModel):
    """
    How a genre biases the weighted generator.

    `patterns` are indices into the pattern catalog and `weights` is the
    parallel probability vector. Weights are data; they may drift from 1.0.
    """

    name: str
    patterns: tuple[int, ...]
    weights: tuple[float, ...]
    tempos: tuple[str, ...] = Field(default_factory=tuple)
    extensions: str = "basic"

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _parallel_weights(self) -> GenreProfile:
        if len(self.patterns) != len(self.weights):
            raise ValueError(
                f"Genre {self.name}: {len(self.patterns)} patterns but {len(self.weights)} weights"
            )
        return self

    def weight_for(self, pattern_index: int) -> float | None:
        """Weight of a catalog pattern in this genre, or None if not a candidate."""
        if pattern_index not in self.patterns:
            return None
        return self.weights[self.patterns.index(pattern_index)]


class MarkovCorpus(BaseModel):
    """Training progressions for the Markov generator, all in the native key."""

    native_key: str = "C"
    progressions: tuple[tuple[str, ...], ...]
    start_candidates: tuple[str, ...]

    model_config = {"frozen": True}


class TheoryTables(BaseModel):
    """All music-theory reference data, keyed for lookup."""

    keys: dict[str, KeyScale]
    patterns: tuple[ProgressionPattern, ...]
    extensions: dict[str, tuple[str, ...]]
    tempos: dict[str, TempoBand]
    structures: dict[StructureType, SongStructure]
    genres: dict[str, GenreProfile]
    markov: MarkovCorpus
    simple_progressions: tuple[str, ...] = Field(default_factory=tuple)
    simple_instruments: tuple[str, ...] = Field(default_factory=tuple)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _references_resolve(self) -> TheoryTables:
        for genre in self.genres.values():
            for index in genre.patterns:
                if not 0 <= index < len(self.patterns):
                    raise ValueError(f"Genre {genre.name}: unknown pattern index {index}")
            for tempo in genre.tempos:
                if tempo not in self.tempos:
                    raise ValueError(f"Genre {genre.name}: unknown tempo band {tempo}")
            if genre.extensions not in self.extensions:
                raise ValueError(f"Genre {genre.name}: unknown extension set {genre.extensions}")
        return self

    def key_names(self) -> list[str]:
        """Key catalog in declaration order."""
        return list(self.keys)

    def genre_names(self) -> list[str]:
        """Genre catalog in declaration order."""
        return list(self.genres)

    def known_key(self, key: str | None) -> str | None:
        """The key if it is in the catalog, otherwise None."""
        return key if key in self.keys else None

    def get_scale(self, key: str) -> KeyScale:
        """
        Get the scale for a key.

        Raises:
            ValueError: If the key is not in the catalog
        """
        scale = self.keys.get(key)
        if scale is None:
            raise ValueError(ErrorMessages.UNKNOWN_KEY.format(key=key, keys=", ".join(self.keys)))
        return scale

    def pattern_index(self, pattern: ProgressionPattern) -> int:
        """Catalog index of a pattern, or -1."""
        try:
            return self.patterns.index(pattern)
        except ValueError:
            return -1
