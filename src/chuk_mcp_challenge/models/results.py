"""
Result records returned by the generators.

Results are created fresh per call and owned by the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from chuk_mcp_challenge.constants import (
    Algorithm,
    Cadence,
    Complexity,
    EducationalValue,
    GenerationMode,
    GenreFit,
    HarmonicFunction,
    HarmonicRhythm,
    StructureType,
)
from chuk_mcp_challenge.models.theory import ProgressionPattern


class Tempo(BaseModel):
    """A sampled tempo."""

    bpm: int
    band: str
    description: str = ""


class StructureSuggestion(BaseModel):
    """Suggested song form for a progression."""

    type: StructureType
    sections: list[str]
    description: str = ""


class PatternAnalysis(BaseModel):
    """Musical-quality labels for a weighted-pattern result."""

    complexity: Complexity
    mood: str
    harmonic_rhythm: HarmonicRhythm
    genre_fit: GenreFit
    educational_value: EducationalValue


class FunctionalAnalysis(BaseModel):
    """Harmonic analysis of a functional-harmony result."""

    chord_count: int
    function_flow: str
    has_proper_cadence: bool
    unique_functions: int
    total_transitions: int
    complexity: float


class GenerationResult(BaseModel):
    """
    A generated chord progression.

    Optional fields are filled only by the generators that produce them.
    """

    chords: list[str]
    key: str
    algorithm: Algorithm
    description: str = ""
    genre: str | None = None

    # Weighted pattern generator
    basic_chords: list[str] | None = None
    pattern: ProgressionPattern | None = None
    tempo: Tempo | None = None
    structure: StructureSuggestion | None = None
    analysis: PatternAnalysis | FunctionalAnalysis | None = None

    # Markov generator
    original_key: str | None = None
    original_chords: list[str] | None = None
    probability: float | None = None

    # Functional generator
    cadence: Cadence | None = None
    functions: list[HarmonicFunction] | None = None

    @property
    def display(self) -> str:
        """Progression as shown to a player ('C - Am - F - G')."""
        return " - ".join(self.chords)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dictionary without unset fields."""
        data = self.model_dump(mode="json", exclude_none=True)
        data["display"] = self.display
        return data


class EnsembleResult(BaseModel):
    """A selected instrument ensemble."""

    instruments: list[str]
    genre: str
    mood: str
    size: int
    description: str = ""

    @property
    def display(self) -> str:
        """Ensemble as shown to a player ('Piano + Cello')."""
        return " + ".join(self.instruments)

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dictionary."""
        data = self.model_dump(mode="json")
        data["display"] = self.display
        return data


class Challenge(BaseModel):
    """A full practice prompt: progression + ensemble + metadata."""

    mode: GenerationMode
    chord: str = Field(..., description="Progression display string")
    instrument: str = Field(..., description="Ensemble display string")
    chord_info: GenerationResult | None = None
    instrument_info: EnsembleResult | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dictionary."""
        data: dict[str, Any] = {
            "mode": self.mode.value,
            "chord": self.chord,
            "instrument": self.instrument,
        }
        if self.chord_info is not None:
            data["chord_info"] = self.chord_info.to_dict()
        if self.instrument_info is not None:
            data["instrument_info"] = self.instrument_info.to_dict()
        return data
