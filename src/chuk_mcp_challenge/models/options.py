"""
Per-generator option records.

Each generator takes one of these instead of a loose bag of fields.
Omitted optional fields are resolved by the generator (usually a uniform
random pick from the matching catalog).
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_mcp_challenge.constants import DEFAULT_LENGTH, MARKOV_DEFAULT_KEY, Cadence


class WeightedOptions(BaseModel):
    """Options for the weighted pattern generator."""

    key: str | None = Field(default=None, description="Target key (random if omitted)")
    genre: str | None = Field(default=None, description="Genre (random if omitted)")
    length: int = Field(default=DEFAULT_LENGTH, ge=1, description="Maximum chord count")
    include_extensions: bool = Field(default=True, description="Layer chord extensions")

    model_config = {"frozen": True}


class MarkovOptions(BaseModel):
    """Options for the Markov chain generator."""

    start_chord: str | None = Field(default=None, description="First chord, in the native key")
    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    key: str = Field(default=MARKOV_DEFAULT_KEY, description="Key to transpose into")

    model_config = {"frozen": True}


class FunctionalOptions(BaseModel):
    """Options for the functional harmony generator."""

    key: str | None = None
    length: int = Field(default=DEFAULT_LENGTH, ge=1)
    cadence: Cadence | None = Field(
        default=None, description="Closing cadence (weighted if omitted)"
    )

    model_config = {"frozen": True}


class EnsembleOptions(BaseModel):
    """Options for the instrument ensemble selector."""

    genre: str | None = None
    mood: str | None = None
    size: int | None = Field(default=None, ge=1, description="Maximum ensemble size")

    model_config = {"frozen": True}
