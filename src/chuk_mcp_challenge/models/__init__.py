"""
Pydantic models for the challenge engine.

This module provides:
- Theory tables: KeyScale, ProgressionPattern, TempoBand, GenreProfile, ...
- Instrument catalog: InstrumentCatalog, EnsembleRule
- Option records: one per generator
- Results: GenerationResult, EnsembleResult, Challenge
"""

from chuk_mcp_challenge.models.instruments import EnsembleRule, InstrumentCatalog
from chuk_mcp_challenge.models.options import (
    EnsembleOptions,
    FunctionalOptions,
    MarkovOptions,
    WeightedOptions,
)
from chuk_mcp_challenge.models.results import (
    Challenge,
    EnsembleResult,
    FunctionalAnalysis,
    GenerationResult,
    PatternAnalysis,
    StructureSuggestion,
    Tempo,
)
from chuk_mcp_challenge.models.theory import (
    GenreProfile,
    KeyScale,
    MarkovCorpus,
    ProgressionPattern,
    SongStructure,
    TempoBand,
    TheoryTables,
)

__all__ = [
    "Challenge",
    "EnsembleOptions",
    "EnsembleResult",
    "EnsembleRule",
    "FunctionalAnalysis",
    "FunctionalOptions",
    "GenerationResult",
    "GenreProfile",
    "InstrumentCatalog",
    "KeyScale",
    "MarkovCorpus",
    "MarkovOptions",
    "PatternAnalysis",
    "ProgressionPattern",
    "SongStructure",
    "StructureSuggestion",
    "Tempo",
    "TempoBand",
    "TheoryTables",
    "WeightedOptions",
]
