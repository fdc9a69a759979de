"""
Challenge generator - the single entry point for a practice prompt.

Dispatches on a mode tag to one of the chord generators, then asks the
ensemble selector for instruments in a matching genre and bundles both.
"""

from __future__ import annotations

import logging
import random

from chuk_mcp_challenge.constants import (
    FUNCTIONAL_ENSEMBLE_GENRE,
    MARKOV_ENSEMBLE_GENRE,
    GenerationMode,
)
from chuk_mcp_challenge.core import choose, ensure_rng
from chuk_mcp_challenge.generators.ensemble import EnsembleSelector
from chuk_mcp_challenge.generators.functional import FunctionalHarmonyGenerator
from chuk_mcp_challenge.generators.markov import MarkovChainGenerator
from chuk_mcp_challenge.generators.weighted import WeightedPatternGenerator
from chuk_mcp_challenge.models.instruments import InstrumentCatalog
from chuk_mcp_challenge.models.options import (
    EnsembleOptions,
    FunctionalOptions,
    MarkovOptions,
    WeightedOptions,
)
from chuk_mcp_challenge.models.results import Challenge, GenerationResult
from chuk_mcp_challenge.models.theory import TheoryTables
from chuk_mcp_challenge.theory import TheoryLoader, default_loader

logger = logging.getLogger(__name__)


def resolve_mode(mode: GenerationMode | str | None) -> GenerationMode:
    """Parse a mode tag; anything unrecognized is 'simple'."""
    if isinstance(mode, GenerationMode):
        return mode
    try:
        return GenerationMode(mode)
    except ValueError:
        logger.debug("Unknown generation mode %r, using simple", mode)
        return GenerationMode.SIMPLE


class ChallengeGenerator:
    """
    Facade over the chord generators and the ensemble selector.

    Example:
        generator = ChallengeGenerator.from_library()
        challenge = generator.generate("functional", rng=random.Random(7))
        print(challenge.chord, "/", challenge.instrument)
    """

    def __init__(self, tables: TheoryTables, instruments: InstrumentCatalog):
        """
        Initialize the facade.

        Args:
            tables: Theory tables shared by the chord generators
            instruments: Instrument catalog for the ensemble selector
        """
        self.tables = tables
        self.weighted = WeightedPatternGenerator(tables)
        self.markov = MarkovChainGenerator(tables)
        self.functional = FunctionalHarmonyGenerator(tables)
        self.ensemble = EnsembleSelector(instruments)

    @classmethod
    def from_library(cls, loader: TheoryLoader | None = None) -> ChallengeGenerator:
        """Build a facade from a theory library (the built-in one by default)."""
        loader = loader or default_loader()
        return cls(loader.get_tables(), loader.get_instruments())

    def generate(
        self,
        mode: GenerationMode | str | None = GenerationMode.SIMPLE,
        *,
        weighted: WeightedOptions | None = None,
        markov: MarkovOptions | None = None,
        functional: FunctionalOptions | None = None,
        ensemble: EnsembleOptions | None = None,
        rng: random.Random | None = None,
    ) -> Challenge:
        """
        Generate one challenge.

        Args:
            mode: 'simple', 'advanced', 'markov' or 'functional'
            weighted: Options for advanced mode
            markov: Options for markov mode
            functional: Options for functional mode
            ensemble: Ensemble options; an explicit genre overrides the
                genre derived from the chord generator
            rng: Random source (a fresh one if omitted)

        Returns:
            Challenge with display strings and, except in simple mode,
            the full chord and ensemble results
        """
        resolved = resolve_mode(mode)
        rng = ensure_rng(rng)

        if resolved is GenerationMode.SIMPLE:
            return self.generate_simple(rng)

        chord_result: GenerationResult
        if resolved is GenerationMode.ADVANCED:
            chord_result = self.weighted.generate(weighted, rng)
            ensemble_genre = chord_result.genre
        elif resolved is GenerationMode.MARKOV:
            chord_result = self.markov.generate(markov, rng)
            ensemble_genre = MARKOV_ENSEMBLE_GENRE
        else:
            chord_result = self.functional.generate(functional, rng)
            ensemble_genre = FUNCTIONAL_ENSEMBLE_GENRE

        ensemble_options = ensemble or EnsembleOptions()
        if ensemble_options.genre is None:
            ensemble_options = ensemble_options.model_copy(update={"genre": ensemble_genre})
        instrument_result = self.ensemble.select(ensemble_options, rng)

        logger.info(
            "Generated %s challenge: %s / %s",
            resolved.value,
            chord_result.display,
            instrument_result.display,
        )

        return Challenge(
            mode=resolved,
            chord=chord_result.display,
            instrument=instrument_result.display,
            chord_info=chord_result,
            instrument_info=instrument_result,
        )

    def generate_simple(self, rng: random.Random | None = None) -> Challenge:
        """Two independent uniform picks from the flat catalogs."""
        rng = ensure_rng(rng)
        return Challenge(
            mode=GenerationMode.SIMPLE,
            chord=choose(self.tables.simple_progressions, rng),
            instrument=choose(self.tables.simple_instruments, rng),
        )
