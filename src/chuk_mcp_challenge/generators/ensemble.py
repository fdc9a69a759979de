"""
Instrument ensemble selector.

Fills a genre's required roles, optionally adds a mood instrument, and
trims the result to the requested size.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence

from chuk_mcp_challenge.constants import (
    DEFAULT_ENSEMBLE_SIZE_RANGE,
    FALLBACK_ENSEMBLE_GENRE,
    MOOD_INSTRUMENT_PROBABILITY,
)
from chuk_mcp_challenge.core import choose, ensure_rng
from chuk_mcp_challenge.models.instruments import EnsembleRule, InstrumentCatalog
from chuk_mcp_challenge.models.options import EnsembleOptions
from chuk_mcp_challenge.models.results import EnsembleResult

logger = logging.getLogger(__name__)


class EnsembleSelector:
    """Genre- and mood-aware instrument picker."""

    def __init__(self, catalog: InstrumentCatalog):
        """
        Initialize the selector.

        Args:
            catalog: Instrument categories, genre rules and mood pools
        """
        self.catalog = catalog

    def select(
        self,
        options: EnsembleOptions | None = None,
        rng: random.Random | None = None,
    ) -> EnsembleResult:
        """
        Select an ensemble.

        Args:
            options: Genre, mood and size (each random if omitted)
            rng: Random source (a fresh one if omitted)

        Returns:
            EnsembleResult with at most `size` instruments
        """
        options = options or EnsembleOptions()
        rng = ensure_rng(rng)

        genre = options.genre or choose(self.catalog.genre_names(), rng)
        mood = options.mood or choose(self.catalog.mood_names(), rng)
        size = options.size or rng.randint(*DEFAULT_ENSEMBLE_SIZE_RANGE)

        base = self.base_instrumentation(genre, rng)
        adjusted = self.adjust_for_mood(base, mood, rng)
        limit = min(size, self.rule_for(genre).max_instruments)
        final = self.select_instruments(adjusted, limit, rng)

        logger.debug("Ensemble: genre=%s mood=%s base=%s final=%s", genre, mood, base, final)

        return EnsembleResult(
            instruments=final,
            genre=genre,
            mood=mood,
            size=size,
            description=f"{genre} ({mood}): {len(final)}-instrument ensemble",
        )

    def rule_for(self, genre: str) -> EnsembleRule:
        """Ensemble rule for a genre; unknown genres use the pop rule."""
        rule = self.catalog.rules.get(genre)
        if rule is None:
            rule = self.catalog.rules[FALLBACK_ENSEMBLE_GENRE]
        return rule

    def base_instrumentation(self, genre: str, rng: random.Random) -> list[str]:
        """
        One instrument per required role, in role order.

        For each role a category is picked among the rule's categories that
        provide the role, then an instrument from that category's pool.
        """
        rule = self.rule_for(genre)
        instruments = []
        for role in rule.required:
            category = choose(self.catalog.categories_for_role(rule, role), rng)
            instruments.append(choose(self.catalog.categories[category][role], rng))
        return instruments

    def adjust_for_mood(
        self,
        instruments: Sequence[str],
        mood: str,
        rng: random.Random,
    ) -> list[str]:
        """With probability 0.5, append one instrument from the mood's pool."""
        adjusted = list(instruments)
        pool = self.catalog.moods.get(mood)
        if pool and rng.random() < MOOD_INSTRUMENT_PROBABILITY:
            adjusted.append(choose(pool, rng))
        return adjusted

    def select_instruments(
        self,
        candidates: Sequence[str],
        size: int,
        rng: random.Random,
    ) -> list[str]:
        """Keep the candidates if they fit, otherwise shuffle and truncate."""
        if len(candidates) <= size:
            return list(candidates)
        shuffled = list(candidates)
        rng.shuffle(shuffled)
        return shuffled[:size]
