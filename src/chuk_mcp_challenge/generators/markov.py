"""
Markov chain generator.

A first-order transition model is counted from a fixed corpus of
progressions in the native key (C major). Each request rebuilds the model,
walks it from a start chord, then transposes the walk into the target key.
"""

from __future__ import annotations

import logging
import random
from collections import Counter, defaultdict
from collections.abc import Sequence

from chuk_mcp_challenge.constants import (
    MARKOV_DEDUP_MAX_LENGTH,
    MIN_TRANSITION_PROBABILITY,
    Algorithm,
)
from chuk_mcp_challenge.core import choose, ensure_rng, weighted_index
from chuk_mcp_challenge.models.options import MarkovOptions
from chuk_mcp_challenge.models.results import GenerationResult
from chuk_mcp_challenge.models.theory import TheoryTables

logger = logging.getLogger(__name__)


class TransitionModel:
    """
    chord -> next chord -> probability.

    Rows are normalized counts, so each row sums to 1.0. The model is a
    pure function of its corpus and is never updated after construction.
    """

    def __init__(self, transitions: dict[str, dict[str, float]]):
        self.transitions = transitions

    @classmethod
    def from_corpus(cls, corpus: Sequence[Sequence[str]]) -> TransitionModel:
        """
        Count every adjacent (current, next) pair and normalize each row.

        Args:
            corpus: Training progressions

        Returns:
            A new TransitionModel
        """
        counts: defaultdict[str, Counter[str]] = defaultdict(Counter)
        for progression in corpus:
            for current, following in zip(progression, progression[1:]):
                counts[current][following] += 1

        transitions = {}
        for chord, row in counts.items():
            total = row.total()
            transitions[chord] = {nxt: count / total for nxt, count in row.items()}
        return cls(transitions)

    def successors(self, chord: str) -> dict[str, float]:
        """Outgoing distribution of a chord (empty if never seen as a source)."""
        return self.transitions.get(chord, {})

    def probability(self, current: str, following: str) -> float | None:
        """Transition probability, or None if the model never saw it."""
        return self.transitions.get(current, {}).get(following)

    def vocabulary(self) -> list[str]:
        """Every chord that has an outgoing distribution."""
        return list(self.transitions)

    def sequence_probability(self, progression: Sequence[str]) -> float:
        """
        Product of the transition probabilities along a path.

        Unseen transitions count as MIN_TRANSITION_PROBABILITY so the score
        is always positive.
        """
        total = 1.0
        for current, following in zip(progression, progression[1:]):
            prob = self.probability(current, following)
            total *= prob if prob else MIN_TRANSITION_PROBABILITY
        return total

    def to_dict(self) -> dict[str, dict[str, float]]:
        """Plain nested dict copy of the model."""
        return {chord: dict(row) for chord, row in self.transitions.items()}


class MarkovChainGenerator:
    """Samples progressions from a corpus-trained transition model."""

    def __init__(self, tables: TheoryTables):
        """
        Initialize the generator.

        Args:
            tables: Theory tables holding the corpus and key scales
        """
        self.tables = tables

    def build_model(self) -> TransitionModel:
        """Build a fresh transition model from the corpus."""
        return TransitionModel.from_corpus(self.tables.markov.progressions)

    def generate(
        self,
        options: MarkovOptions | None = None,
        rng: random.Random | None = None,
    ) -> GenerationResult:
        """
        Generate a progression by random walk.

        Args:
            options: Start chord, length and target key
            rng: Random source (a fresh one if omitted)

        Returns:
            GenerationResult with the transposed chords and the path probability
        """
        options = options or MarkovOptions()
        rng = ensure_rng(rng)
        model = self.build_model()
        start_candidates = self.tables.markov.start_candidates

        current = options.start_chord or choose(start_candidates, rng)
        progression = [current]

        for _ in range(options.length - 1):
            following = self.select_next_chord(current, model, progression, rng)
            if following is None:
                following = self._fallback_chord(current, model, progression, rng)
            progression.append(following)
            current = following

        chords = self.transpose(progression, options.key)
        probability = model.sequence_probability(progression)

        logger.debug("Markov: %s -> %s (p=%.5f)", progression, chords, probability)

        return GenerationResult(
            chords=chords,
            key=options.key,
            algorithm=Algorithm.MARKOV,
            original_key=self.tables.markov.native_key,
            original_chords=progression,
            probability=probability,
            description=f"Markov chain progression (key of {options.key})",
        )

    def select_next_chord(
        self,
        current: str,
        model: TransitionModel,
        progression: Sequence[str],
        rng: random.Random,
    ) -> str | None:
        """
        Sample the next chord from the current chord's distribution.

        While the progression is short, chords already used are excluded;
        if that leaves nothing the unrestricted row is used.

        Returns:
            The next chord, or None if the current chord has no successors
        """
        row = model.successors(current)
        if not row:
            return None

        candidates = list(row.items())
        if len(progression) <= MARKOV_DEDUP_MAX_LENGTH:
            unused = [(chord, p) for chord, p in candidates if chord not in progression]
            if unused:
                candidates = unused

        index = weighted_index([p for _, p in candidates], rng, normalize=True)
        return candidates[index][0]

    def _fallback_chord(
        self,
        current: str,
        model: TransitionModel,
        progression: Sequence[str],
        rng: random.Random,
    ) -> str:
        """Pick a theory-appropriate unused chord, else any chord in the model."""
        appropriate = [
            chord
            for chord in self.tables.markov.start_candidates
            if chord != current and chord not in progression
        ]
        if appropriate:
            return choose(appropriate, rng)
        return choose(model.vocabulary(), rng)

    def transposition_table(self, target_key: str) -> dict[str, str]:
        """
        Chord substitution table from the native key into a target key.

        Degree i of the native scale maps to degree i of the target scale.
        Unknown target keys map onto the native key itself (identity).
        """
        native = self.tables.get_scale(self.tables.markov.native_key)
        target = self.tables.keys.get(target_key, native)
        return dict(zip(native.chords, target.chords))

    def transpose(self, progression: Sequence[str], target_key: str) -> list[str]:
        """Map each chord into the target key; unknown chords pass through."""
        table = self.transposition_table(target_key)
        return [table.get(chord, chord) for chord in progression]
