"""
Functional harmony generator.

A three-state machine over tonic / subdominant / dominant. The walk
always starts on tonic, the last two positions are forced to the
requested cadence, and each function is realized as one of its scale
degrees in the target key.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from chuk_mcp_challenge.constants import CADENCE_WEIGHTS, Algorithm, Cadence, HarmonicFunction
from chuk_mcp_challenge.core import choose, ensure_rng, weighted_choice
from chuk_mcp_challenge.models.options import FunctionalOptions
from chuk_mcp_challenge.models.results import FunctionalAnalysis, GenerationResult
from chuk_mcp_challenge.models.theory import TheoryTables

logger = logging.getLogger(__name__)

T = HarmonicFunction.TONIC
S = HarmonicFunction.SUBDOMINANT
D = HarmonicFunction.DOMINANT


@dataclass(frozen=True)
class FunctionRule:
    """Scale degrees realizing a function and where it may go next."""

    degrees: tuple[int, ...]
    successors: tuple[HarmonicFunction, ...]
    probabilities: tuple[float, ...]


HARMONY_RULES: dict[HarmonicFunction, FunctionRule] = {
    T: FunctionRule(degrees=(0, 2, 5), successors=(S, D, T), probabilities=(0.4, 0.4, 0.2)),
    S: FunctionRule(degrees=(1, 3), successors=(D, T), probabilities=(0.7, 0.3)),
    D: FunctionRule(degrees=(4, 6), successors=(T,), probabilities=(1.0,)),
}

# Final two functions for each cadence. Deceptive resolves to the tonic
# function set, which contains vi.
CADENCE_PAIRS: dict[Cadence, tuple[HarmonicFunction, HarmonicFunction]] = {
    Cadence.AUTHENTIC: (D, T),
    Cadence.PLAGAL: (S, T),
    Cadence.DECEPTIVE: (D, T),
}


class FunctionalHarmonyGenerator:
    """Generates progressions from harmonic-function transitions."""

    def __init__(
        self,
        tables: TheoryTables,
        rules: dict[HarmonicFunction, FunctionRule] | None = None,
    ):
        """
        Initialize the generator.

        Args:
            tables: Theory tables holding the key scales
            rules: Function rules (defaults to HARMONY_RULES)
        """
        self.tables = tables
        self.rules = rules or HARMONY_RULES

    def generate(
        self,
        options: FunctionalOptions | None = None,
        rng: random.Random | None = None,
    ) -> GenerationResult:
        """
        Generate a progression.

        Args:
            options: Key, length and cadence
            rng: Random source (a fresh one if omitted)

        Returns:
            GenerationResult with the function path and analysis
        """
        options = options or FunctionalOptions()
        rng = ensure_rng(rng)

        key = self.tables.known_key(options.key)
        if key is None:
            if options.key:
                logger.warning("Unknown key %r, picking one from the catalog", options.key)
            key = choose(self.tables.key_names(), rng)
        scale = self.tables.get_scale(key)
        cadence = options.cadence or self.select_cadence(rng)

        functions = self.build_function_sequence(options.length, rng)
        functions = self.apply_cadence(functions, cadence)
        chords = [
            scale.chord_for_degree(self.select_degree(function, rng)) for function in functions
        ]

        logger.debug("Functional: key=%s cadence=%s functions=%s", key, cadence.value, functions)

        return GenerationResult(
            chords=chords,
            key=key,
            algorithm=Algorithm.FUNCTIONAL,
            cadence=cadence,
            functions=functions,
            analysis=self.analyze(chords, functions),
            description=f"Functional harmony ({cadence.value} cadence, key of {key})",
        )

    def select_cadence(self, rng: random.Random) -> Cadence:
        """Draw a cadence with the default weights."""
        return weighted_choice(list(CADENCE_WEIGHTS), list(CADENCE_WEIGHTS.values()), rng)

    def select_next_function(
        self,
        current: HarmonicFunction,
        rng: random.Random,
    ) -> HarmonicFunction:
        """Sample the function that follows `current`."""
        rule = self.rules[current]
        return weighted_choice(rule.successors, rule.probabilities, rng)

    def build_function_sequence(self, length: int, rng: random.Random) -> list[HarmonicFunction]:
        """Walk the state machine from tonic for `length` positions."""
        sequence = [T]
        while len(sequence) < length:
            sequence.append(self.select_next_function(sequence[-1], rng))
        return sequence

    def apply_cadence(
        self,
        sequence: Sequence[HarmonicFunction],
        cadence: Cadence,
    ) -> list[HarmonicFunction]:
        """Overwrite the last two functions with the cadence pair (length >= 2 only)."""
        result = list(sequence)
        if len(result) >= 2:
            result[-2], result[-1] = CADENCE_PAIRS[cadence]
        return result

    def select_degree(self, function: HarmonicFunction, rng: random.Random) -> int:
        """Uniform pick among the scale degrees realizing a function."""
        return choose(self.rules[function].degrees, rng)

    def analyze(
        self,
        chords: Sequence[str],
        functions: Sequence[HarmonicFunction],
    ) -> FunctionalAnalysis:
        """Report the function path, cadence correctness and variety."""
        unique = len(set(functions))
        return FunctionalAnalysis(
            chord_count=len(chords),
            function_flow=" → ".join(f.value for f in functions),
            has_proper_cadence=bool(functions) and functions[-1] == T,
            unique_functions=unique,
            total_transitions=max(len(functions) - 1, 0),
            complexity=unique / len(functions) if functions else 0.0,
        )
