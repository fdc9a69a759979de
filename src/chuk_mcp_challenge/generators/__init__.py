"""
Generators - turn the theory tables into concrete challenges.

- WeightedPatternGenerator: genre-weighted pattern selection
- MarkovChainGenerator: corpus-trained first-order random walk
- FunctionalHarmonyGenerator: tonic/subdominant/dominant state machine
- EnsembleSelector: genre roles + mood colouring + size bound
- ChallengeGenerator: mode dispatch over all of the above
"""

from chuk_mcp_challenge.generators.challenge import ChallengeGenerator, resolve_mode
from chuk_mcp_challenge.generators.ensemble import EnsembleSelector
from chuk_mcp_challenge.generators.functional import (
    CADENCE_PAIRS,
    HARMONY_RULES,
    FunctionalHarmonyGenerator,
    FunctionRule,
)
from chuk_mcp_challenge.generators.markov import MarkovChainGenerator, TransitionModel
from chuk_mcp_challenge.generators.weighted import (
    WeightedPatternGenerator,
    educational_value,
    harmonic_rhythm,
)

__all__ = [
    "CADENCE_PAIRS",
    "HARMONY_RULES",
    "ChallengeGenerator",
    "EnsembleSelector",
    "FunctionRule",
    "FunctionalHarmonyGenerator",
    "MarkovChainGenerator",
    "TransitionModel",
    "WeightedPatternGenerator",
    "educational_value",
    "harmonic_rhythm",
    "resolve_mode",
]
