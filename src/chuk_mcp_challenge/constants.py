"""
Constants and enums for the challenge engine.

No magic strings - use enums for constrained values.
"""

from enum import Enum


class Complexity(str, Enum):
    """Difficulty tier of a progression pattern."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class StructureType(str, Enum):
    """Song-structure template size."""

    SIMPLE = "simple"
    STANDARD = "standard"
    COMPLEX = "complex"


class HarmonicFunction(str, Enum):
    """Structural role of a chord."""

    TONIC = "tonic"  # Stable
    SUBDOMINANT = "subdominant"  # Preparation
    DOMINANT = "dominant"  # Tension, wants to resolve


class Cadence(str, Enum):
    """Closing function pair of a progression."""

    AUTHENTIC = "authentic"  # V-I
    PLAGAL = "plagal"  # IV-I
    DECEPTIVE = "deceptive"  # V-vi, modeled as V-(tonic function)


class GenerationMode(str, Enum):
    """Which generator the facade dispatches to."""

    SIMPLE = "simple"
    ADVANCED = "advanced"
    MARKOV = "markov"
    FUNCTIONAL = "functional"


class Algorithm(str, Enum):
    """Tag recorded on every generation result."""

    WEIGHTED = "weighted"
    MARKOV = "markov"
    FUNCTIONAL = "functional"


class HarmonicRhythm(str, Enum):
    """Pace label derived from BPM."""

    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"
    VERY_FAST = "very_fast"


class GenreFit(str, Enum):
    """How well a pattern fits the requested genre."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    UNKNOWN = "unknown"


class EducationalValue(str, Enum):
    """How useful a pattern is for a learner."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Harmonic rhythm thresholds (exclusive upper bounds, BPM)
HARMONIC_RHYTHM_THRESHOLDS: tuple[tuple[int, HarmonicRhythm], ...] = (
    (80, HarmonicRhythm.SLOW),
    (120, HarmonicRhythm.MODERATE),
    (160, HarmonicRhythm.FAST),
)

# Genre-fit weight buckets (exclusive lower bounds)
GENRE_FIT_EXCELLENT = 0.3
GENRE_FIT_GOOD = 0.1

# Probability that an interior chord receives an extension
EXTENSION_PROBABILITY = 0.3

# Probability that a mood instrument is added to the ensemble
MOOD_INSTRUMENT_PROBABILITY = 0.5

# Probability used for a transition the Markov model has never seen
MIN_TRANSITION_PROBABILITY = 0.01

# Progressions up to this length avoid repeating chords in the Markov walk
MARKOV_DEDUP_MAX_LENGTH = 4

# Ensemble size drawn when none is requested (inclusive)
DEFAULT_ENSEMBLE_SIZE_RANGE: tuple[int, int] = (2, 4)

# Cadence weights when no cadence is requested
CADENCE_WEIGHTS: dict[Cadence, float] = {
    Cadence.AUTHENTIC: 0.6,
    Cadence.PLAGAL: 0.25,
    Cadence.DECEPTIVE: 0.15,
}

# Genre handed to the ensemble selector by generators that do not pick one
MARKOV_ENSEMBLE_GENRE = "pop"
FUNCTIONAL_ENSEMBLE_GENRE = "classical"
FALLBACK_ENSEMBLE_GENRE = "pop"
FALLBACK_TEMPO_BAND = "mid-tempo"

DEFAULT_LENGTH = 4
MARKOV_DEFAULT_KEY = "C"


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_KEY = "Unknown key: '{key}'. Expected one of: {keys}."
    GENRE_NOT_FOUND = "Genre not found: {genre}"
    NO_CHORDS = "No chords given. Expected a progression like 'C - Am - F - G'."
