"""
Weighted pattern generator.

Picks a progression pattern with genre-conditioned weights, places it in a
key, optionally layers chord extensions, and attaches a tempo, a song
structure suggestion and a short musical analysis.
"""

from __future__ import annotations

import logging
import random

from chuk_mcp_challenge.constants import (
    EXTENSION_PROBABILITY,
    FALLBACK_TEMPO_BAND,
    GENRE_FIT_EXCELLENT,
    GENRE_FIT_GOOD,
    HARMONIC_RHYTHM_THRESHOLDS,
    Algorithm,
    Complexity,
    EducationalValue,
    GenreFit,
    HarmonicRhythm,
    StructureType,
)
from chuk_mcp_challenge.core import choose, ensure_rng, weighted_index
from chuk_mcp_challenge.models.options import WeightedOptions
from chuk_mcp_challenge.models.results import (
    GenerationResult,
    PatternAnalysis,
    StructureSuggestion,
    Tempo,
)
from chuk_mcp_challenge.models.theory import ProgressionPattern, TheoryTables

logger = logging.getLogger(__name__)

_STRUCTURE_BY_COMPLEXITY: dict[Complexity, StructureType] = {
    Complexity.BEGINNER: StructureType.SIMPLE,
    Complexity.INTERMEDIATE: StructureType.STANDARD,
    Complexity.ADVANCED: StructureType.COMPLEX,
}

_EDUCATIONAL_VALUE: dict[Complexity, EducationalValue] = {
    Complexity.BEGINNER: EducationalValue.HIGH,
    Complexity.INTERMEDIATE: EducationalValue.MEDIUM,
    Complexity.ADVANCED: EducationalValue.LOW,
}


class WeightedPatternGenerator:
    """
    Genre-weighted pattern sampler.

    Stateless apart from the read-only tables; every method that draws
    randomness takes the generator explicitly.
    """

    def __init__(self, tables: TheoryTables):
        """
        Initialize the generator.

        Args:
            tables: Theory tables to read patterns, keys and genres from
        """
        self.tables = tables

    def generate(
        self,
        options: WeightedOptions | None = None,
        rng: random.Random | None = None,
    ) -> GenerationResult:
        """
        Generate a progression.

        Args:
            options: Key, genre, length and extension switch
            rng: Random source (a fresh one if omitted)

        Returns:
            GenerationResult with tempo, structure and analysis filled
        """
        options = options or WeightedOptions()
        rng = ensure_rng(rng)

        key = self.tables.known_key(options.key)
        if key is None:
            if options.key:
                logger.warning("Unknown key %r, picking one from the catalog", options.key)
            key = choose(self.tables.key_names(), rng)
        genre = options.genre or choose(self.tables.genre_names(), rng)

        pattern = self.select_pattern(genre, rng)
        basic_chords = self.convert_pattern_to_chords(pattern, key, options.length)
        chords = (
            self.apply_chord_extensions(basic_chords, genre, rng)
            if options.include_extensions
            else list(basic_chords)
        )
        tempo = self.generate_tempo(genre, rng)
        structure = self.suggest_song_structure(pattern.complexity)
        analysis = self.analyze_progression(pattern, tempo, genre)

        logger.debug("Weighted: genre=%s key=%s pattern=%s", genre, key, pattern.name)

        return GenerationResult(
            chords=chords,
            basic_chords=basic_chords,
            key=key,
            algorithm=Algorithm.WEIGHTED,
            genre=genre,
            pattern=pattern,
            tempo=tempo,
            structure=structure,
            analysis=analysis,
            description=f"{genre} style: {pattern.description} "
            f"({tempo.description} {tempo.bpm} BPM)",
        )

    def select_pattern(self, genre: str, rng: random.Random) -> ProgressionPattern:
        """
        Pick a pattern using the genre's weight vector.

        Unknown genres fall back to a uniform pick over the whole catalog.
        """
        profile = self.tables.genres.get(genre)
        if profile is None:
            return choose(self.tables.patterns, rng)

        index = weighted_index(profile.weights, rng)
        return self.tables.patterns[profile.patterns[index]]

    def convert_pattern_to_chords(
        self,
        pattern: ProgressionPattern,
        key: str,
        length: int,
    ) -> list[str]:
        """
        Instantiate a pattern in a key.

        Only the first `length` degrees are used; short patterns are never
        padded or repeated.
        """
        scale = self.tables.get_scale(key)
        return [scale.chord_for_degree(degree) for degree in pattern.degrees[:length]]

    def apply_chord_extensions(
        self,
        chords: list[str],
        genre: str,
        rng: random.Random,
    ) -> list[str]:
        """
        Append extension tokens to interior chords.

        The first and last chord keep their plain triad. Each interior chord
        independently gets one token from the genre's vocabulary with
        probability EXTENSION_PROBABILITY.
        """
        profile = self.tables.genres.get(genre)
        vocabulary = self.tables.extensions.get(profile.extensions if profile else "basic", ())
        if not vocabulary:
            return list(chords)

        result = []
        last = len(chords) - 1
        for index, chord in enumerate(chords):
            if index in (0, last):
                result.append(chord)
            elif rng.random() < EXTENSION_PROBABILITY:
                result.append(f"{chord}{choose(vocabulary, rng)}")
            else:
                result.append(chord)
        return result

    def generate_tempo(self, genre: str, rng: random.Random) -> Tempo:
        """Pick one of the genre's tempo bands, then a BPM inside it."""
        profile = self.tables.genres.get(genre)
        band_names = profile.tempos if profile and profile.tempos else (FALLBACK_TEMPO_BAND,)
        band = self.tables.tempos[choose(band_names, rng)]
        return Tempo(
            bpm=rng.randint(band.min_bpm, band.max_bpm),
            band=band.name,
            description=band.description,
        )

    def suggest_song_structure(self, complexity: Complexity | str) -> StructureSuggestion:
        """Map pattern complexity to a structure template."""
        try:
            structure_type = _STRUCTURE_BY_COMPLEXITY[Complexity(complexity)]
        except ValueError:
            structure_type = StructureType.STANDARD
        structure = self.tables.structures[structure_type]
        return StructureSuggestion(
            type=structure_type,
            sections=list(structure.sections),
            description=structure.description,
        )

    def analyze_progression(
        self,
        pattern: ProgressionPattern,
        tempo: Tempo,
        genre: str,
    ) -> PatternAnalysis:
        """Label the result's pace, genre fit and teaching value."""
        return PatternAnalysis(
            complexity=pattern.complexity,
            mood=pattern.mood,
            harmonic_rhythm=harmonic_rhythm(tempo.bpm),
            genre_fit=self.genre_fit(pattern, genre),
            educational_value=educational_value(pattern.complexity),
        )

    def genre_fit(self, pattern: ProgressionPattern, genre: str) -> GenreFit:
        """Bucket the pattern's weight within the genre."""
        profile = self.tables.genres.get(genre)
        if profile is None:
            return GenreFit.UNKNOWN

        weight = profile.weight_for(self.tables.pattern_index(pattern))
        if weight is None:
            return GenreFit.POOR
        if weight > GENRE_FIT_EXCELLENT:
            return GenreFit.EXCELLENT
        if weight > GENRE_FIT_GOOD:
            return GenreFit.GOOD
        return GenreFit.FAIR


def harmonic_rhythm(bpm: int) -> HarmonicRhythm:
    """Pace label for a tempo."""
    for upper, label in HARMONIC_RHYTHM_THRESHOLDS:
        if bpm < upper:
            return label
    return HarmonicRhythm.VERY_FAST


def educational_value(complexity: Complexity | str) -> EducationalValue:
    """Teaching value of a pattern; unknown complexity reads as medium."""
    try:
        return _EDUCATIONAL_VALUE[Complexity(complexity)]
    except ValueError:
        return EducationalValue.MEDIUM
