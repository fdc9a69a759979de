"""
Tests for the functional harmony generator.
"""

import random
from collections import Counter

import pytest

from chuk_mcp_challenge.constants import Algorithm, Cadence, HarmonicFunction
from chuk_mcp_challenge.generators import HARMONY_RULES, FunctionalHarmonyGenerator
from chuk_mcp_challenge.models import FunctionalOptions

T = HarmonicFunction.TONIC
S = HarmonicFunction.SUBDOMINANT
D = HarmonicFunction.DOMINANT


@pytest.fixture
def functional(tables) -> FunctionalHarmonyGenerator:
    """Functional generator over the built-in tables."""
    return FunctionalHarmonyGenerator(tables)


def chords_for(tables, key: str, function: HarmonicFunction) -> set[str]:
    """Chord symbols realizing a function in a key."""
    scale = tables.get_scale(key)
    return {scale.chords[degree] for degree in HARMONY_RULES[function].degrees}


class TestGenerate:
    """Tests for full generation."""

    def test_plagal_ending(self, functional, tables, rng) -> None:
        """A plagal cadence ends subdominant to tonic."""
        result = functional.generate(
            FunctionalOptions(key="C", length=4, cadence=Cadence.PLAGAL),
            rng,
        )
        assert result.functions[-2:] == [S, T]
        assert result.chords[-2] in {"Dm", "F"}
        assert result.chords[-1] in {"C", "Em", "Am"}
        assert result.analysis.has_proper_cadence
        assert result.cadence == Cadence.PLAGAL

    def test_authentic_ending(self, functional) -> None:
        """Authentic and deceptive cadences end dominant to tonic."""
        for cadence in (Cadence.AUTHENTIC, Cadence.DECEPTIVE):
            result = functional.generate(
                FunctionalOptions(key="G", length=5, cadence=cadence),
                random.Random(2),
            )
            assert result.functions[-2:] == [D, T]

    def test_exact_length(self, functional) -> None:
        """The progression has exactly the requested number of chords."""
        for length in range(1, 10):
            result = functional.generate(
                FunctionalOptions(key="C", length=length),
                random.Random(length),
            )
            assert len(result.chords) == length
            assert len(result.functions) == length

    def test_starts_on_tonic(self, functional) -> None:
        """Progressions of three or more start on tonic."""
        for seed in range(20):
            result = functional.generate(FunctionalOptions(length=6), random.Random(seed))
            assert result.functions[0] == T

    def test_length_one(self, functional, tables, rng) -> None:
        """One chord: a lone tonic, no cadence overwrite."""
        result = functional.generate(
            FunctionalOptions(key="D", length=1, cadence=Cadence.AUTHENTIC),
            rng,
        )
        assert result.functions == [T]
        assert result.chords[0] in chords_for(tables, "D", T)
        assert result.analysis.has_proper_cadence
        assert result.analysis.total_transitions == 0

    def test_length_two(self, functional, rng) -> None:
        """Two chords are the cadence pair."""
        result = functional.generate(
            FunctionalOptions(key="C", length=2, cadence=Cadence.AUTHENTIC),
            rng,
        )
        assert result.functions == [D, T]
        assert result.chords[0] in {"G", "Bdim"}

    def test_chords_realize_functions(self, functional, tables) -> None:
        """Each chord is a degree of its function in the key."""
        for seed in range(20):
            result = functional.generate(FunctionalOptions(key="F", length=8), random.Random(seed))
            for chord, function in zip(result.chords, result.functions):
                assert chord in chords_for(tables, "F", function)

    def test_walk_follows_rules(self, functional) -> None:
        """Before the cadence every step is an allowed transition."""
        for seed in range(30):
            result = functional.generate(FunctionalOptions(length=8), random.Random(seed))
            body = result.functions[:-2]
            for current, following in zip(body, body[1:]):
                assert following in HARMONY_RULES[current].successors

    def test_metadata(self, functional, rng) -> None:
        """Algorithm tag and description."""
        result = functional.generate(
            FunctionalOptions(key="A", cadence=Cadence.DECEPTIVE),
            rng,
        )
        assert result.algorithm == Algorithm.FUNCTIONAL
        assert result.key == "A"
        assert result.description == "Functional harmony (deceptive cadence, key of A)"

    def test_unknown_key(self, functional, tables, rng) -> None:
        """An explicit key outside the catalog is replaced by a catalog key."""
        result = functional.generate(FunctionalOptions(key="Cb"), rng)
        assert result.key in tables.keys
        assert set(result.chords) <= set(tables.get_scale(result.key).chords)


class TestCadenceSelection:
    """Tests for the default cadence weights."""

    def test_weights(self, functional) -> None:
        """Authentic is most common, deceptive least."""
        rng = random.Random(21)
        draws = 10_000
        counts = Counter(functional.select_cadence(rng) for _ in range(draws))
        assert abs(counts[Cadence.AUTHENTIC] / draws - 0.6) < 0.03
        assert abs(counts[Cadence.PLAGAL] / draws - 0.25) < 0.03
        assert abs(counts[Cadence.DECEPTIVE] / draws - 0.15) < 0.03


class TestStateMachine:
    """Tests for function transitions."""

    def test_dominant_resolves(self, functional, rng) -> None:
        """Dominant always goes to tonic."""
        for _ in range(50):
            assert functional.select_next_function(D, rng) == T

    def test_subdominant_successors(self, functional, rng) -> None:
        """Subdominant goes to dominant or tonic."""
        seen = {functional.select_next_function(S, rng) for _ in range(200)}
        assert seen == {D, T}

    def test_apply_cadence_short(self, functional) -> None:
        """Sequences shorter than two are left alone."""
        assert functional.apply_cadence([T], Cadence.PLAGAL) == [T]
        assert functional.apply_cadence([T, T, T], Cadence.PLAGAL) == [T, S, T]


class TestAnalysis:
    """Tests for the harmonic analysis."""

    def test_analyze(self, functional) -> None:
        """Flow, cadence check and variety."""
        analysis = functional.analyze(["C", "F", "G", "C"], [T, S, D, T])
        assert analysis.chord_count == 4
        assert analysis.function_flow == "tonic → subdominant → dominant → tonic"
        assert analysis.has_proper_cadence
        assert analysis.unique_functions == 3
        assert analysis.total_transitions == 3
        assert analysis.complexity == pytest.approx(0.75)

    def test_improper_cadence(self, functional) -> None:
        """Ending off the tonic is flagged."""
        analysis = functional.analyze(["C", "G"], [T, D])
        assert not analysis.has_proper_cadence
        assert analysis.complexity == pytest.approx(1.0)
