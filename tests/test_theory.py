"""
Tests for the theory library.

Tests the YAML loader and the cross-checks on the table models.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from chuk_mcp_challenge.constants import Complexity, StructureType
from chuk_mcp_challenge.models import (
    EnsembleRule,
    GenreProfile,
    InstrumentCatalog,
    KeyScale,
    ProgressionPattern,
    TempoBand,
)
from chuk_mcp_challenge.theory import LIBRARY_PATH, TheoryLoader


class TestTheoryLoader:
    """Tests for loading the built-in library."""

    def test_keys(self, tables) -> None:
        """Six major keys, tonic first."""
        assert tables.key_names() == ["C", "G", "D", "A", "E", "F"]
        assert tables.get_scale("F").chords[3] == "Bb"
        assert tables.get_scale("G").relative_minor == "Em"

    def test_unknown_key(self, tables) -> None:
        """Unknown keys raise with the catalog listed."""
        with pytest.raises(ValueError, match="Unknown key"):
            tables.get_scale("H")

    def test_patterns(self, tables) -> None:
        """Pattern catalog keeps its order."""
        assert len(tables.patterns) == 8
        assert tables.patterns[0].name == "pop-standard"
        assert tables.patterns[0].degrees == (0, 5, 3, 4)
        assert tables.patterns[3].name == "jazz-turnaround"
        assert tables.patterns[7].complexity == Complexity.ADVANCED

    def test_genres(self, tables) -> None:
        """Genre profiles reference patterns by index."""
        assert tables.genre_names() == ["pop", "jazz", "rock", "classical"]
        jazz = tables.genres["jazz"]
        assert jazz.patterns == (3, 4)
        assert jazz.weights == (0.6, 0.4)
        assert tables.extensions[jazz.extensions] == ("9", "11", "13", "maj9", "m9")

    def test_tempos(self, tables) -> None:
        """Tempo bands carry inclusive ranges."""
        ballad = tables.tempos["ballad"]
        assert (ballad.min_bpm, ballad.max_bpm) == (60, 80)
        assert ballad.contains(80)
        assert not ballad.contains(81)

    def test_structures(self, tables) -> None:
        """Structure templates keyed by type."""
        assert tables.structures[StructureType.SIMPLE].sections == ("verse", "chorus")
        assert len(tables.structures[StructureType.COMPLEX].sections) == 10

    def test_markov_corpus(self, tables) -> None:
        """Corpus is in C and uses diatonic ii."""
        assert tables.markov.native_key == "C"
        assert len(tables.markov.progressions) == 15
        chords = {chord for progression in tables.markov.progressions for chord in progression}
        assert "D" not in chords
        assert chords <= set(tables.get_scale("C").chords)

    def test_simple_catalogs(self, tables) -> None:
        """Simple mode has 25 progressions and 25 pairings."""
        assert len(tables.simple_progressions) == 25
        assert len(tables.simple_instruments) == 25

    def test_instruments(self, instruments) -> None:
        """Instrument catalog loads rules and moods."""
        assert instruments.genre_names() == ["pop", "jazz", "orchestral", "world"]
        assert "calm" in instruments.mood_names()
        assert instruments.rules["jazz"].max_instruments == 5

    def test_cache(self) -> None:
        """Tables are parsed once until the cache is cleared."""
        loader = TheoryLoader()
        first = loader.get_tables()
        assert loader.get_tables() is first
        loader.clear_cache()
        assert loader.get_tables() is not first


class TestCustomLibrary:
    """Tests for loading a library from another directory."""

    def _copy_library(self, target: Path) -> None:
        for path in LIBRARY_PATH.glob("*.yaml"):
            (target / path.name).write_text(path.read_text(encoding="utf-8"), encoding="utf-8")

    def test_wrong_key_chords(self, temp_dir: Path) -> None:
        """Key scales must match the diatonic triads."""
        self._copy_library(temp_dir)
        data = yaml.safe_load((temp_dir / "keys.yaml").read_text(encoding="utf-8"))
        data["keys"][0]["chords"][1] = "D"
        (temp_dir / "keys.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(ValueError, match="diatonic"):
            TheoryLoader(temp_dir).get_tables()

    def test_genre_references_unknown_pattern(self, temp_dir: Path) -> None:
        """Genre pattern indices must exist."""
        self._copy_library(temp_dir)
        data = yaml.safe_load((temp_dir / "genres.yaml").read_text(encoding="utf-8"))
        data["genres"]["pop"]["patterns"] = [0, 1, 99]
        (temp_dir / "genres.yaml").write_text(yaml.safe_dump(data), encoding="utf-8")

        with pytest.raises(ValidationError):
            TheoryLoader(temp_dir).get_tables()

    def test_non_mapping_file(self, temp_dir: Path) -> None:
        """Table files must be YAML mappings."""
        self._copy_library(temp_dir)
        (temp_dir / "keys.yaml").write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ValueError, match="not a mapping"):
            TheoryLoader(temp_dir).get_tables()


class TestTableModels:
    """Tests for model-level validation."""

    def test_key_scale_needs_seven_chords(self) -> None:
        """A key scale has exactly 7 chords."""
        with pytest.raises(ValidationError):
            KeyScale(name="C", chords=("C", "Dm"), relative_minor="Am")

    def test_chord_for_degree(self) -> None:
        """Degrees map to chord symbols."""
        scale = KeyScale(
            name="C",
            chords=("C", "Dm", "Em", "F", "G", "Am", "Bdim"),
            relative_minor="Am",
        )
        assert scale.chord_for_degree(4) == "G"
        with pytest.raises(ValueError):
            scale.chord_for_degree(7)

    def test_pattern_degrees_in_scale(self) -> None:
        """Pattern degrees are 0-6."""
        with pytest.raises(ValidationError):
            ProgressionPattern(name="bad", degrees=(0, 7))

    def test_pattern_needs_degrees(self) -> None:
        """Empty patterns are rejected."""
        with pytest.raises(ValidationError):
            ProgressionPattern(name="empty", degrees=())

    def test_tempo_band_ordered(self) -> None:
        """min_bpm <= max_bpm."""
        with pytest.raises(ValidationError):
            TempoBand(name="backwards", min_bpm=120, max_bpm=90)

    def test_genre_weights_parallel(self) -> None:
        """Weights and patterns have the same length."""
        with pytest.raises(ValidationError):
            GenreProfile(name="bad", patterns=(0, 1), weights=(1.0,))

    def test_weight_for(self) -> None:
        """Weight lookup by catalog index."""
        profile = GenreProfile(name="pop", patterns=(0, 2), weights=(0.7, 0.3))
        assert profile.weight_for(2) == 0.3
        assert profile.weight_for(1) is None

    def test_catalog_requires_resolvable_roles(self) -> None:
        """Every required role must be provided by an allowed category."""
        with pytest.raises(ValidationError):
            InstrumentCatalog(
                categories={"acoustic": {"lead": ("Piano",)}},
                rules={
                    "pop": EnsembleRule(
                        required=("lead", "bass"),
                        categories=("acoustic",),
                        max_instruments=3,
                    )
                },
                moods={},
            )
