"""
Theory loader - reads the YAML theory and instrument library.

The library ships with the package. Tables are parsed once, validated,
cached and then shared read-only by every generator.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from chuk_mcp_challenge.core import Key, diatonic_symbols
from chuk_mcp_challenge.models.instruments import EnsembleRule, InstrumentCatalog
from chuk_mcp_challenge.models.theory import (
    GenreProfile,
    KeyScale,
    MarkovCorpus,
    ProgressionPattern,
    SongStructure,
    TempoBand,
    TheoryTables,
)

logger = logging.getLogger(__name__)

LIBRARY_PATH = Path(__file__).parent / "library"


class TheoryLoader:
    """
    Loads theory tables and the instrument catalog from YAML.

    Each file holds one table (keys.yaml, patterns.yaml, ...). A different
    library directory can be supplied to run the generators against
    custom tables.
    """

    def __init__(self, library_path: Path | None = None):
        """
        Initialize the loader.

        Args:
            library_path: Directory holding the YAML tables
        """
        self.library_path = library_path or LIBRARY_PATH
        self._tables: TheoryTables | None = None
        self._instruments: InstrumentCatalog | None = None

    def get_tables(self) -> TheoryTables:
        """Get the theory tables, loading them on first use."""
        if self._tables is None:
            self._tables = self._parse_tables()
            logger.debug(
                "Loaded theory tables: %d keys, %d patterns, %d genres",
                len(self._tables.keys),
                len(self._tables.patterns),
                len(self._tables.genres),
            )
        return self._tables

    def get_instruments(self) -> InstrumentCatalog:
        """Get the instrument catalog, loading it on first use."""
        if self._instruments is None:
            data = self._read("instruments")
            self._instruments = InstrumentCatalog(
                categories={
                    category: {role: tuple(pool) for role, pool in roles.items()}
                    for category, roles in data.get("categories", {}).items()
                },
                rules={
                    genre: EnsembleRule.model_validate(rule)
                    for genre, rule in data.get("rules", {}).items()
                },
                moods={mood: tuple(pool) for mood, pool in data.get("moods", {}).items()},
            )
        return self._instruments

    def clear_cache(self) -> None:
        """Drop cached tables so the next access re-reads the library."""
        self._tables = None
        self._instruments = None

    def _read(self, name: str) -> dict[str, Any]:
        """Read one YAML table file."""
        path = self.library_path / f"{name}.yaml"
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Theory table {path} is not a mapping")
        return data

    def _parse_tables(self) -> TheoryTables:
        """Parse and cross-check every theory table."""
        keys = {scale.name: scale for scale in self._parse_keys(self._read("keys"))}

        patterns = tuple(
            ProgressionPattern.model_validate(p) for p in self._read("patterns").get("patterns", [])
        )

        tempos = {}
        for name, band in self._read("tempos").get("tempos", {}).items():
            low, high = band.get("range", [90, 120])
            tempos[name] = TempoBand(
                name=name,
                min_bpm=low,
                max_bpm=high,
                description=band.get("description", ""),
            )

        extensions = {
            name: tuple(str(token) for token in tokens or [])
            for name, tokens in self._read("extensions").get("extensions", {}).items()
        }

        structures = {
            name: SongStructure(
                name=name,
                sections=tuple(s.get("sections", [])),
                description=s.get("description", ""),
            )
            for name, s in self._read("structures").get("structures", {}).items()
        }

        genres = {
            name: GenreProfile(
                name=name,
                patterns=tuple(g.get("patterns", [])),
                weights=tuple(g.get("weights", [])),
                tempos=tuple(g.get("tempos", [])),
                extensions=g.get("extensions", "basic"),
            )
            for name, g in self._read("genres").get("genres", {}).items()
        }

        markov_data = self._read("markov")
        markov = MarkovCorpus(
            native_key=markov_data.get("native_key", "C"),
            progressions=tuple(tuple(p) for p in markov_data.get("progressions", [])),
            start_candidates=tuple(markov_data.get("start_candidates", [])),
        )

        simple = self._read("simple")

        return TheoryTables(
            keys=keys,
            patterns=patterns,
            extensions=extensions,
            tempos=tempos,
            structures=structures,
            genres=genres,
            markov=markov,
            simple_progressions=tuple(simple.get("progressions", [])),
            simple_instruments=tuple(simple.get("instruments", [])),
        )

    def _parse_keys(self, data: dict[str, Any]) -> list[KeyScale]:
        """Parse key scales and check them against the diatonic triads."""
        scales = []
        for entry in data.get("keys", []):
            scale = KeyScale(
                name=entry["name"],
                chords=tuple(entry["chords"]),
                relative_minor=entry.get("relative_minor", ""),
            )
            expected = diatonic_symbols(Key.parse(scale.name))
            if scale.chords != expected:
                raise ValueError(
                    f"Key {scale.name}: chords {list(scale.chords)} "
                    f"do not match diatonic triads {list(expected)}"
                )
            scales.append(scale)
        return scales


_default_loader: TheoryLoader | None = None


def default_loader() -> TheoryLoader:
    """Process-wide loader for the built-in library."""
    global _default_loader
    if _default_loader is None:
        _default_loader = TheoryLoader()
    return _default_loader
