"""
Pytest configuration and shared fixtures.
"""

import random
import tempfile
from pathlib import Path

import pytest

from chuk_mcp_challenge.generators import ChallengeGenerator
from chuk_mcp_challenge.models import InstrumentCatalog, TheoryTables
from chuk_mcp_challenge.theory import TheoryLoader


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture(scope="session")
def loader() -> TheoryLoader:
    """Loader for the built-in theory library."""
    return TheoryLoader()


@pytest.fixture(scope="session")
def tables(loader: TheoryLoader) -> TheoryTables:
    """Theory tables from the built-in library."""
    return loader.get_tables()


@pytest.fixture(scope="session")
def instruments(loader: TheoryLoader) -> InstrumentCatalog:
    """Instrument catalog from the built-in library."""
    return loader.get_instruments()


@pytest.fixture
def generator(loader: TheoryLoader) -> ChallengeGenerator:
    """Challenge facade over the built-in library."""
    return ChallengeGenerator.from_library(loader)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)
