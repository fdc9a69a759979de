"""
Generation tools - MCP tools that produce challenges.

Tools for generating full challenges, individual progressions with each
algorithm, instrument ensembles, and MIDI renderings of a progression.
"""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_mcp_challenge.compiler import progression_to_midi, split_progression
from chuk_mcp_challenge.constants import (
    MARKOV_DEFAULT_KEY,
    Cadence,
    ErrorMessages,
    GenerationMode,
)
from chuk_mcp_challenge.generators import ChallengeGenerator, resolve_mode
from chuk_mcp_challenge.models.options import (
    EnsembleOptions,
    FunctionalOptions,
    MarkovOptions,
    WeightedOptions,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _rng(seed: int | None) -> random.Random:
    """Per-call random source; a seed makes the call reproducible."""
    return random.Random(seed)


def _cadence(value: str | None) -> Cadence | None:
    """Parse a cadence tag; unknown tags fall back to the weighted default."""
    if not value:
        return None
    try:
        return Cadence(value)
    except ValueError:
        logger.warning("Unknown cadence %r, using a weighted pick", value)
        return None


def register_generation_tools(
    mcp: ChukMCPServer,
    generator: ChallengeGenerator,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register challenge generation tools with the MCP server.

    Args:
        mcp: The MCP server instance
        generator: The challenge generator facade
        output_dir: Directory for rendered MIDI files

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_generate_challenge(
        mode: str = "simple",
        key: str | None = None,
        genre: str | None = None,
        length: int = 4,
        include_extensions: bool = True,
        start_chord: str | None = None,
        cadence: str | None = None,
        mood: str | None = None,
        size: int | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Generate a practice challenge: a chord progression plus an ensemble.

        Modes:
        - simple: one progression and one instrument pairing from flat lists
        - advanced: genre-weighted pattern with tempo, structure and analysis
        - markov: random walk over a corpus-trained chord transition model
        - functional: tonic/subdominant/dominant walk ending on a cadence

        Unknown modes fall back to simple. Options that don't apply to the
        chosen mode are ignored.

        Args:
            mode: Generation mode
            key: Target key ('C', 'G', 'D', 'A', 'E', 'F')
            genre: Genre for advanced mode ('pop', 'jazz', 'rock', 'classical');
                for other modes it overrides the ensemble genre
            length: Number of chords
            include_extensions: Add chord extensions in advanced mode
            start_chord: First chord for markov mode (in C major)
            cadence: Cadence for functional mode ('authentic', 'plagal', 'deceptive')
            mood: Ensemble mood ('bright', 'dark', 'energetic', 'calm', 'mysterious')
            size: Maximum ensemble size
            seed: Random seed for a reproducible result

        Returns:
            JSON string with the challenge

        Example:
            music_generate_challenge(mode="advanced", genre="jazz", key="F")
        """
        try:
            resolved = resolve_mode(mode)
            challenge = generator.generate(
                resolved,
                weighted=WeightedOptions(
                    key=key,
                    genre=genre,
                    length=length,
                    include_extensions=include_extensions,
                ),
                markov=MarkovOptions(
                    start_chord=start_chord,
                    length=length,
                    key=key or MARKOV_DEFAULT_KEY,
                ),
                functional=FunctionalOptions(
                    key=key,
                    length=length,
                    cadence=_cadence(cadence),
                ),
                # In advanced mode the genre already drives the progression
                ensemble=EnsembleOptions(
                    genre=None if resolved is GenerationMode.ADVANCED else genre,
                    mood=mood,
                    size=size,
                ),
                rng=_rng(seed),
            )
            return json.dumps({"status": "success", "challenge": challenge.to_dict()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate challenge")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_generate_challenge"] = music_generate_challenge

    @mcp.tool  # type: ignore[arg-type]
    async def music_generate_progression(
        key: str | None = None,
        genre: str | None = None,
        length: int = 4,
        include_extensions: bool = True,
        seed: int | None = None,
    ) -> str:
        """
        Generate a genre-weighted progression with tempo and analysis.

        Args:
            key: Target key (random if omitted)
            genre: Genre (random if omitted)
            length: Maximum number of chords (patterns are truncated, never padded)
            include_extensions: Add extensions to interior chords
            seed: Random seed for a reproducible result

        Returns:
            JSON string with the progression

        Example:
            music_generate_progression(genre="pop", key="G", length=4)
        """
        try:
            result = generator.weighted.generate(
                WeightedOptions(
                    key=key,
                    genre=genre,
                    length=length,
                    include_extensions=include_extensions,
                ),
                _rng(seed),
            )
            return json.dumps({"status": "success", "progression": result.to_dict()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_generate_progression"] = music_generate_progression

    @mcp.tool  # type: ignore[arg-type]
    async def music_generate_markov(
        start_chord: str | None = None,
        length: int = 4,
        key: str = MARKOV_DEFAULT_KEY,
        seed: int | None = None,
    ) -> str:
        """
        Generate a progression by Markov chain.

        The model is trained on a fixed corpus in C major and the walk is
        transposed into the requested key.

        Args:
            start_chord: First chord in C major (random tonic/subdominant chord if omitted)
            length: Number of chords
            key: Target key
            seed: Random seed for a reproducible result

        Returns:
            JSON string with the progression and its path probability

        Example:
            music_generate_markov(start_chord="Am", key="D")
        """
        try:
            result = generator.markov.generate(
                MarkovOptions(start_chord=start_chord, length=length, key=key),
                _rng(seed),
            )
            return json.dumps({"status": "success", "progression": result.to_dict()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate Markov progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_generate_markov"] = music_generate_markov

    @mcp.tool  # type: ignore[arg-type]
    async def music_generate_functional(
        key: str | None = None,
        length: int = 4,
        cadence: str | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Generate a progression from harmonic functions.

        Starts on tonic and forces the last two chords to the cadence.

        Args:
            key: Target key (random if omitted)
            length: Number of chords
            cadence: 'authentic', 'plagal' or 'deceptive' (weighted random if omitted)
            seed: Random seed for a reproducible result

        Returns:
            JSON string with the progression, function path and analysis

        Example:
            music_generate_functional(key="C", cadence="plagal")
        """
        try:
            result = generator.functional.generate(
                FunctionalOptions(
                    key=key,
                    length=length,
                    cadence=_cadence(cadence),
                ),
                _rng(seed),
            )
            return json.dumps({"status": "success", "progression": result.to_dict()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate functional progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_generate_functional"] = music_generate_functional

    @mcp.tool  # type: ignore[arg-type]
    async def music_select_ensemble(
        genre: str | None = None,
        mood: str | None = None,
        size: int | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Select an instrument ensemble.

        Args:
            genre: 'pop', 'jazz', 'orchestral' or 'world' (others use pop rules)
            mood: 'bright', 'dark', 'energetic', 'calm' or 'mysterious'
            size: Maximum number of instruments (random 2-4 if omitted)
            seed: Random seed for a reproducible result

        Returns:
            JSON string with the ensemble

        Example:
            music_select_ensemble(genre="jazz", mood="calm", size=3)
        """
        try:
            result = generator.ensemble.select(
                EnsembleOptions(genre=genre, mood=mood, size=size),
                _rng(seed),
            )
            return json.dumps({"status": "success", "ensemble": result.to_dict()})
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to select ensemble")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_select_ensemble"] = music_select_ensemble

    @mcp.tool  # type: ignore[arg-type]
    async def music_export_challenge_midi(
        chords: str,
        tempo: int | None = None,
        bars_per_chord: int = 1,
        filename: str = "challenge.mid",
    ) -> str:
        """
        Render a progression to a MIDI file of block chords.

        Args:
            chords: Progression display string ('C - Am7 - F - G')
            tempo: Tempo in BPM (120 if omitted)
            bars_per_chord: Bars each chord is held
            filename: Output file name inside the output directory

        Returns:
            JSON string with the output path

        Example:
            music_export_challenge_midi(chords="C - Am - F - G", tempo=96)
        """
        try:
            symbols = split_progression(chords)
            if not symbols:
                return json.dumps({"status": "error", "message": ErrorMessages.NO_CHORDS})

            midi = progression_to_midi(symbols, tempo_bpm=tempo, bars_per_chord=bars_per_chord)
            output_dir.mkdir(parents=True, exist_ok=True)
            path = output_dir / Path(filename).name
            midi.save(str(path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "chords": symbols,
                    "bars": len(symbols) * bars_per_chord,
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export MIDI")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_export_challenge_midi"] = music_export_challenge_midi

    return tools
