"""
Theory tools - MCP tools for browsing the reference tables.

Tools for listing keys, progression patterns, genres and ensemble rules,
and for inspecting the Markov transition model.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_challenge.constants import ErrorMessages
from chuk_mcp_challenge.generators import ChallengeGenerator

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_theory_tools(
    mcp: ChukMCPServer,
    generator: ChallengeGenerator,
) -> dict[str, Any]:
    """
    Register theory catalog tools with the MCP server.

    Args:
        mcp: The MCP server instance
        generator: The challenge generator facade (owns the tables)

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    tables = generator.tables
    catalog = generator.ensemble.catalog

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_keys() -> str:
        """
        List the available keys and their diatonic chords.

        Returns:
            JSON string with keys, tonic first

        Example:
            music_list_keys()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "keys": [
                        {
                            "name": scale.name,
                            "chords": list(scale.chords),
                            "relative_minor": scale.relative_minor,
                        }
                        for scale in tables.keys.values()
                    ],
                    "count": len(tables.keys),
                }
            )
        except Exception as e:
            logger.exception("Failed to list keys")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_keys"] = music_list_keys

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_patterns(genre: str | None = None) -> str:
        """
        List progression patterns, optionally only those a genre favours.

        Args:
            genre: Optional genre filter ('pop', 'jazz', 'rock', 'classical')

        Returns:
            JSON string with patterns (and genre weights when filtered)

        Example:
            music_list_patterns(genre="jazz")
        """
        try:
            profile = tables.genres.get(genre) if genre else None
            if genre and profile is None:
                message = ErrorMessages.GENRE_NOT_FOUND.format(genre=genre)
                return json.dumps({"status": "error", "message": message})

            patterns = []
            for index, pattern in enumerate(tables.patterns):
                weight = profile.weight_for(index) if profile else None
                if profile and weight is None:
                    continue
                entry = {
                    "index": index,
                    "name": pattern.name,
                    "label": pattern.label,
                    "degrees": list(pattern.degrees),
                    "description": pattern.description,
                    "complexity": pattern.complexity.value,
                    "mood": pattern.mood,
                }
                if weight is not None:
                    entry["weight"] = weight
                patterns.append(entry)

            return json.dumps({"status": "success", "patterns": patterns, "count": len(patterns)})
        except Exception as e:
            logger.exception("Failed to list patterns")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_patterns"] = music_list_patterns

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_genres() -> str:
        """
        List genre profiles and ensemble rules.

        Chord genres bias the weighted generator; ensemble genres pick
        instrument roles. Genres without an ensemble rule use the pop rule.

        Returns:
            JSON string with genre profiles, ensemble rules and moods

        Example:
            music_list_genres()
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "chord_genres": {
                        name: {
                            "patterns": [tables.patterns[i].name for i in profile.patterns],
                            "weights": list(profile.weights),
                            "tempos": [
                                {
                                    "name": band,
                                    "min": tables.tempos[band].min_bpm,
                                    "max": tables.tempos[band].max_bpm,
                                }
                                for band in profile.tempos
                            ],
                            "extensions": list(tables.extensions[profile.extensions]),
                        }
                        for name, profile in tables.genres.items()
                    },
                    "ensemble_genres": {
                        name: {
                            "required": list(rule.required),
                            "categories": list(rule.categories),
                            "max_instruments": rule.max_instruments,
                        }
                        for name, rule in catalog.rules.items()
                    },
                    "moods": {mood: list(pool) for mood, pool in catalog.moods.items()},
                }
            )
        except Exception as e:
            logger.exception("Failed to list genres")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_list_genres"] = music_list_genres

    @mcp.tool  # type: ignore[arg-type]
    async def music_describe_markov_model() -> str:
        """
        Show the Markov transition model built from the training corpus.

        Returns:
            JSON string with chord -> next chord -> probability

        Example:
            music_describe_markov_model()
        """
        try:
            model = generator.markov.build_model()
            return json.dumps(
                {
                    "status": "success",
                    "native_key": tables.markov.native_key,
                    "corpus_size": len(tables.markov.progressions),
                    "start_candidates": list(tables.markov.start_candidates),
                    "transitions": {
                        chord: {nxt: round(p, 4) for nxt, p in row.items()}
                        for chord, row in model.to_dict().items()
                    },
                }
            )
        except Exception as e:
            logger.exception("Failed to describe Markov model")
            return json.dumps({"status": "error", "message": str(e)})

    tools["music_describe_markov_model"] = music_describe_markov_model

    return tools
