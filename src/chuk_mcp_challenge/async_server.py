#!/usr/bin/env python3
"""
Async Practice Challenge MCP Server using chuk-mcp-server

This server provides MCP tools that generate practice challenges for
musicians: a chord progression to play paired with instruments to play
it on. Progressions come from one of four modes of increasing musical
sophistication.

The server provides tools for:
- Generating full challenges (simple, advanced, markov, functional)
- Generating progressions with a single algorithm
- Selecting instrument ensembles by genre, mood and size
- Rendering progressions to MIDI files
- Browsing keys, patterns, genres and the Markov model
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_challenge.generators import ChallengeGenerator
from chuk_mcp_challenge.theory import LIBRARY_PATH, TheoryLoader
from chuk_mcp_challenge.tools import register_generation_tools, register_theory_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-challenge")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
OUTPUT_DIR = BASE_PATH / "output"

# Load the theory library once; every tool shares it
theory_loader = TheoryLoader(library_path=LIBRARY_PATH)
generator = ChallengeGenerator.from_library(theory_loader)

# Register all tools
generation_tools = register_generation_tools(mcp, generator, OUTPUT_DIR)
theory_tools = register_theory_tools(mcp, generator)

# Export tool functions for direct access
music_generate_challenge = generation_tools["music_generate_challenge"]
music_generate_progression = generation_tools["music_generate_progression"]
music_generate_markov = generation_tools["music_generate_markov"]
music_generate_functional = generation_tools["music_generate_functional"]
music_select_ensemble = generation_tools["music_select_ensemble"]
music_export_challenge_midi = generation_tools["music_export_challenge_midi"]

music_list_keys = theory_tools["music_list_keys"]
music_list_patterns = theory_tools["music_list_patterns"]
music_list_genres = theory_tools["music_list_genres"]
music_describe_markov_model = theory_tools["music_describe_markov_model"]

logger.info("CHUK Challenge MCP Server initialized")
logger.info(f"  Library path: {LIBRARY_PATH}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
