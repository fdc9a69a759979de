"""
MCP tool implementations.

Tools are organized by domain:
- generation - Challenges, progressions, ensembles, MIDI rendering
- theory - Browsing keys, patterns, genres and the Markov model
"""

from chuk_mcp_challenge.tools.generation import register_generation_tools
from chuk_mcp_challenge.tools.theory import register_theory_tools

__all__ = [
    "register_generation_tools",
    "register_theory_tools",
]
