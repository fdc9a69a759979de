"""
Theory library - the static reference tables behind every generator.

Keys, progression patterns, genre weights, tempo bands, song structures,
the Markov training corpus and the instrument catalog all live as YAML
under `library/` and are loaded once by the TheoryLoader.
"""

from chuk_mcp_challenge.theory.loader import LIBRARY_PATH, TheoryLoader, default_loader

__all__ = [
    "LIBRARY_PATH",
    "TheoryLoader",
    "default_loader",
]
