#!/usr/bin/env python3
"""
Example: Generate practice challenges in every mode.

Prints one challenge per mode and renders the functional one to MIDI so
you can loop it in a DAW while practising.

Usage:
    python examples/generate_challenges.py
    # Creates: examples/output/functional_challenge.mid
"""

import random
from pathlib import Path

from chuk_mcp_challenge.compiler import progression_to_midi
from chuk_mcp_challenge.constants import Cadence, GenerationMode
from chuk_mcp_challenge.generators import ChallengeGenerator
from chuk_mcp_challenge.models import EnsembleOptions, FunctionalOptions, WeightedOptions


def main() -> None:
    """Generate one challenge per mode."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    generator = ChallengeGenerator.from_library()
    rng = random.Random(2024)

    for mode in GenerationMode:
        challenge = generator.generate(mode, rng=rng)
        print(f"[{mode.value}]")
        print(f"  Play:  {challenge.chord}")
        print(f"  On:    {challenge.instrument}")
        if challenge.chord_info is not None:
            print(f"  About: {challenge.chord_info.description}")

    # Jazz ballad in F with a small combo
    print("\nGenerating a jazz challenge in F...")
    jazz = generator.generate(
        GenerationMode.ADVANCED,
        weighted=WeightedOptions(key="F", genre="jazz"),
        ensemble=EnsembleOptions(mood="calm", size=3),
        rng=rng,
    )
    print(f"  {jazz.chord}  /  {jazz.instrument}")
    print(f"  Form: {' → '.join(jazz.chord_info.structure.sections)}")

    # Plagal cadence, rendered to MIDI
    print("\nGenerating functional_challenge.mid...")
    functional = generator.functional.generate(
        FunctionalOptions(key="G", length=6, cadence=Cadence.PLAGAL),
        rng,
    )
    print(f"  {functional.display}")
    print(f"  Functions: {functional.analysis.function_flow}")
    midi = progression_to_midi(functional.chords, tempo_bpm=90, bars_per_chord=2)
    midi.save(str(output_dir / "functional_challenge.mid"))
    print(f"  Created: {output_dir / 'functional_challenge.mid'}")


if __name__ == "__main__":
    main()
