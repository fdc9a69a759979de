"""
MIDI rendering of a generated progression.

Each chord is voiced as a close root-position block chord held for a
whole number of 4/4 bars, so a player can loop the challenge in a DAW.
All operations are deterministic: same chords → same MIDI file.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_challenge.core import Chord

# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480
BEATS_PER_BAR = 4
DEFAULT_TEMPO_BPM = 120
DEFAULT_VELOCITY = 90
CHORD_OCTAVE = 3


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def split_progression(progression: str) -> list[str]:
    """Split a display string like 'C - Am - F - G' into chord symbols."""
    return [chord.strip() for chord in progression.split(" - ") if chord.strip()]


def progression_to_events(
    chords: Sequence[str],
    bars_per_chord: int = 1,
    velocity: int = DEFAULT_VELOCITY,
    octave: int = CHORD_OCTAVE,
    channel: int = 0,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Voice each chord symbol as a block chord.

    Args:
        chords: Chord symbols ('C', 'Dm7', 'Bbadd9')
        bars_per_chord: Bars each chord is held
        velocity: Note velocity
        octave: Octave of each chord root
        channel: MIDI channel
        ticks_per_beat: Resolution

    Returns:
        Note events, chord by chord

    Raises:
        ValueError: If a chord symbol cannot be parsed
    """
    if bars_per_chord < 1:
        raise ValueError(f"bars_per_chord must be >= 1, got {bars_per_chord}")

    span = ticks_per_beat * BEATS_PER_BAR * bars_per_chord
    events: list[MidiEvent] = []
    for index, symbol in enumerate(chords):
        chord = Chord.parse(symbol)
        for pitch in chord.get_midi_notes(octave):
            events.append(
                MidiEvent(
                    pitch=pitch,
                    start_ticks=index * span,
                    duration_ticks=span,
                    velocity=velocity,
                    channel=channel,
                )
            )
    return events


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    track.append(MetaMessage("set_tempo", tempo=int(60_000_000 / tempo_bpm), time=0))
    track.append(MetaMessage("time_signature", numerator=BEATS_PER_BAR, denominator=4, time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick so repeated pitches retrigger cleanly
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def progression_to_midi(
    chords: Sequence[str],
    tempo_bpm: int | None = None,
    bars_per_chord: int = 1,
) -> MidiFile:
    """
    Render chord symbols straight to a MidiFile.

    Args:
        chords: Chord symbols in playing order
        tempo_bpm: Tempo (120 BPM if None)
        bars_per_chord: Bars each chord is held

    Returns:
        A mido MidiFile
    """
    events = progression_to_events(chords, bars_per_chord=bars_per_chord)
    return events_to_midi(events, tempo_bpm=tempo_bpm or DEFAULT_TEMPO_BPM)
