from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Tuple

import numpy as np
import pygame

from .feedback import Cue


logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050
START_GAIN = 0.1
END_GAIN = 0.01

# (frequency Hz, duration s, waveform, delay ms)
Note = Tuple[float, float, str, int]

SOUNDS: Dict[str, List[Note]] = {
    "move": [(200, 0.1, "square", 0)],
    "rotate": [(300, 0.1, "square", 0)],
    "drop": [(150, 0.2, "sawtooth", 0)],
    "line_clear": [
        (400, 0.1, "square", 0),
        (500, 0.1, "square", 50),
        (600, 0.1, "square", 100),
        (700, 0.2, "square", 150),
    ],
    "explosion": [
        (100, 0.3, "sawtooth", 0),
        (80, 0.3, "sawtooth", 100),
        (60, 0.3, "sawtooth", 200),
    ],
    "level_up": [
        (500, 0.2, "square", 0),
        (600, 0.2, "square", 100),
        (700, 0.2, "square", 200),
    ],
    "game_over": [
        (200, 0.5, "sawtooth", 0),
        (150, 0.5, "sawtooth", 200),
        (100, 0.5, "sawtooth", 400),
    ],
    "button": [(800, 0.1, "square", 0)],
}

CUE_SOUNDS: Dict[Cue, str] = {
    Cue.HARD_DROP: "drop",
    Cue.LINE_CLEAR: "line_clear",
    Cue.LEVEL_UP: "level_up",
    Cue.GAME_OVER: "game_over",
}


def tone(frequency: float, duration: float, waveform: str = "square", sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Synthesize one note as float samples with an exponential fade from START_GAIN to END_GAIN."""
    n = max(1, int(sample_rate * duration))
    t = np.arange(n) / sample_rate
    phase = (t * frequency) % 1.0
    if waveform == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif waveform == "sawtooth":
        wave = 2.0 * phase - 1.0
    else:
        raise ValueError(f"unknown waveform: {waveform}")
    envelope = START_GAIN * (END_GAIN / START_GAIN) ** (t / duration)
    return wave * envelope


def mix(notes: Iterable[Note], sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Lay the notes of one cue onto a single int16 buffer at their delays."""
    placed = []
    for frequency, duration, waveform, delay_ms in notes:
        offset = int(sample_rate * delay_ms / 1000)
        placed.append((offset, tone(frequency, duration, waveform, sample_rate)))
    length = max(offset + len(samples) for offset, samples in placed)
    buffer = np.zeros(length, dtype=np.float64)
    for offset, samples in placed:
        buffer[offset:offset + len(samples)] += samples
    return (np.clip(buffer, -1.0, 1.0) * 32767).astype(np.int16)


class SoundBank:
    """Short synthesized cues played through pygame.mixer.

    With `enabled=False`, or when no audio device can be opened, every call is a no-op.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        if not enabled:
            return
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            channels = pygame.mixer.get_init()[2]
            for name, notes in SOUNDS.items():
                samples = mix(notes)
                if channels > 1:
                    samples = np.repeat(samples[:, None], channels, axis=1)
                self._sounds[name] = pygame.sndarray.make_sound(np.ascontiguousarray(samples))
        except pygame.error as exc:
            logger.warning("sound disabled: %s", exc)
            self.enabled = False
            self._sounds.clear()

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        self._sounds[name].play()

    def play_cues(self, cues: Iterable[Cue], clear_size: int = 1) -> None:
        for cue in cues:
            self.play(CUE_SOUNDS[cue])
            if cue is Cue.LINE_CLEAR and clear_size > 2:
                self.play("explosion")
