# =============================================================================
# waveform_builder.py — Challenge Waveform Builder
# =============================================================================
#
# Lays out a complete mono sample buffer for a note sequence:
#
#   [pad][tone 1][gap][tone 2][gap] ... [tone N][gap][pad]
#
# then overlays uniform masking noise over EVERY sample, padding included,
# so silence boundaries cannot be read off the waveform with a threshold.
#
# TIMING GUARANTEE:
#   total = 2*pad + N*(note + gap), all in integer samples.
#   Tone k starts at sample  pad + k*(note + gap); each tone is anchored
#   independently on the absolute grid; nothing accumulates.
#
# REPRODUCIBILITY:
#   With noise disabled the output depends only on the note sequence and the
#   constructor arguments, bit for bit.  Noise is drawn from the injected
#   numpy Generator, so a seeded Generator reproduces the noisy buffer too.

from __future__ import annotations
from typing import Sequence

import numpy as np

from MCE.NMM.constants import (
    SAMPLE_RATE,
    NOTE_SAMPLES, SILENCE_SAMPLES, PADDING_SAMPLES,
    NOTE_DURATION_SEC, SILENCE_DURATION_SEC, PADDING_DURATION_SEC,
    ATTACK_DURATION_SEC,
    NOISE_AMPLITUDE,
)
from .tone_synth import ToneSynth


class WaveformBuilder:
    """
    Builds the full audio buffer for one challenge.

    Example:
        builder = WaveformBuilder()
        samples = builder.build(["C4", "E4", "G4", "E4", "C4"],
                                rng=np.random.default_rng(7))
        assert len(samples) == builder.total_samples(5)
    """

    def __init__(
        self,
        sample_rate:     int   = SAMPLE_RATE,
        note_samples:    int   = NOTE_SAMPLES,
        silence_samples: int   = SILENCE_SAMPLES,
        padding_samples: int   = PADDING_SAMPLES,
        noise_amplitude: float = NOISE_AMPLITUDE,
        synth:           ToneSynth | None = None,
    ) -> None:
        for name, value in (
            ("note_samples", note_samples),
            ("silence_samples", silence_samples),
            ("padding_samples", padding_samples),
        ):
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value!r}")
        if noise_amplitude < 0:
            raise ValueError(f"noise_amplitude must be >= 0, got {noise_amplitude!r}")

        self.sample_rate     = int(sample_rate)
        self.note_samples    = int(note_samples)
        self.silence_samples = int(silence_samples)
        self.padding_samples = int(padding_samples)
        self.noise_amplitude = float(noise_amplitude)
        self.synth = synth if synth is not None else ToneSynth(sample_rate=self.sample_rate)

    @classmethod
    def at_rate(cls, sample_rate: int, **kwargs) -> "WaveformBuilder":
        """Builder with the standard durations re-derived for another sample rate."""
        sr = int(sample_rate)
        kwargs.setdefault(
            "synth", ToneSynth(sample_rate=sr, attack_samples=int(ATTACK_DURATION_SEC * sr)),
        )
        return cls(
            sample_rate=sr,
            note_samples=int(NOTE_DURATION_SEC * sr),
            silence_samples=int(SILENCE_DURATION_SEC * sr),
            padding_samples=int(PADDING_DURATION_SEC * sr),
            **kwargs,
        )

    # ── Layout ───────────────────────────────────────────────────────────────

    @property
    def slot_samples(self) -> int:
        """Samples occupied by one note: tone + trailing gap."""
        return self.note_samples + self.silence_samples

    def total_samples(self, n_notes: int) -> int:
        """Exact buffer length for a sequence of n_notes."""
        return 2 * self.padding_samples + int(n_notes) * self.slot_samples

    def tone_offsets(self, n_notes: int) -> list[int]:
        """Start sample of every tone segment, in order."""
        return [self.padding_samples + k * self.slot_samples for k in range(int(n_notes))]

    def duration_seconds(self, n_notes: int) -> float:
        return self.total_samples(n_notes) / self.sample_rate

    # ── Buffer builder ───────────────────────────────────────────────────────

    def build_tones(self, notes: Sequence[str]) -> np.ndarray:
        """
        Noise-free layout: tones at their anchored offsets, zeros elsewhere.

        Returns:
            float64 array of length total_samples(len(notes)).
        """
        notes = list(notes)
        output = np.zeros(self.total_samples(len(notes)), dtype=np.float64)

        for note, start in zip(notes, self.tone_offsets(len(notes))):
            output[start:start + self.note_samples] = self.synth.render_note(
                note, self.note_samples,
            )
        return output

    def add_noise(self, samples: np.ndarray, rng: np.random.Generator) -> np.ndarray:
        """Add uniform noise in [-A, A) to every sample, in place.  Returns samples."""
        if self.noise_amplitude > 0 and samples.size:
            samples += rng.uniform(-self.noise_amplitude, self.noise_amplitude, samples.size)
        return samples

    def build(
        self,
        notes: Sequence[str],
        rng:   np.random.Generator | None = None,
        noise: bool = True,
    ) -> np.ndarray:
        """
        Build the complete challenge buffer.

        Args:
            notes: Note names in play order.  Unknown names become silent slots.
            rng:   Source for the masking noise.  A fresh unseeded Generator is
                   used when None.
            noise: False skips the noise overlay (deterministic output).

        Returns:
            float32 mono sample array, ready for the WAV encoder.
        """
        samples = self.build_tones(notes)
        if noise:
            self.add_noise(samples, rng if rng is not None else np.random.default_rng())
        return samples.astype(np.float32)
