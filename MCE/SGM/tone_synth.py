# =============================================================================
# tone_synth.py — Sawtooth Tone Synthesizer
# =============================================================================
#
# Renders ONE tone segment: a normalised sawtooth at the note's fundamental,
# shaped by a linear attack/decay envelope.
#
# WAVEFORM:
#   t      = i / sample_rate
#   raw(t) = 2 * (t*f - floor(0.5 + t*f))          range [-1, 1)
#
# ENVELOPE (AD, linear):
#   i in [0, attack)        : peak * i / attack                 0 -> peak
#   i in [attack, n-1]      : peak * (1 - (i-attack)/(n-1-attack))  peak -> 0
#
#   sample[i] = raw(t) * max(0, envelope[i])
#
# GUARANTEES:
#   - len(output) == n_samples, always.
#   - envelope[0] == 0 and envelope[n-1] == 0, so the first and last sample
#     of every segment are exactly 0 (no click at segment boundaries).
#   - |sample| <= peak.
#   - Unknown notes / non-positive frequencies render as zeros.  A bad note
#     never aborts a whole challenge.

from __future__ import annotations
import logging

import numpy as np

from MCE.NMM.constants import (
    NOTE_FREQUENCIES,
    SAMPLE_RATE,
    NOTE_SAMPLES,
    ATTACK_SAMPLES,
    MAX_AMPLITUDE,
)

log = logging.getLogger(__name__)

# Shortest segment that can hold a rise and a fall: 0 -> peak -> 0
MIN_TONE_SAMPLES = 3


def note_frequency(note) -> float | None:
    """Return the frequency for a note name, or None if it is not in the palette."""
    if not isinstance(note, str):
        return None
    return NOTE_FREQUENCIES.get(note)


class ToneSynth:
    """
    Stateless sawtooth tone renderer.

    Usage:
        synth = ToneSynth()
        seg   = synth.render_note("A4")                  # NOTE_SAMPLES floats
        seg   = synth.render(440.0, n_samples=1000)
    """

    def __init__(
        self,
        sample_rate:    int   = SAMPLE_RATE,
        attack_samples: int   = ATTACK_SAMPLES,
        peak:           float = MAX_AMPLITUDE,
    ) -> None:
        if sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {sample_rate!r}")
        if attack_samples < 0:
            raise ValueError(f"attack_samples must be >= 0, got {attack_samples!r}")
        if not peak > 0:
            raise ValueError(f"peak must be positive, got {peak!r}")
        self.sample_rate    = int(sample_rate)
        self.attack_samples = int(attack_samples)
        self.peak           = float(peak)

    # ── Envelope ────────────────────────────────────────────────────────────

    def envelope(self, n_samples: int) -> np.ndarray:
        """
        Linear attack/decay gain curve of length n_samples.

        The attack window is clamped to [1, n-2] so that short segments still
        start and end at zero.  Segments shorter than MIN_TONE_SAMPLES are
        all-zero.
        """
        n = int(n_samples)
        if n < MIN_TONE_SAMPLES:
            return np.zeros(max(n, 0), dtype=np.float64)

        attack = max(1, min(self.attack_samples, n - 2))
        idx = np.arange(n, dtype=np.float64)

        env = np.empty(n, dtype=np.float64)
        env[:attack] = self.peak * idx[:attack] / attack
        env[attack:] = self.peak * (1.0 - (idx[attack:] - attack) / (n - 1 - attack))
        return np.maximum(env, 0.0)

    # ── Oscillator ──────────────────────────────────────────────────────────

    def sawtooth(self, frequency: float, n_samples: int) -> np.ndarray:
        """Raw normalised sawtooth, range [-1, 1), starting at phase 0."""
        t = np.arange(int(n_samples), dtype=np.float64) / self.sample_rate
        phase = t * frequency
        return 2.0 * (phase - np.floor(0.5 + phase))

    # ── Segment rendering ───────────────────────────────────────────────────

    def render(self, frequency: float | None, n_samples: int = NOTE_SAMPLES) -> np.ndarray:
        """
        Render one enveloped tone.

        Args:
            frequency: Fundamental in Hz.  None or <= 0 renders silence.
            n_samples: Exact segment length in samples.

        Returns:
            float64 numpy array of length n_samples.
        """
        n = max(int(n_samples), 0)
        if frequency is None or not frequency > 0:
            return np.zeros(n, dtype=np.float64)
        return self.sawtooth(frequency, n) * self.envelope(n)

    def render_note(self, note, n_samples: int = NOTE_SAMPLES) -> np.ndarray:
        """Render a palette note by name.  Unknown names render silence."""
        freq = note_frequency(note)
        if freq is None:
            log.debug("unknown note %r rendered as silence", note)
        return self.render(freq, n_samples)
