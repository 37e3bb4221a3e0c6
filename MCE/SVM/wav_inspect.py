#!/usr/bin/env python3
# =============================================================================
# wav_inspect.py — Rendered Challenge Inspector
# =============================================================================
#
# Reads a challenge WAV (file or bytes) and reports what a media client would
# see: header fields, duration, level statistics and the tone segments that
# stand out above the masking noise.
#
# Usage:
#   python -m MCE.SVM.wav_inspect challenge.wav
#   python -m MCE.SVM.wav_inspect challenge.wav --notes 5
#   python -m MCE.SVM.wav_inspect challenge.wav --threshold 0.12
#
# With --notes N the frame count and the number of detected segments are
# checked against the layout WaveformBuilder produces for N notes, and the
# exit code reflects the verdict.
#
# Segment detection:
#   RMS over fixed 10 ms windows; a window is "active" when its RMS exceeds
#   the threshold.  Runs closer than min_sec are merged, then runs shorter
#   than min_sec are dropped.
#   Uniform noise of amplitude A has RMS A/sqrt(3) (~0.046 for A = 0.08), so
#   the default threshold of 0.1 sits well above the noise floor.
# =============================================================================

from __future__ import annotations
import argparse
import io
import os
import sys
from typing import NamedTuple

import numpy as np
import soundfile as sf

from MCE.SGM.waveform_builder import WaveformBuilder

DIVIDER = "=" * 60

DEFAULT_THRESHOLD  = 0.1
DEFAULT_WINDOW_SEC = 0.01
DEFAULT_MIN_SEC    = 0.05


class Segment(NamedTuple):
    start_sec: float
    end_sec:   float

    @property
    def duration(self) -> float:
        return self.end_sec - self.start_sec


class WavReport(NamedTuple):
    sample_rate: int
    channels:    int
    frames:      int
    subtype:     str
    peak:        float
    rms:         float
    segments:    list

    @property
    def duration(self) -> float:
        return self.frames / self.sample_rate if self.sample_rate else 0.0


def windowed_rms(samples: np.ndarray, window: int) -> np.ndarray:
    """RMS of consecutive non-overlapping windows; a trailing partial window is ignored."""
    n = len(samples) // window
    if n == 0:
        return np.zeros(0, dtype=np.float64)
    frames = np.asarray(samples[: n * window], dtype=np.float64).reshape(n, window)
    return np.sqrt(np.mean(frames ** 2, axis=1))


def tone_segments(
    samples:     np.ndarray,
    sample_rate: int,
    threshold:   float = DEFAULT_THRESHOLD,
    window_sec:  float = DEFAULT_WINDOW_SEC,
    min_sec:     float = DEFAULT_MIN_SEC,
) -> list[Segment]:
    """
    Find runs of windows whose RMS exceeds threshold.

    Runs separated by less than min_sec of inactive windows are merged first
    (a decaying tone flickers around the threshold), then runs shorter than
    min_sec are dropped.
    """
    window = max(1, int(window_sec * sample_rate))
    active = windowed_rms(samples, window) > threshold
    min_windows = min_sec * sample_rate / window

    runs: list[tuple[int, int]] = []
    start = None
    for i, on in enumerate(active):
        if on and start is None:
            start = i
        elif not on and start is not None:
            if runs and start - runs[-1][1] < min_windows:
                start = runs.pop()[0]
            runs.append((start, i))
            start = None
    if start is not None:
        if runs and start - runs[-1][1] < min_windows:
            start = runs.pop()[0]
        runs.append((start, len(active)))

    return [
        Segment(s * window / sample_rate, e * window / sample_rate)
        for s, e in runs
        if (e - s) >= min_windows
    ]


def inspect_wav(source, threshold: float = DEFAULT_THRESHOLD) -> WavReport:
    """
    Analyse a WAV file path or raw WAV bytes.

    Multi-channel input is analysed on channel 1 only.
    """
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    with sf.SoundFile(source) as f:
        sr, subtype = f.samplerate, f.subtype
        data = f.read(dtype="float32", always_2d=True)

    ch = data[:, 0] if data.shape[0] else np.zeros(0, dtype=np.float32)
    peak = float(np.max(np.abs(ch))) if ch.size else 0.0
    rms  = float(np.sqrt(np.mean(ch.astype(np.float64) ** 2))) if ch.size else 0.0

    return WavReport(
        sample_rate=sr,
        channels=data.shape[1],
        frames=data.shape[0],
        subtype=subtype,
        peak=peak,
        rms=rms,
        segments=tone_segments(ch, sr, threshold=threshold),
    )


def print_report(name: str, report: WavReport) -> None:
    print(DIVIDER)
    print(f"File        : {name}")
    print(f"Sample rate : {report.sample_rate} Hz")
    print(f"Channels    : {report.channels}")
    print(f"Format      : {report.subtype}")
    print(f"Duration    : {report.duration:.3f} s  ({report.frames:,} frames)")
    print(f"Peak / RMS  : {report.peak:.3f} / {report.rms:.3f}")
    print(DIVIDER)
    print(f"Tone segments above threshold: {len(report.segments)}")
    for k, seg in enumerate(report.segments, 1):
        print(f"  #{k}: {seg.start_sec:7.3f} s -> {seg.end_sec:7.3f} s  ({seg.duration * 1000:.0f} ms)")


def check_layout(report: WavReport, n_notes: int) -> list[str]:
    """Return a list of layout problems for an n_notes challenge (empty = OK)."""
    builder = WaveformBuilder.at_rate(report.sample_rate)
    problems = []
    if report.channels != 1:
        problems.append(f"expected 1 channel, got {report.channels}")
    expected = builder.total_samples(n_notes)
    if report.frames != expected:
        problems.append(f"expected {expected} frames, got {report.frames}")
    if len(report.segments) != n_notes:
        problems.append(f"expected {n_notes} tone segments, found {len(report.segments)}")
    return problems


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Inspect a rendered musical CAPTCHA WAV")
    parser.add_argument("wav", help="Path to WAV file")
    parser.add_argument("--notes", type=int, help="Expected number of notes; enables the layout check")
    parser.add_argument(
        "--threshold", type=float, default=DEFAULT_THRESHOLD,
        help=f"Window RMS threshold for tone detection, default {DEFAULT_THRESHOLD}",
    )
    args = parser.parse_args(argv)

    if not os.path.exists(args.wav):
        print(f"[!!] File not found: {args.wav}")
        return 1

    report = inspect_wav(args.wav, threshold=args.threshold)
    print_report(os.path.basename(args.wav), report)

    if args.notes is None:
        return 0

    problems = check_layout(report, args.notes)
    print(DIVIDER)
    if problems:
        print("[FAIL] layout does not match a", args.notes, "note challenge")
        for p in problems:
            print(f"  - {p}")
        return 1
    print(f"[PASS] layout matches a {args.notes} note challenge")
    return 0


if __name__ == "__main__":
    sys.exit(main())
