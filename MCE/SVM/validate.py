#!/usr/bin/env python3
# =============================================================================
# validate.py — MCE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m MCE.SVM.validate
#
# Tests:
#   1. Constants integrity — palette complete, frequencies positive & distinct
#   2. Tone synth          — segment length, zero endpoints, peak bound
#   3. Waveform builder    — layout length, tone placement, reproducibility
#   4. WAV container       — header fields and frame count round-trip
#   5. Session protocol    — single-use verification, generic failures
# =============================================================================

from __future__ import annotations
import sys

import numpy as np

from MCE.NMM.constants import (
    NOTES, NOTE_FREQUENCIES, CHALLENGE_LENGTH,
    SAMPLE_RATE, NOTE_SAMPLES, SILENCE_SAMPLES, PADDING_SAMPLES,
    MAX_AMPLITUDE, NOISE_AMPLITUDE,
    MSG_INVALID,
)
from MCE.SGM.tone_synth import ToneSynth
from MCE.SGM.waveform_builder import WaveformBuilder
from MCE.SGM.wav_export import encode_wav, wav_info, decode_wav
from MCE.CSM import MemorySolutionStore, ChallengeGenerator, Verifier

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"


class Checker:
    def __init__(self, verbose: bool = True) -> None:
        self.verbose  = verbose
        self.failures = 0

    def __call__(self, label: str, condition: bool, detail: str = "") -> bool:
        if condition:
            self._print(f"  {PASS} {label}")
        else:
            self._print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
            self.failures += 1
        return condition

    def section(self, title: str) -> None:
        self._print("\n" + "=" * 60)
        self._print(title)
        self._print("=" * 60)

    def _print(self, line: str) -> None:
        if self.verbose:
            print(line)


def _constants(check: Checker) -> None:
    check.section("TEST 1 — Constants Integrity")
    freqs = list(NOTE_FREQUENCIES.values())
    check("Palette has 7 notes",           len(NOTES) == 7, f"got {len(NOTES)}")
    check("All frequencies > 0",           all(f > 0 for f in freqs))
    check("Frequencies are distinct",      len(set(freqs)) == len(freqs))
    check("NOTES order matches table",     NOTES == tuple(NOTE_FREQUENCIES))
    check("SAMPLE_RATE = 44100",           SAMPLE_RATE == 44_100)
    check("Sample counts are integers",
          all(isinstance(v, int) for v in (NOTE_SAMPLES, SILENCE_SAMPLES, PADDING_SAMPLES)))
    check("Worst-case peak stays below full scale",
          MAX_AMPLITUDE + NOISE_AMPLITUDE < 1.0)


def _tone_synth(check: Checker) -> None:
    check.section("TEST 2 — Tone Synth")
    synth = ToneSynth()
    for note in NOTES:
        seg = synth.render_note(note)
        ok = (
            len(seg) == NOTE_SAMPLES
            and seg[0] == 0.0
            and abs(seg[-1]) < 1e-9
            and np.max(np.abs(seg)) <= MAX_AMPLITUDE + 1e-9
        )
        check(f"{note}: length, zero endpoints, peak <= {MAX_AMPLITUDE}", ok)

    silent = synth.render_note("H9")
    check("Unknown note renders silence",
          len(silent) == NOTE_SAMPLES and not np.any(silent))


def _waveform(check: Checker) -> None:
    check.section("TEST 3 — Waveform Builder")
    builder = WaveformBuilder()
    for n in (0, 1, CHALLENGE_LENGTH, 12):
        notes = [NOTES[k % len(NOTES)] for k in range(n)]
        out = builder.build(notes, noise=False)
        expected = 2 * PADDING_SAMPLES + n * (NOTE_SAMPLES + SILENCE_SAMPLES)
        check(f"N={n}: length = {expected}", len(out) == expected, f"got {len(out)}")

    notes = ["C4", "E4", "G4", "E4", "C4"]
    a = builder.build(notes, noise=False)
    b = builder.build(notes, noise=False)
    check("Noise-free build is bit-identical", np.array_equal(a, b))
    check("Padding is silent without noise",
          not np.any(a[:PADDING_SAMPLES]) and not np.any(a[-PADDING_SAMPLES:]))

    n1 = builder.build(notes, rng=np.random.default_rng(1))
    n2 = builder.build(notes, rng=np.random.default_rng(1))
    check("Seeded noise is reproducible", np.array_equal(n1, n2))
    check("Noise reaches the padding", bool(np.any(n1[:PADDING_SAMPLES])))


def _container(check: Checker) -> None:
    check.section("TEST 4 — WAV Container")
    builder = WaveformBuilder()
    samples = builder.build(["A4", "B4", "C4"], rng=np.random.default_rng(3))
    data = encode_wav(samples, SAMPLE_RATE)
    info = wav_info(data)
    check("RIFF/WAVE magic", data[:4] == b"RIFF" and data[8:12] == b"WAVE")
    check("Header sample rate", info.sample_rate == SAMPLE_RATE, f"got {info.sample_rate}")
    check("Header channels = 1", info.channels == 1, f"got {info.channels}")
    check("Header subtype FLOAT", info.subtype == "FLOAT", f"got {info.subtype}")
    decoded, sr = decode_wav(data)
    check("Frame count round-trips", len(decoded) == len(samples),
          f"{len(decoded)} != {len(samples)}")
    check("Float samples round-trip exactly", np.array_equal(decoded, samples))


def _protocol(check: Checker) -> None:
    check.section("TEST 5 — Session Protocol")
    store = MemorySolutionStore()
    gen = ChallengeGenerator(store, rng=np.random.default_rng(5))
    ver = Verifier(store)

    chal = gen.create_challenge("s1")
    check("Challenge length = CHALLENGE_LENGTH", len(chal.notes) == CHALLENGE_LENGTH)
    check("Challenge drawn from palette", set(chal.notes) <= set(NOTES))
    check("Second create replays pending", gen.create_challenge("s1").notes == chal.notes)

    first  = ver.verify("s1", list(chal.notes))
    second = ver.verify("s1", list(chal.notes))
    check("First verify succeeds", first.success)
    check("Second verify fails generically",
          not second.success and second.message == MSG_INVALID)

    gen.create_challenge("s2")
    short = ver.verify("s2", ["C4", "D4", "E4"])
    check("Length mismatch -> generic failure",
          not short.success and short.message == MSG_INVALID)
    check("Unknown session -> generic failure",
          ver.verify("nobody", ["C4"] * 5).message == MSG_INVALID)


def run_all(verbose: bool = True) -> int:
    """Run every section.  Returns the number of failed checks."""
    check = Checker(verbose=verbose)
    for section in (_constants, _tone_synth, _waveform, _container, _protocol):
        section(check)

    check.section("ALL TESTS PASSED" if check.failures == 0
                  else f"{check.failures} TEST(S) FAILED")
    return check.failures


if __name__ == "__main__":
    sys.exit(0 if run_all() == 0 else 1)
