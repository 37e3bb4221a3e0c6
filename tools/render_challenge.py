"""
render_challenge.py — Write a challenge WAV to disk for listening tests

Usage:
    python tools/render_challenge.py out.wav
    python tools/render_challenge.py out.wav --notes C4 E4 G4 E4 C4
    python tools/render_challenge.py out.wav --seed 7 --no-noise

- Without --notes, draws a random challenge (seedable)
- Prints the notes so the listener can check their answer
"""
import sys
import os
import argparse

import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from MCE.NMM.constants import NOTES, SAMPLE_RATE
from MCE.SGM.waveform_builder import WaveformBuilder
from MCE.SGM.wav_export import encode_wav
from MCE.CSM import ChallengeGenerator, MemorySolutionStore


def render(out_path, notes=None, seed=None, noise=True):
    rng = np.random.default_rng(seed)
    if notes is None:
        notes = ChallengeGenerator(MemorySolutionStore(), rng=rng).draw_notes()

    builder = WaveformBuilder()
    samples = builder.build(notes, rng=rng, noise=noise)
    with open(out_path, 'wb') as f:
        f.write(encode_wav(samples, SAMPLE_RATE))

    print(f"Saved {out_path}: {len(samples)} frames, {builder.duration_seconds(len(notes)):.2f} s")
    print(f"Notes: {' '.join(notes)}")
    return notes


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Render a musical CAPTCHA challenge to WAV")
    parser.add_argument("out", help="Output WAV path")
    parser.add_argument("--notes", nargs="+", choices=NOTES, help="Explicit note sequence")
    parser.add_argument("--seed", type=int, help="RNG seed for notes and noise")
    parser.add_argument("--no-noise", action="store_true", help="Skip the masking noise")
    args = parser.parse_args()

    render(args.out, notes=args.notes, seed=args.seed, noise=not args.no_noise)
