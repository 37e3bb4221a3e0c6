# =============================================================================
# wav_export.py — In-memory WAV Container Encoder
# =============================================================================
#
# Wraps a mono float sample buffer in a RIFF/WAVE container without touching
# the filesystem.  The rendered challenge is never persisted: the bytes are
# produced per request and discarded after transmission.
#
# Container:
#   Channels    : 1
#   Sample rate : whatever the buffer was synthesised at (44 100 Hz default)
#   Sample type : 32-bit IEEE float  (WAVE_FORMAT_IEEE_FLOAT, subtype FLOAT)
#
# libsndfile (via soundfile) writes the header, so channel count, rate,
# block alignment and data-chunk length always agree with the payload.

from __future__ import annotations
import io
from typing import NamedTuple

import numpy as np
import soundfile as sf

from MCE.NMM.constants import SAMPLE_RATE, WAV_CHANNELS, WAV_SUBTYPE


class WavInfo(NamedTuple):
    sample_rate: int
    channels:    int
    frames:      int
    subtype:     str


def encode_wav(
    samples:     np.ndarray,
    sample_rate: int = SAMPLE_RATE,
    subtype:     str = WAV_SUBTYPE,
) -> bytes:
    """
    Encode a mono sample buffer as WAV bytes.

    Args:
        samples:     1-D array of floats in [-1, 1].
        sample_rate: Rate written into the header.
        subtype:     libsndfile subtype, "FLOAT" by default ("PCM_16" also works).

    Returns:
        Complete WAV file contents.
    """
    data = np.asarray(samples, dtype=np.float32)
    if data.ndim != 1:
        raise ValueError(f"expected a mono 1-D buffer, got shape {data.shape}")

    buf = io.BytesIO()
    sf.write(buf, data, int(sample_rate), format="WAV", subtype=subtype)
    return buf.getvalue()


def decode_wav(data: bytes) -> tuple[np.ndarray, int]:
    """Decode WAV bytes back to (float32 samples, sample_rate).  Mono is flattened."""
    samples, sr = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    if samples.shape[1] == WAV_CHANNELS:
        samples = samples[:, 0]
    return samples, sr


def wav_info(data: bytes) -> WavInfo:
    """Read header fields from WAV bytes."""
    info = sf.info(io.BytesIO(data))
    return WavInfo(
        sample_rate=info.samplerate,
        channels=info.channels,
        frames=info.frames,
        subtype=info.subtype,
    )
