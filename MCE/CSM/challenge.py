# =============================================================================
# challenge.py — Challenge Generator
# =============================================================================
#
# Mints the note sequence a listener must reproduce and binds it to a session.
#
#   create_challenge(session_id)
#       1. pending solution for the session and reuse enabled
#              -> return it unchanged (reused=True)
#       2. otherwise draw `length` independent uniform picks from NOTES
#              -> store as the session's solution (reused=False)
#
# Reuse makes "create" idempotent until the solution is verified or expires,
# so a client that re-requests the audio (network retry, "play again") hears
# the same melody.  With reuse_pending=False every call replaces the pending
# solution.
#
# Delivery:
#   render_audio(challenge)   -> WAV bytes     (audio variant, note names hidden)
#   notes_payload(challenge)  -> {"challenge": [...]}   (notes variant)
#   A deployment picks exactly one; see MCE/API/config.py.
#
# The only side effect is the store write.  The random source is injected.

from __future__ import annotations
import logging
from typing import NamedTuple

import numpy as np

from MCE.NMM.constants import NOTES, CHALLENGE_LENGTH
from MCE.SGM.waveform_builder import WaveformBuilder
from MCE.SGM.wav_export import encode_wav
from .session_store import SolutionStore

log = logging.getLogger(__name__)

DELIVERY_AUDIO = "audio"
DELIVERY_NOTES = "notes"
DELIVERY_VARIANTS = (DELIVERY_AUDIO, DELIVERY_NOTES)


class Challenge(NamedTuple):
    notes:  tuple[str, ...]
    reused: bool            # True = replayed pending solution, nothing new stored


class ChallengeGenerator:
    """
    Creates session-bound challenges and renders them.

    Args:
        store:         Solution store shared with the Verifier.
        rng:           numpy Generator for note draws and masking noise.
                       Seed it for reproducible tests.
        length:        Notes per challenge.
        reuse_pending: Replay the pending solution instead of minting a new one.
        builder:       Waveform builder used by render_audio().
    """

    def __init__(
        self,
        store:         SolutionStore,
        rng:           np.random.Generator | None = None,
        length:        int = CHALLENGE_LENGTH,
        reuse_pending: bool = True,
        builder:       WaveformBuilder | None = None,
    ) -> None:
        if length <= 0:
            raise ValueError(f"length must be positive, got {length!r}")
        self.store         = store
        self.rng           = rng if rng is not None else np.random.default_rng()
        self.length        = int(length)
        self.reuse_pending = bool(reuse_pending)
        self.builder       = builder if builder is not None else WaveformBuilder()

    # ── Challenge lifecycle ────────────────────────────────────────────────

    def draw_notes(self) -> tuple[str, ...]:
        """Draw `length` independent uniform notes, repeats allowed."""
        picks = self.rng.integers(0, len(NOTES), size=self.length)
        return tuple(NOTES[i] for i in picks)

    def create_challenge(self, session_id: str) -> Challenge:
        if self.reuse_pending:
            pending = self.store.get(session_id)
            if pending is not None:
                log.info("replaying pending challenge (%d notes)", len(pending))
                return Challenge(notes=pending, reused=True)

        notes = self.draw_notes()
        self.store.set(session_id, notes)
        log.info("new challenge generated (%d notes)", len(notes))
        return Challenge(notes=notes, reused=False)

    # ── Delivery ───────────────────────────────────────────────────────────

    def render_audio(self, challenge: Challenge, noise: bool = True) -> bytes:
        """Synthesize the challenge and wrap it as a mono float WAV."""
        samples = self.builder.build(challenge.notes, rng=self.rng, noise=noise)
        return encode_wav(samples, self.builder.sample_rate)

    @staticmethod
    def notes_payload(challenge: Challenge) -> dict:
        """JSON body for client-side synthesis.  Exposes the answer in cleartext."""
        return {"challenge": list(challenge.notes)}
