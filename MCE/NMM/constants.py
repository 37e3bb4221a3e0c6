# =============================================================================
# constants.py — NMM Note Palette and Synthesis Timing Constants
# =============================================================================
#
# Every musical and timing constant used by the engine lives here.  The
# synthesizer, the waveform builder and the challenge generator all import
# from this file; none of them define their own copies.
#
# Sample counts are derived ONCE, with int() truncation, from the durations
# below.  The waveform layout is computed from these integers only, so the
# total length of a rendered challenge never depends on float accumulation.

# -----------------------------------------------------------------------------
# NOTE PALETTE  (C major, 4th octave)
# -----------------------------------------------------------------------------
# Key   = note name exactly as the client sends it (case-sensitive)
# Value = fundamental frequency in Hz
# No two names share a frequency.

NOTE_FREQUENCIES = {
    "C4": 261.63,
    "D4": 293.66,
    "E4": 329.63,
    "F4": 349.23,
    "G4": 392.00,
    "A4": 440.00,
    "B4": 493.88,
}

# Ordered palette; index order is the draw order for random selection.
NOTES = tuple(NOTE_FREQUENCIES)

# Number of notes in every challenge.
CHALLENGE_LENGTH = 5


# -----------------------------------------------------------------------------
# AUDIO TIMING
# -----------------------------------------------------------------------------

SAMPLE_RATE = 44_100            # Hz, do not change without re-checking the durations below

NOTE_DURATION_SEC    = 0.4      # audible tone per note
SILENCE_DURATION_SEC = 0.2      # gap after every note (including the last)
PADDING_DURATION_SEC = 0.5      # noise-only lead-in / lead-out
ATTACK_DURATION_SEC  = 0.02     # linear 0 -> peak ramp at the start of a tone

NOTE_SAMPLES    = int(NOTE_DURATION_SEC * SAMPLE_RATE)      # = 17 640
SILENCE_SAMPLES = int(SILENCE_DURATION_SEC * SAMPLE_RATE)   # =  8 820
PADDING_SAMPLES = int(PADDING_DURATION_SEC * SAMPLE_RATE)   # = 22 050
ATTACK_SAMPLES  = int(ATTACK_DURATION_SEC * SAMPLE_RATE)    # =    882


# -----------------------------------------------------------------------------
# AMPLITUDES  (float, full scale = 1.0)
# -----------------------------------------------------------------------------

MAX_AMPLITUDE   = 0.5           # envelope peak of a tone
NOISE_AMPLITUDE = 0.08          # masking noise drawn uniformly from [-A, A)


# -----------------------------------------------------------------------------
# CONTAINER
# -----------------------------------------------------------------------------

WAV_CHANNELS = 1
WAV_SUBTYPE  = "FLOAT"          # 32-bit IEEE float PCM
WAV_MIMETYPE = "audio/wav"


# -----------------------------------------------------------------------------
# SESSION PROTOCOL
# -----------------------------------------------------------------------------

SOLUTION_TTL_SEC = 300.0        # unverified solutions expire after 5 minutes

MSG_INVALID   = "Invalid request."
MSG_SUCCESS   = "Verification successful!"
MSG_INCORRECT = "Incorrect. Please try again."
MSG_ERROR     = "An error occurred. Please try again."
