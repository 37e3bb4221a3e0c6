# =============================================================================
# SGM — Signal Generation Module
# Subfolder of MCE (Musical Challenge Engine)
# =============================================================================
#
# Turns a note sequence into playable audio, deterministically except for
# the masking-noise overlay.
#
# Modules:
#   tone_synth.py       — one enveloped sawtooth segment per note
#   waveform_builder.py — pads, places tones and gaps, overlays noise
#   wav_export.py       — in-memory mono float WAV encode / decode
#
# Constants live in MCE/NMM/constants.py
# Verification tools live in MCE/SVM/
# =============================================================================
