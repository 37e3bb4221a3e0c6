# =============================================================================
# MCE/SVM/__init__.py — Signal Verification Module
# =============================================================================
#
# Tools for checking that rendered challenges look the way the engine
# promises before they reach a listener.
#
# Sub-modules:
#   wav_inspect.py — header, level and tone-segment report for a WAV (CLI)
#   validate.py    — self-validation suite for the whole MCE stack
# =============================================================================
