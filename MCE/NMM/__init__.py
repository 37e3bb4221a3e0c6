# =============================================================================
# MCE/NMM/__init__.py — Note Mapping Module
# =============================================================================
#
# The NMM is the single source of truth for the note palette, frequencies,
# sample rate, durations and amplitudes used by the whole engine.
#
# All other MCE sub-modules (SGM, CSM, ...) import exclusively from here.
# Never define synthesis constants outside this module.
#
# Sub-modules:
#   constants.py  — note table, timing constants, protocol messages
# =============================================================================
