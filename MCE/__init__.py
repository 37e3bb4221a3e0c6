# =============================================================================
# Musical Challenge Engine (MCE)
# Server core of a "musical CAPTCHA".
# =============================================================================
#
# A listener hears a short random melody and must click it back on a piano
# keyboard.  The server holds the answer; the client only ever gets audio.
#
# ── THE SERVER IS THE ONLY PLACE THE ANSWER EXISTS ───────────────────────────
#
# RESPONSIBLE for:
#   - Drawing the note sequence (injected, seedable RNG)
#   - Synthesising it sample-exactly: sawtooth + linear AD envelope per note,
#     integer sample grid for pads, tones and gaps
#   - Masking noise over the entire clip
#   - Wrapping the buffer as a mono 32-bit float WAV, in memory
#   - Binding the answer to the caller's session and accepting exactly one
#     verification attempt against it
#
# NOT responsible for:
#   - Playback, piano-key UI, DOM: the browser owns these
#   - Real bot detection.  The noise is a deterrent, not a security boundary.
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   GET  /api/challenge → CSM.ChallengeGenerator.create_challenge(sid)
#                       → SGM.WaveformBuilder.build(notes) → SGM.encode_wav()
#                       → audio/wav
#   POST /api/verify    → CSM.Verifier.verify(sid, userAnswer)
#                       → {"success": ..., "message": ...}; solution cleared
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   NMM/  — note palette, timing and amplitude constants
#   SGM/  — tone synth, waveform builder, WAV container
#   CSM/  — solution store, challenge generator, verifier
#   SVM/  — WAV inspector and self-validation suite
#   API/  — Flask adaptor, config, dev server
# =============================================================================

__version__ = "1.0.0"
