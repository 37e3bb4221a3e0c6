# =============================================================================
# CSM — Challenge Session Module
# =============================================================================
#
# The stateful half of the engine: who owes which answer.
#
# Sub-modules:
#   session_store.py — SolutionStore interface + in-memory TTL store
#   challenge.py     — ChallengeGenerator: mint / replay, render
#   verifier.py      — Verifier: single-use comparison
#
# Lifecycle of one solution:
#   create_challenge()  -> store.set()          (or replay if pending)
#   verify()            -> store.get(); store.clear()   (always cleared)
#   TTL expiry          -> dropped on next access
# =============================================================================

from .session_store import SolutionStore, MemorySolutionStore
from .challenge import Challenge, ChallengeGenerator, DELIVERY_AUDIO, DELIVERY_NOTES
from .verifier import Verifier, VerifyResult
