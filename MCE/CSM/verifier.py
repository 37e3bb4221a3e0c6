# =============================================================================
# verifier.py — Single-use Answer Verifier
# =============================================================================
#
# Resolves exactly one challenge/response cycle per pending solution.
#
#   verify(session_id, answer)
#       - no pending solution, answer missing / not a list, or wrong length
#             -> VerifyResult(False, "Invalid request.")
#         All three look identical to the caller, so a probing client cannot
#         tell "no challenge" from "wrong length".
#       - otherwise exact, case-sensitive, position-by-position comparison.
#       - the pending solution is cleared on EVERY call, malformed ones
#         included.  One solution, one attempt.
#
# Nothing here raises on bad client input, and the correct solution never
# leaves this module (not in results, not in logs).

from __future__ import annotations
import logging
from typing import NamedTuple

from MCE.NMM.constants import MSG_INVALID, MSG_SUCCESS, MSG_INCORRECT
from .session_store import SolutionStore

log = logging.getLogger(__name__)


class VerifyResult(NamedTuple):
    success: bool
    message: str

    def to_json(self) -> dict:
        return {"success": self.success, "message": self.message}


def _as_answer(answer) -> tuple | None:
    # JSON arrays arrive as lists; strings are sequences too but are not answers.
    if isinstance(answer, (list, tuple)):
        return tuple(answer)
    return None


class Verifier:
    def __init__(self, store: SolutionStore) -> None:
        self.store = store

    def verify(self, session_id: str, answer) -> VerifyResult:
        solution = self.store.get(session_id)
        self.store.clear(session_id)

        guess = _as_answer(answer)
        if solution is None or guess is None or len(guess) != len(solution):
            log.info("verification rejected: invalid request")
            return VerifyResult(False, MSG_INVALID)

        if all(g == s for g, s in zip(guess, solution)):
            log.info("verification passed")
            return VerifyResult(True, MSG_SUCCESS)

        log.info("verification failed")
        return VerifyResult(False, MSG_INCORRECT)
