import pytest

from MCE.NMM.constants import MSG_INVALID, MSG_SUCCESS, MSG_INCORRECT
from MCE.CSM import Verifier, ChallengeGenerator

SOLUTION = ["C4", "D4", "E4", "F4", "G4"]


@pytest.fixture
def verifier(store):
    store.set("s1", SOLUTION)
    return Verifier(store)


def test_exact_answer_succeeds(verifier):
    result = verifier.verify("s1", list(SOLUTION))
    assert result.success is True
    assert result.message == MSG_SUCCESS


def test_one_wrong_note_fails(verifier):
    result = verifier.verify("s1", ["C4", "D4", "E4", "F4", "A4"])
    assert result.success is False
    assert result.message == MSG_INCORRECT


def test_order_matters(verifier):
    assert not verifier.verify("s1", list(reversed(SOLUTION))).success


def test_comparison_is_case_sensitive(verifier):
    assert not verifier.verify("s1", [n.lower() for n in SOLUTION]).success


def test_second_verify_with_same_answer_fails(verifier):
    assert verifier.verify("s1", SOLUTION).success
    second = verifier.verify("s1", SOLUTION)
    assert second.success is False
    assert second.message == MSG_INVALID


def test_solution_cleared_after_wrong_answer(verifier, store):
    verifier.verify("s1", ["B4"] * 5)
    assert store.get("s1") is None
    assert verifier.verify("s1", SOLUTION).message == MSG_INVALID


def test_length_mismatch_is_generic_failure(verifier, store):
    result = verifier.verify("s1", ["C4", "D4", "E4"])
    assert result == (False, MSG_INVALID)
    assert store.get("s1") is None


def test_no_pending_solution_is_generic_failure(store):
    result = Verifier(store).verify("nobody", SOLUTION)
    assert result == (False, MSG_INVALID)


@pytest.mark.parametrize("answer", [None, "C4D4E4F4G4", 5, {"0": "C4"}, []])
def test_malformed_answers_are_generic_failures(verifier, answer):
    assert verifier.verify("s1", answer) == (False, MSG_INVALID)


def test_no_challenge_and_wrong_length_look_the_same(store):
    verifier = Verifier(store)
    store.set("a", SOLUTION)
    wrong_length = verifier.verify("a", ["C4"])
    no_challenge = verifier.verify("b", SOLUTION)
    assert wrong_length.to_json() == no_challenge.to_json()


def test_result_never_contains_the_solution(verifier):
    result = verifier.verify("s1", ["A4"] * 5)
    assert not any(note in result.message for note in SOLUTION)


def test_sessions_do_not_share_solutions(store, rng):
    gen = ChallengeGenerator(store, rng=rng)
    verifier = Verifier(store)
    a = gen.create_challenge("alice")
    gen.create_challenge("bob")
    # bob cannot spend alice's solution, and trying clears only bob's
    verifier.verify("bob", ["X"] * 5)
    assert store.get("alice") == a.notes
    assert verifier.verify("alice", list(a.notes)).success


def test_to_json_shape(verifier):
    assert verifier.verify("s1", SOLUTION).to_json() == {
        "success": True, "message": MSG_SUCCESS,
    }
