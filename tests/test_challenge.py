from collections import Counter

import numpy as np
import pytest

from MCE.NMM.constants import NOTES, CHALLENGE_LENGTH, SAMPLE_RATE
from MCE.CSM import ChallengeGenerator, MemorySolutionStore
from MCE.SGM.waveform_builder import WaveformBuilder
from MCE.SGM.wav_export import wav_info, decode_wav


@pytest.fixture
def generator(store, rng):
    return ChallengeGenerator(store, rng=rng)


def test_challenge_has_exact_length_from_palette(generator):
    for k in range(50):
        chal = generator.create_challenge(f"s{k}")
        assert len(chal.notes) == CHALLENGE_LENGTH
        assert set(chal.notes) <= set(NOTES)
        assert chal.reused is False


def test_challenge_is_stored_for_the_session(generator, store):
    chal = generator.create_challenge("s1")
    assert store.get("s1") == chal.notes


def test_pending_challenge_is_replayed(generator):
    first = generator.create_challenge("s1")
    again = generator.create_challenge("s1")
    assert again.notes == first.notes
    assert again.reused is True


def test_without_reuse_every_call_mints_a_new_solution(store):
    gen = ChallengeGenerator(store, rng=np.random.default_rng(0), reuse_pending=False)
    seen = {gen.create_challenge("s1").notes for _ in range(20)}
    assert len(seen) > 1
    assert store.get("s1") in seen
    assert len(store) == 1


def test_expired_challenge_is_replaced(clock, rng):
    store = MemorySolutionStore(ttl=60, clock=clock)
    gen = ChallengeGenerator(store, rng=rng)
    gen.create_challenge("s1")
    clock.advance(61)
    assert gen.create_challenge("s1").reused is False


def test_seeded_generators_draw_the_same_sequence():
    a = ChallengeGenerator(MemorySolutionStore(), rng=np.random.default_rng(42))
    b = ChallengeGenerator(MemorySolutionStore(), rng=np.random.default_rng(42))
    assert [a.draw_notes() for _ in range(5)] == [b.draw_notes() for _ in range(5)]


def test_draws_cover_the_whole_palette(generator):
    counts = Counter()
    for _ in range(400):
        counts.update(generator.draw_notes())
    assert set(counts) == set(NOTES)


def test_custom_length(store, rng):
    gen = ChallengeGenerator(store, rng=rng, length=3)
    assert len(gen.create_challenge("s").notes) == 3


def test_rejects_non_positive_length(store):
    with pytest.raises(ValueError):
        ChallengeGenerator(store, length=0)


def test_render_audio_is_a_mono_float_wav(generator):
    chal = generator.create_challenge("s1")
    data = generator.render_audio(chal)
    info = wav_info(data)
    assert info.channels == 1
    assert info.sample_rate == SAMPLE_RATE
    assert info.frames == WaveformBuilder().total_samples(CHALLENGE_LENGTH)


def test_render_without_noise_is_deterministic(generator):
    chal = generator.create_challenge("s1")
    a, _ = decode_wav(generator.render_audio(chal, noise=False))
    b, _ = decode_wav(generator.render_audio(chal, noise=False))
    np.testing.assert_array_equal(a, b)


def test_notes_payload(generator):
    chal = generator.create_challenge("s1")
    assert generator.notes_payload(chal) == {"challenge": list(chal.notes)}
