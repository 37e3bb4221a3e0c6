from MCE.NMM.constants import (
    NOTES, NOTE_FREQUENCIES, CHALLENGE_LENGTH,
    SAMPLE_RATE, NOTE_SAMPLES, SILENCE_SAMPLES, PADDING_SAMPLES, ATTACK_SAMPLES,
)


def test_palette_is_c_major_fourth_octave():
    assert NOTES == ("C4", "D4", "E4", "F4", "G4", "A4", "B4")
    assert NOTE_FREQUENCIES["A4"] == 440.00


def test_every_frequency_is_positive_and_unique():
    freqs = list(NOTE_FREQUENCIES.values())
    assert all(f > 0 for f in freqs)
    assert len(set(freqs)) == len(freqs)


def test_frequencies_ascend_with_the_scale():
    freqs = [NOTE_FREQUENCIES[n] for n in NOTES]
    assert freqs == sorted(freqs)


def test_sample_counts_derive_from_durations():
    assert SAMPLE_RATE == 44_100
    assert CHALLENGE_LENGTH == 5
    assert NOTE_SAMPLES == 17_640
    assert SILENCE_SAMPLES == 8_820
    assert PADDING_SAMPLES == 22_050
    assert ATTACK_SAMPLES == 882
