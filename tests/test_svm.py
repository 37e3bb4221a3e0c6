import numpy as np

from MCE.NMM.constants import SAMPLE_RATE, CHALLENGE_LENGTH
from MCE.SGM.waveform_builder import WaveformBuilder
from MCE.SGM.wav_export import encode_wav
from MCE.SVM import validate, wav_inspect

MELODY = ["C4", "E4", "G4", "E4", "C4"]


def test_validation_suite_passes():
    assert validate.run_all(verbose=False) == 0


def test_inspect_reports_header_and_tones():
    builder = WaveformBuilder()
    data = encode_wav(builder.build(MELODY, noise=False), SAMPLE_RATE)
    report = wav_inspect.inspect_wav(data, threshold=0.02)

    assert report.sample_rate == SAMPLE_RATE
    assert report.channels == 1
    assert report.subtype == "FLOAT"
    assert report.frames == builder.total_samples(len(MELODY))
    assert len(report.segments) == len(MELODY)
    assert report.segments[0].start_sec >= 0.5
    assert wav_inspect.check_layout(report, CHALLENGE_LENGTH) == []


def test_tones_stand_out_from_noise():
    builder = WaveformBuilder()
    data = encode_wav(builder.build(MELODY, rng=np.random.default_rng(8)), SAMPLE_RATE)
    report = wav_inspect.inspect_wav(data)
    assert len(report.segments) == len(MELODY)


def test_layout_check_flags_wrong_note_count():
    data = encode_wav(WaveformBuilder().build(MELODY, noise=False), SAMPLE_RATE)
    report = wav_inspect.inspect_wav(data, threshold=0.02)
    problems = wav_inspect.check_layout(report, 4)
    assert len(problems) == 2


def test_cli_exit_codes(tmp_path, capsys):
    path = tmp_path / "challenge.wav"
    path.write_bytes(encode_wav(WaveformBuilder().build(MELODY, noise=False), SAMPLE_RATE))

    assert wav_inspect.main([str(path), "--notes", "5", "--threshold", "0.02"]) == 0
    assert "[PASS]" in capsys.readouterr().out
    assert wav_inspect.main([str(path), "--notes", "3", "--threshold", "0.02"]) == 1
    assert wav_inspect.main([str(tmp_path / "missing.wav")]) == 1


def test_windowed_rms_ignores_partial_window():
    rms = wav_inspect.windowed_rms(np.ones(25), 10)
    np.testing.assert_allclose(rms, [1.0, 1.0])


def test_layout_check_follows_the_file_sample_rate():
    builder = WaveformBuilder.at_rate(22_050)
    assert builder.total_samples(len(MELODY)) == 2 * 11_025 + len(MELODY) * (8_820 + 4_410)

    data = encode_wav(builder.build(MELODY, noise=False), 22_050)
    report = wav_inspect.inspect_wav(data, threshold=0.02)
    assert report.sample_rate == 22_050
    assert wav_inspect.check_layout(report, len(MELODY)) == []
