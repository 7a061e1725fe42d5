import struct

import pytest


def make_wav(format_code=1, channels=2, sample_rate=44100, bits_per_sample=16, data=b"\x00\x00" * 8,
             data_id=b"data", declared_size=None):
    """Canonical 44-byte header followed by `data`."""
    block_align = channels * bits_per_sample // 8
    fmt = struct.pack("<HHIIHH", format_code, channels, sample_rate,
                      sample_rate * block_align, block_align, bits_per_sample)
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt + data_id + struct.pack("<I", len(data)) + data
    if declared_size is None:
        declared_size = len(body)
    return b"RIFF" + struct.pack("<I", declared_size) + body


@pytest.fixture
def wav_bytes():
    return make_wav


@pytest.fixture
def wav_dir(tmp_path):
    """Directory with two good files, one broken header and one non-WAV file."""
    root = tmp_path / "Loops"
    (root / "drums").mkdir(parents=True)
    (root / "a_pad.wav").write_bytes(make_wav(channels=2, sample_rate=44100, bits_per_sample=16))
    (root / "drums" / "kick.WAV").write_bytes(make_wav(format_code=3, channels=1, sample_rate=48000,
                                                       bits_per_sample=32))
    (root / "b_broken.wav").write_bytes(b"RAFF" + b"\x00" * 40)
    (root / "notes.txt").write_text("not audio")
    return root
