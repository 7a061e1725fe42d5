#!/usr/bin/env python3
"""
surf.py

Fixed-layout RIFF/WAVE header decoder.

Validates the canonical 44-byte WAV header of an in-memory file and pulls
out the audio format, channel count, sample rate and bit depth. Checks run
in a fixed order and the first failure is reported.

Example:
  with open("Loop.wav", "rb") as f:
      info = get_info(f.read())
"""

import struct
from dataclasses import dataclass
from enum import Enum, IntEnum

RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"

# RIFF/WAVE/fmt/data markers plus the fmt fields up to bits-per-sample
MIN_HEADER_SIZE = 40


class AudioFormat(IntEnum):
    PCM = 1
    PCM_FLOAT = 3
    WAVE_FORMAT_EXTENSIBLE = 65534

    @property
    def label(self):
        return _FORMAT_LABELS[self]

    def __str__(self):
        return self.label


_FORMAT_LABELS = {
    AudioFormat.PCM: "PCM",
    AudioFormat.PCM_FLOAT: "PCM float",
    AudioFormat.WAVE_FORMAT_EXTENSIBLE: "WAVE_FORMAT_EXTENSIBLE",
}


class WavError(Enum):
    """Structural header defects, valued by their user-facing message."""

    INVALID_RIFF_HEADER = "Invalid RIFF header"
    INVALID_FILE_SIZE = "Invalid file size"
    INVALID_FILE_FORMAT_ID = "Invalid file format ID"
    INVALID_FORMAT_BLOC_ID = "Invalid file format bloc ID"
    INVALID_AUDIO_FORMAT = "Invalid audio format"
    INVALID_DATA_BLOC = "Invalid data bloc"

    def __str__(self):
        return self.value


class WavHeaderError(ValueError):
    """Raised by get_info() with the first WavError found."""

    def __init__(self, error):
        super().__init__(error.value)
        self.error = error


@dataclass(frozen=True)
class WavInfo:
    format: AudioFormat
    channels: int
    frequency: int
    bits_per_sample: int

    def as_row(self):
        """Flat dict for CSV reports."""
        return {
            "format": self.format.label,
            "channels": self.channels,
            "frequency": self.frequency,
            "bits_per_sample": self.bits_per_sample,
        }


def _read_le(data, fmt, offset):
    # None when the buffer ends before the field does
    try:
        return struct.unpack_from(fmt, data, offset)[0]
    except struct.error:
        return None


# --------------------------
# Core header decoder
# --------------------------
def get_info(data):
    """
    Decode the header of a complete WAV file held in memory.

    Args:
        data: bytes-like buffer with the whole file contents

    Returns:
        WavInfo with format, channels, frequency and bits_per_sample.

    Raises:
        WavHeaderError: carrying the WavError of the first failed check.
    """
    if data[0:4] != RIFF_ID:
        raise WavHeaderError(WavError.INVALID_RIFF_HEADER)

    declared_size = _read_le(data, "<I", 4)
    if declared_size is None or declared_size + 8 != len(data):
        raise WavHeaderError(WavError.INVALID_FILE_SIZE)

    if data[8:12] != WAVE_ID:
        raise WavHeaderError(WavError.INVALID_FILE_FORMAT_ID)

    if data[12:16] != FMT_ID:
        raise WavHeaderError(WavError.INVALID_FORMAT_BLOC_ID)

    # fmt chunk size is read but not checked against the layout
    _read_le(data, "<I", 16)

    format_code = _read_le(data, "<H", 20)
    try:
        audio_format = AudioFormat(format_code)
    except ValueError:
        raise WavHeaderError(WavError.INVALID_AUDIO_FORMAT) from None

    # Too short to reach the data marker
    if len(data) < MIN_HEADER_SIZE:
        raise WavHeaderError(WavError.INVALID_DATA_BLOC)

    channels = _read_le(data, "<H", 22)
    # Sample rate is a u32 at [24,28) but only its low 16 bits are kept,
    # so rates above 65535 Hz come back truncated.
    frequency = _read_le(data, "<H", 24)
    _bytes_per_sec = _read_le(data, "<H", 28)
    _bytes_per_bloc = _read_le(data, "<H", 32)
    bits_per_sample = _read_le(data, "<H", 34)

    if data[36:40] != DATA_ID:
        raise WavHeaderError(WavError.INVALID_DATA_BLOC)

    return WavInfo(
        format=audio_format,
        channels=channels,
        frequency=frequency,
        bits_per_sample=bits_per_sample,
    )
