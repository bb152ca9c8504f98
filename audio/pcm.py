"""Raw PCM and WAV helpers producing float32 sample buffers."""

from __future__ import annotations

import io
import wave
from pathlib import Path

import numpy as np

from common.errors import AudioFormatError, AudioReadError
from common.log import get_logger
from common.types import SAMPLE_RATE

logger = get_logger(__name__)


def is_wav(data: bytes) -> bool:
    return len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WAVE"


def pcm_to_int16(data: bytes) -> np.ndarray:
    """Reinterpret native-endian 16-bit PCM bytes.

    A trailing odd byte cannot form a sample and is dropped.
    """

    usable = len(data) - len(data) % 2
    if usable != len(data):
        logger.warning("audio.odd_byte_dropped", bytes=len(data))
    return np.frombuffer(data[:usable], dtype=np.int16)


def int16_to_float(samples: np.ndarray) -> np.ndarray:
    return samples.astype(np.float32) / 32768.0


def decode_wav(data: bytes) -> np.ndarray:
    """Decode 16kHz 16-bit WAV bytes into a mono float32 array."""
    try:
        with wave.open(io.BytesIO(data)) as wf:
            channels = wf.getnchannels()
            width = wf.getsampwidth()
            rate = wf.getframerate()
            frames = wf.readframes(wf.getnframes())
    except (wave.Error, EOFError) as exc:
        raise AudioFormatError(f"failed to parse wav header: {exc}") from exc
    if width != 2:
        raise AudioFormatError(f"unsupported sample width: {width * 8} bits, expected 16")
    if rate != SAMPLE_RATE:
        raise AudioFormatError(f"unsupported sample rate: {rate} Hz, expected {SAMPLE_RATE}")
    audio = int16_to_float(pcm_to_int16(frames))
    if channels > 1:
        usable = len(audio) - len(audio) % channels
        audio = audio[:usable].reshape(-1, channels).mean(axis=1).astype(np.float32)
    return audio


def decode_audio(data: bytes) -> np.ndarray:
    """Decode a WAV container or headerless 16-bit PCM into float32 samples."""
    if is_wav(data):
        return decode_wav(data)
    return int16_to_float(pcm_to_int16(data))


def read_samples(path: str | Path) -> np.ndarray:
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise AudioReadError(f"failed to read audio file: {exc}") from exc
    samples = decode_audio(data)
    logger.info("asr.audio_loaded", path=str(path), bytes=len(data),
                samples=len(samples), wav=is_wav(data))
    return samples
