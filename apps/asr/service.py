import base64
import binascii
import os
from functools import lru_cache
from pathlib import Path
from typing import Union

import numpy as np

from audio.pcm import decode_audio, read_samples
from common.errors import AudioReadError, SegmentCountError
from common.types import InferenceConfig, Transcription

from .engine import WhisperContext, WhisperState

MODEL_PATH = os.getenv("ASR_MODEL_PATH", "models/asr")


@lru_cache()
def get_context() -> WhisperContext:
    """Load and cache the model used by the HTTP service."""
    return WhisperContext(MODEL_PATH, InferenceConfig())


def collect_segments(state: WhisperState) -> Transcription:
    """Read every segment back from a state that has run, in emitted order."""
    count = state.n_segments()
    if count == 0:
        raise SegmentCountError("model produced no segments")
    return Transcription(segments=[state.segment(i) for i in range(count)])


def transcribe_samples(state: WhisperState, samples: np.ndarray,
                       config: InferenceConfig) -> Transcription:
    state.full(config, samples)
    return collect_segments(state)


def transcribe_bytes(ctx: WhisperContext, audio_bytes: bytes) -> Transcription:
    state = ctx.create_state()
    return transcribe_samples(state, decode_audio(audio_bytes), ctx.config)


def transcribe_file(model_path: Union[str, Path], file_path: Union[str, Path],
                    config: InferenceConfig | None = None) -> Transcription:
    """Run the whole pipeline once: model, state, audio, inference, segments."""
    config = config or InferenceConfig()
    ctx = WhisperContext(model_path, config)
    try:
        state = ctx.create_state()
        samples = read_samples(file_path)
        return transcribe_samples(state, samples, config)
    finally:
        ctx.close()


def b64_to_bytes(data: str) -> bytes:
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise AudioReadError(f"failed to decode base64 audio: {exc}") from exc
