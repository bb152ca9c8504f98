"""Stage-attributed failures of the transcription pipeline."""

from __future__ import annotations


class TranscriptionError(Exception):
    """Base class; ``stage`` names the pipeline step that failed."""

    stage = "pipeline"
    exit_code = 1


class ModelLoadError(TranscriptionError):
    stage = "model"
    exit_code = 3


class StateCreationError(TranscriptionError):
    stage = "state"
    exit_code = 4


class AudioReadError(TranscriptionError):
    stage = "audio"
    exit_code = 5


class AudioFormatError(AudioReadError):
    """WAV input that does not match the model's sample layout."""


class InferenceError(TranscriptionError):
    stage = "inference"
    exit_code = 6


class SegmentCountError(TranscriptionError):
    stage = "segments"
    exit_code = 7


class SegmentFetchError(TranscriptionError):
    stage = "segments"
    exit_code = 8
