"""Context/state wrapper around a faster-whisper model."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import numpy as np
from faster_whisper import WhisperModel

from common.errors import (InferenceError, ModelLoadError, SegmentCountError,
                           SegmentFetchError, StateCreationError)
from common.log import get_logger, quiet_engine
from common.types import InferenceConfig, Segment

logger = get_logger(__name__)


class WhisperContext:
    """Loaded model weights, shared by any number of per-run states."""

    def __init__(self, model_path: str | Path, config: InferenceConfig | None = None) -> None:
        self.config = config or InferenceConfig()
        self.model_path = Path(model_path)
        if self.config.quiet:
            quiet_engine()
        if not self.model_path.exists():
            raise ModelLoadError(f"failed to load model: {self.model_path} does not exist")
        try:
            self.model: Optional[WhisperModel] = WhisperModel(
                str(self.model_path),
                device=self.config.device,
                compute_type=self.config.compute_type,
                cpu_threads=self.config.n_threads,
                num_workers=1,
                local_files_only=True,
            )
        except Exception as exc:
            raise ModelLoadError(f"failed to load model: {exc}") from exc
        logger.info("asr.model_loaded", path=str(self.model_path), device=self.config.device)

    def create_state(self) -> "WhisperState":
        if self.model is None:
            raise StateCreationError("failed to create state: model has been released")
        return WhisperState(self.model)

    def close(self) -> None:
        self.model = None


class WhisperState:
    """Scratch space for exactly one inference run."""

    def __init__(self, model: WhisperModel) -> None:
        self._model = model
        self._segments: Optional[List[Segment]] = None

    def full(self, config: InferenceConfig, samples: np.ndarray) -> None:
        if self._segments is not None:
            raise InferenceError("failed to run model: state already holds a result")
        try:
            segments, info = self._model.transcribe(
                samples,
                language=config.language,
                task=config.task,
                beam_size=config.beam_size,
                best_of=config.best_of,
                temperature=config.temperature,
            )
            # segments is lazy; decoding happens while iterating
            self._segments = [
                Segment(index=i, start=seg.start, end=seg.end, text=seg.text)
                for i, seg in enumerate(segments)
            ]
        except Exception as exc:
            raise InferenceError(f"failed to run model: {exc}") from exc
        logger.info("asr.inference_done", segments=len(self._segments),
                    duration=getattr(info, "duration", None))

    def n_segments(self) -> int:
        if self._segments is None:
            raise SegmentCountError("failed to get number of segments: model has not run")
        return len(self._segments)

    def segment(self, i: int) -> Segment:
        if self._segments is None or not 0 <= i < len(self._segments):
            raise SegmentFetchError(f"failed to get segment {i}")
        return self._segments[i]

    def segment_text(self, i: int) -> str:
        return self.segment(i).text
