from __future__ import annotations

"""Pydantic models shared by the ASR CLI and service."""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict

SAMPLE_RATE = 16000


class InferenceConfig(BaseModel):
    """Fixed decoding policy for a single transcription run.

    Defaults pin the engine to one worker, greedy decoding with
    ``best_of=1``, forced translation to English and no engine console
    output.
    """

    model_config = ConfigDict(frozen=True)

    n_threads: int = 1
    strategy: Literal["greedy"] = "greedy"
    best_of: int = 1
    beam_size: int = 1
    temperature: float = 0.0
    translate: bool = True
    language: str = "en"
    print_special: bool = False
    print_progress: bool = False
    print_realtime: bool = False
    print_timestamps: bool = False
    device: str = "cpu"
    compute_type: str = "default"

    @property
    def task(self) -> str:
        return "translate" if self.translate else "transcribe"

    @property
    def quiet(self) -> bool:
        return not (self.print_special or self.print_progress
                    or self.print_realtime or self.print_timestamps)


class Segment(BaseModel):
    """One span of detected speech and its text."""

    index: int
    start: float
    end: float
    text: str


class Transcription(BaseModel):
    segments: List[Segment]

    @property
    def text(self) -> str:
        """Segment texts in emitted order, each terminated by a newline."""
        return "".join(f"{seg.text}\n" for seg in self.segments)
