import logging
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

import apps.asr.engine as engine


class FakeWhisperModel:
    """Stands in for faster_whisper.WhisperModel and records its calls."""

    instances = []
    texts = [" hello", " world"]
    fail_on_init = False
    fail_on_transcribe = False

    def __init__(self, model_path, **kwargs):
        if self.fail_on_init:
            raise RuntimeError("not a ctranslate2 model")
        self.model_path = model_path
        self.kwargs = kwargs
        self.calls = []
        FakeWhisperModel.instances.append(self)

    def transcribe(self, audio, **kwargs):
        self.calls.append((audio, kwargs))
        if self.fail_on_transcribe:
            raise RuntimeError("decoder blew up")

        def gen():
            for i, text in enumerate(self.texts):
                yield SimpleNamespace(start=float(i), end=float(i + 1), text=text)

        return gen(), SimpleNamespace(duration=len(audio) / 16000)


@pytest.fixture
def fake_model(monkeypatch):
    monkeypatch.setattr(FakeWhisperModel, "instances", [])
    monkeypatch.setattr(engine, "WhisperModel", FakeWhisperModel)
    return FakeWhisperModel


@pytest.fixture
def model_dir(tmp_path):
    path = tmp_path / "model"
    path.mkdir()
    (path / "model.bin").write_bytes(b"\x00")
    return path


@pytest.fixture(autouse=True)
def drop_stderr_log_handlers():
    """Remove handlers ``setup_logging`` bound to a test's captured stderr."""
    yield
    root = logging.getLogger()
    for handler in [h for h in root.handlers if type(h) is logging.StreamHandler]:
        root.removeHandler(handler)
