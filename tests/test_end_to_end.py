import os

import pytest

from apps.asr.service import transcribe_file

MODEL = os.getenv("ASR_TEST_MODEL")
AUDIO = os.getenv("ASR_TEST_AUDIO")


@pytest.mark.skipif(not (MODEL and AUDIO), reason="set ASR_TEST_MODEL and ASR_TEST_AUDIO")
def test_hello_world_sample():
    text = transcribe_file(MODEL, AUDIO).text.lower()
    assert "hello" in text
    assert "world" in text
