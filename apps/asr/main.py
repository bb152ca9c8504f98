import os
from typing import List

from fastapi import FastAPI, File, HTTPException, UploadFile, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from common.errors import (AudioReadError, ModelLoadError, StateCreationError,
                           TranscriptionError)
from common.log import get_logger, setup_logging
from common.types import Segment, Transcription

from .service import b64_to_bytes, get_context, transcribe_bytes

setup_logging(os.getenv("ASR_LOG_LEVEL", "INFO"))
logger = get_logger(__name__)

app = FastAPI(title="Whisper ASR")


class TranscribeResponse(BaseModel):
    text: str
    segments: List[Segment]


def to_response(result: Transcription) -> TranscribeResponse:
    return TranscribeResponse(text=result.text, segments=result.segments)


def error_body(exc: TranscriptionError) -> dict:
    return {"stage": exc.stage, "message": str(exc)}


def status_for(exc: TranscriptionError) -> int:
    if isinstance(exc, (ModelLoadError, StateCreationError)):
        return 503
    if isinstance(exc, AudioReadError):
        return 400
    return 500


def run(audio_bytes: bytes) -> Transcription:
    try:
        return transcribe_bytes(get_context(), audio_bytes)
    except TranscriptionError as exc:
        logger.error("asr.failed", stage=exc.stage, error=str(exc))
        raise


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/transcribe", response_model=TranscribeResponse)
async def transcribe(file: UploadFile = File(...)) -> TranscribeResponse:
    audio_bytes = await file.read()
    try:
        result = await run_in_threadpool(run, audio_bytes)
    except TranscriptionError as exc:
        raise HTTPException(status_code=status_for(exc), detail=error_body(exc)) from exc
    return to_response(result)


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket) -> None:
    await ws.accept()
    try:
        data = await ws.receive_text()
    except WebSocketDisconnect:
        return
    try:
        result = await run_in_threadpool(run, b64_to_bytes(data))
    except TranscriptionError as exc:
        await ws.send_json({"error": error_body(exc)})
    else:
        await ws.send_json(to_response(result).model_dump())
    await ws.close()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8001)
