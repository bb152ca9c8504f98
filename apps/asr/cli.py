"""Transcribe one raw 16kHz 16-bit mono PCM (or WAV) file with a Whisper model."""

import argparse
import sys
from pathlib import Path

from common.errors import TranscriptionError
from common.log import get_logger, setup_logging

from .service import transcribe_file

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Transcribe an audio file with a Whisper model")
    parser.add_argument("-m", "--model-path", type=Path, required=True,
                        help="path to the Whisper model")
    parser.add_argument("-f", "--file-path", type=Path, required=True,
                        help="path to 16kHz 16-bit mono PCM audio")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    print(f"Model: {args.model_path}")
    print(f"File: {args.file_path}")

    try:
        result = transcribe_file(args.model_path, args.file_path)
    except TranscriptionError as exc:
        logger.error("asr.failed", stage=exc.stage, error=str(exc))
        print(f"Error: {exc}")
        return exc.exit_code

    print(f"Transcription:\n{result.text}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
