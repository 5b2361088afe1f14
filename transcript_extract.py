#!/usr/bin/env python3
"""Convert a captured YouTube engagement-panel transcript JSON into plain text."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Union

import orjson
import yaml

logger = logging.getLogger(__name__)

PROG = "yt-transcript-extract"

# ---------- Config ----------

@dataclass
class Config:
    log_level: str = "INFO"
    log_format: str = "%(levelname)s: %(message)s"

def load_config(path: Optional[Path]) -> Config:
    if path is None:
        return Config()
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config must be a mapping: {path}")
    defaults = Config()
    level = str(data.get("log_level", defaults.log_level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log_level {level!r} in {path}")
    return Config(
        log_level=level,
        log_format=str(data.get("log_format", defaults.log_format)),
    )

# ---------- Errors ----------

class TranscriptError(Exception):
    pass

class InputNotFound(TranscriptError):
    pass

class InvalidJson(TranscriptError):
    pass

class NoTranscriptFound(TranscriptError):
    pass

# ---------- Navigation & extraction ----------

PathStep = Union[str, int]

SEGMENTS_PATH: Tuple[PathStep, ...] = (
    "actions", 0,
    "updateEngagementPanelAction", "content",
    "transcriptRenderer", "content",
    "transcriptSearchPanelRenderer", "body",
    "transcriptSegmentListRenderer", "initialSegments",
)

TEXT_PATH: Tuple[PathStep, ...] = ("transcriptSegmentRenderer", "snippet", "runs", 0, "text")


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def navigate(node: Any, path: Sequence[PathStep]) -> Any:
    """Follow *path* through parsed JSON, returning ``MISSING`` on the first mismatch.

    String steps only match dict keys and integer steps only match list
    indices, so a JSON ``null`` found at the end comes back as ``None``.
    Never raises.
    """
    for step in path:
        if isinstance(step, int):
            if not isinstance(node, list) or not 0 <= step < len(node):
                return MISSING
        elif not isinstance(node, dict) or step not in node:
            return MISSING
        node = node[step]
    return node


def extract_transcript_text(data: Any) -> List[str]:
    """Return caption lines from *data* in document order; ``[]`` if the segment list is absent."""
    segments = navigate(data, SEGMENTS_PATH)
    if not isinstance(segments, list):
        logger.error("Error extracting transcript: No valid transcript segments found in the JSON structure")
        return []

    lines = []
    for segment in segments:
        text = navigate(segment, TEXT_PATH)
        if text is MISSING or text is None or text == "":
            continue
        if not isinstance(text, str):
            # numbers, booleans and containers keep their JSON spelling
            text = orjson.dumps(text).decode("utf-8")
        lines.append(text)
    return lines

# ---------- File processing ----------

def _read_json(path: Path) -> Any:
    if not path.is_file():
        raise InputNotFound(f"Input file not found: {path}")

    logger.info("Reading file: %s", path)
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidJson(f"Failed to parse JSON: {exc}") from exc
    except OSError as exc:
        raise InputNotFound(f"Input file could not be read: {path} ({exc})") from exc

    try:
        return orjson.loads(content)
    except orjson.JSONDecodeError as exc:
        raise InvalidJson(f"Failed to parse JSON: {exc}") from exc


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(text)


def process_transcript(input_path: Union[str, Path], output_path: Union[str, Path]) -> bool:
    """Extract transcript lines from *input_path* and write them to *output_path*.

    Handled failures (missing input, bad JSON, no lines) are logged and
    return False without touching the output. Errors while creating the
    output directory or writing the file propagate.
    """
    in_path = Path(input_path).resolve()
    out_path = Path(output_path).resolve()

    try:
        data = _read_json(in_path)
        lines = extract_transcript_text(data)
        if not lines:
            raise NoTranscriptFound("No transcript lines were extracted")
    except TranscriptError as exc:
        logger.error("Error processing transcript: %s", exc)
        return False

    _write_text(out_path, "\n".join(lines))

    logger.info("Successfully extracted %d lines", len(lines))
    logger.info("Transcript saved to: %s", out_path)
    return True


async def process_transcript_async(input_path: Union[str, Path], output_path: Union[str, Path]) -> bool:
    """Awaitable wrapper; runs the pipeline synchronously in the calling task."""
    return process_transcript(input_path, output_path)

# ---------- Main ----------

class _UsageParser(argparse.ArgumentParser):
    def error(self, message):
        print_usage()
        self.exit(1)


def parse_args(argv: Optional[Sequence[str]] = None) -> Tuple[argparse.Namespace, List[str]]:
    """Return the parsed options and any arguments argparse did not recognise."""
    p = _UsageParser(prog=PROG, description="Extract transcript text from a YouTube transcript JSON file")
    p.add_argument("files", nargs="*", help="<input-json-file> <output-txt-file>")
    p.add_argument("--config", type=Path, default=None, help="Optional YAML config (log_level, log_format).")
    p.add_argument("--quiet", action="store_true", help="Only log warnings and errors.")
    return p.parse_known_args(argv)


def print_usage() -> None:
    print(f"Usage: {PROG} <input-json-file> <output-txt-file>")
    print(f"Example: {PROG} input.json transcript.txt")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args, unknown = parse_args(argv)
    if unknown or len(args.files) != 2:
        print_usage()
        return 1

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level="WARNING" if args.quiet else cfg.log_level,
        format=cfg.log_format,
    )

    input_file, output_file = args.files
    return 0 if process_transcript(input_file, output_file) else 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
