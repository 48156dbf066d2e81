from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from loguru import logger

DATA_PREFIX = "data:"
DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class StreamFrame:
    """One meaningful frame of the provider stream."""

    text: Optional[str] = None
    done: bool = False
    error: Optional[Dict[str, Any]] = None


class StreamFrameParser:
    """
    Incremental parser for the provider's ``data: ...`` line stream.

    Text is fed in arbitrary chunks. The parser keeps the trailing partial
    line in its buffer, parses every complete line and returns the frames
    found. Lines that are not data frames, carry malformed JSON, or hold no
    delta text are dropped without raising.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self.finished = False

    def feed(self, chunk: str) -> List[StreamFrame]:
        if self.finished or not chunk:
            return []
        self._buffer += chunk
        *lines, self._buffer = self._buffer.split("\n")
        return self._parse_lines(lines)

    def close(self) -> List[StreamFrame]:
        """Flush the buffered remainder as a final line."""
        if self.finished:
            return []
        rest, self._buffer = self._buffer, ""
        frames = self._parse_lines([rest]) if rest.strip() else []
        self.finished = True
        return frames

    def _parse_lines(self, lines: List[str]) -> List[StreamFrame]:
        frames: List[StreamFrame] = []
        for line in lines:
            frame = parse_line(line)
            if frame is None:
                continue
            frames.append(frame)
            if frame.done:
                self.finished = True
                self._buffer = ""
                break
        return frames


def parse_line(line: str) -> Optional[StreamFrame]:
    """Parse one complete line; ``None`` means nothing to emit."""
    line = line.rstrip("\r")
    if not line.startswith(DATA_PREFIX):
        return None
    raw = line[len(DATA_PREFIX):].strip()
    if not raw:
        return None
    if raw == DONE_SENTINEL:
        return StreamFrame(done=True)

    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Skipping malformed stream frame: {}", raw[:80])
        return None
    if not isinstance(payload, dict):
        return None

    error = payload.get("error")
    if error:
        if not isinstance(error, dict):
            error = {"message": str(error)}
        return StreamFrame(error=error)

    text = extract_delta(payload)
    if not text:
        return None
    return StreamFrame(text=text)


def extract_delta(payload: Dict[str, Any]) -> Optional[str]:
    """Return ``choices[0].delta.content`` when present and a string."""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None
