"""Helpers shared by the vendor response normalizers.

Vendor payloads are untrusted: every helper here returns a default instead of
raising when a field is missing or has the wrong type.
"""

import math
from typing import Any

from ..types import SegmentResult, SpeakerResult


def as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def dig(value: Any, *path) -> Any:
    """Follow dict keys / list indexes, returning None at the first miss."""
    current = value
    for step in path:
        if isinstance(step, int):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict):
                return None
            current = current.get(step)
    return current


def number(value: Any) -> float | None:
    # bool is an int subclass, never a timing or a score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return float(value)


def string(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    return None


def text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def raw_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def speaker_key(*candidates: Any, fallback: str) -> str:
    for candidate in candidates:
        if candidate is None or isinstance(candidate, bool):
            continue
        if isinstance(candidate, float) and candidate.is_integer():
            candidate = int(candidate)
        if isinstance(candidate, (str, int, float)):
            key = str(candidate)
            if key:
                return key
    return fallback


def to_ms(seconds: float | None, default_ms: int = 0) -> int:
    """Seconds to integer milliseconds, rounding halves up."""
    if seconds is None:
        return default_ms
    return int(math.floor(seconds * 1000 + 0.5))


def clamp_end(start_ms: int, end_ms: int) -> int:
    return end_ms if end_ms >= start_ms else start_ms


def collect_speakers(segments: list[SegmentResult]) -> list[SpeakerResult]:
    """Enumerate speaker keys by first appearance as "Speaker N"."""
    speakers: list[SpeakerResult] = []
    seen = set()
    for segment in segments:
        if segment.speaker_key in seen:
            continue
        seen.add(segment.speaker_key)
        speakers.append(
            SpeakerResult(speaker_key=segment.speaker_key, display_name=f"Speaker {len(speakers) + 1}")
        )
    return speakers


def raw_metadata(raw: dict) -> dict | None:
    return raw if raw else None
