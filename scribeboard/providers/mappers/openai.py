from typing import Any

from ...exceptions import MalformedResponseError
from ..types import SegmentResult, TranscriptionResult, WordTiming
from .common import (
    as_dict,
    as_list,
    clamp_end,
    collect_speakers,
    number,
    raw_metadata,
    raw_text,
    speaker_key,
    string,
    to_ms,
)


def _words(raw_words: Any, parent_start_ms: int) -> list[WordTiming] | None:
    words = []
    for word in as_list(raw_words):
        word = as_dict(word)
        start_ms = to_ms(number(word.get("start")), parent_start_ms)
        # verbose_json uses "word", diarized responses use "text"
        label = word.get("word") if isinstance(word.get("word"), str) else word.get("text")
        words.append(
            WordTiming(
                start_ms=start_ms,
                end_ms=to_ms(number(word.get("end")), start_ms),
                text=raw_text(label),
                confidence=number(word.get("confidence")),
            )
        )
    return words or None


def map_openai_response(raw: Any) -> TranscriptionResult:
    """Map an OpenAI audio transcription response (verbose_json)."""
    if not isinstance(raw, dict):
        raise MalformedResponseError("OpenAI response is not a JSON object")

    segments = []
    for index, segment in enumerate(as_list(raw.get("segments"))):
        segment = as_dict(segment)
        start_ms = to_ms(number(segment.get("start")))
        end_ms = to_ms(number(segment.get("end")), start_ms)
        segments.append(
            SegmentResult(
                speaker_key=speaker_key(
                    segment.get("speaker"),
                    segment.get("id"),
                    fallback=f"speaker_{index + 1}",
                ),
                start_ms=start_ms,
                end_ms=clamp_end(start_ms, end_ms),
                text=raw_text(segment.get("text")),
                confidence=number(segment.get("confidence")),
                words=_words(segment.get("words"), start_ms),
            )
        )

    return TranscriptionResult(
        external_job_id=string(raw.get("id")),
        language=string(raw.get("language")),
        duration_seconds=number(raw.get("duration")),
        confidence=number(raw.get("overall_confidence")),
        segments=segments,
        speakers=collect_speakers(segments),
        metadata=raw_metadata(raw),
    )
