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


def map_words(raw_words: Any, parent_start_ms: int) -> list[WordTiming] | None:
    """Word timings for one utterance, None when the vendor sent none."""
    words = []
    for word in as_list(raw_words):
        word = as_dict(word)
        start_ms = to_ms(number(word.get("start")), parent_start_ms)
        words.append(
            WordTiming(
                start_ms=start_ms,
                end_ms=to_ms(number(word.get("end")), start_ms),
                text=raw_text(word.get("text")),
                confidence=number(word.get("confidence")),
            )
        )
    return words or None


def map_elevenlabs_response(raw: Any) -> TranscriptionResult:
    if not isinstance(raw, dict):
        raise MalformedResponseError("ElevenLabs response is not a JSON object")

    transcript = as_dict(raw.get("transcript"))
    segments = []
    for index, utterance in enumerate(as_list(transcript.get("utterances"))):
        utterance = as_dict(utterance)
        start_ms = to_ms(number(utterance.get("start")))
        end_ms = to_ms(number(utterance.get("end")), start_ms)
        segments.append(
            SegmentResult(
                speaker_key=speaker_key(
                    utterance.get("speaker"),
                    utterance.get("user_id"),
                    fallback=f"speaker_{index + 1}",
                ),
                start_ms=start_ms,
                end_ms=clamp_end(start_ms, end_ms),
                text=raw_text(utterance.get("text")),
                confidence=number(utterance.get("confidence")),
                words=map_words(utterance.get("words"), start_ms),
            )
        )

    return TranscriptionResult(
        external_job_id=string(raw.get("id")),
        language=string(transcript.get("language")),
        duration_seconds=number(transcript.get("duration")),
        confidence=number(transcript.get("confidence")),
        segments=segments,
        speakers=collect_speakers(segments),
        metadata=raw_metadata(raw),
    )
