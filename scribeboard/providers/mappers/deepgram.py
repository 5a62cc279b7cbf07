from typing import Any

from ...exceptions import MalformedResponseError
from ..types import SegmentResult, TranscriptionResult
from .common import (
    as_dict,
    as_list,
    clamp_end,
    collect_speakers,
    dig,
    number,
    raw_metadata,
    speaker_key,
    string,
    text,
    to_ms,
)


def map_deepgram_response(raw: Any) -> TranscriptionResult:
    """Map a Deepgram /v1/listen response (paragraphs enabled).

    Sentences of every paragraph become segments in document order. Deepgram
    returns no per-segment word list once paragraphs are requested, so
    segments carry no word timings.
    """
    if not isinstance(raw, dict):
        raise MalformedResponseError("Deepgram response is not a JSON object")

    channel = as_dict(dig(raw, "results", "channels", 0))
    alternative = as_dict(dig(channel, "alternatives", 0))
    paragraphs = as_list(dig(alternative, "paragraphs", "paragraphs"))

    segments = []
    for p_index, paragraph in enumerate(paragraphs):
        paragraph = as_dict(paragraph)
        for s_index, sentence in enumerate(as_list(paragraph.get("sentences"))):
            sentence = as_dict(sentence)
            start_ms = to_ms(number(sentence.get("start")))
            end_ms = to_ms(number(sentence.get("end")), start_ms)
            segments.append(
                SegmentResult(
                    speaker_key=speaker_key(
                        sentence.get("speaker"),
                        paragraph.get("speaker"),
                        fallback=f"speaker_{p_index}_{s_index}",
                    ),
                    start_ms=start_ms,
                    end_ms=clamp_end(start_ms, end_ms),
                    text=text(sentence.get("text")),
                    confidence=number(sentence.get("confidence")),
                )
            )

    return TranscriptionResult(
        external_job_id=string(dig(raw, "metadata", "request_id")),
        language=string(alternative.get("language")) or string(channel.get("detected_language")),
        duration_seconds=number(dig(raw, "metadata", "duration")),
        confidence=number(alternative.get("confidence")),
        segments=segments,
        speakers=collect_speakers(segments),
        metadata=raw_metadata(raw),
    )
