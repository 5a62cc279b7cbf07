"""Normalized transcription shapes shared by every provider."""

from typing import Any, Protocol

from pydantic import BaseModel, Field


class WordTiming(BaseModel, frozen=True):
    """A single recognised word, times in milliseconds."""

    start_ms: int
    end_ms: int
    text: str
    confidence: float | None = None


class SegmentResult(BaseModel, frozen=True):
    """A contiguous span of text attributed to one speaker key."""

    speaker_key: str
    start_ms: int
    end_ms: int
    text: str = ""
    confidence: float | None = None
    words: list[WordTiming] | None = None


class SpeakerResult(BaseModel, frozen=True):
    speaker_key: str
    display_name: str


class TranscriptionResult(BaseModel, frozen=True):
    """Output of a response normalizer."""

    external_job_id: str | None = None
    language: str | None = None
    duration_seconds: float | None = None
    confidence: float | None = None
    segments: list[SegmentResult] = Field(default_factory=list)
    speakers: list[SpeakerResult] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None


class ProviderTranscriptionPayload(BaseModel, frozen=True):
    """What an adapter needs to submit one audio file."""

    user_id: int
    file_url: str
    model: str | None = None
    prompt: str | None = None
    language: str | None = None
    diarize: bool | None = None
    additional_config: dict[str, Any] | None = None


class TranscriptionProviderAdapter(Protocol):
    id: str

    def list_models(self) -> list[str]: ...

    def transcribe(self, payload: ProviderTranscriptionPayload) -> TranscriptionResult: ...
