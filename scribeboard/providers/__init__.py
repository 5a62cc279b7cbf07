from .registry import ProviderRegistry
from .types import (
    ProviderTranscriptionPayload,
    SegmentResult,
    SpeakerResult,
    TranscriptionProviderAdapter,
    TranscriptionResult,
    WordTiming,
)

__all__ = [
    "ProviderRegistry",
    "ProviderTranscriptionPayload",
    "SegmentResult",
    "SpeakerResult",
    "TranscriptionProviderAdapter",
    "TranscriptionResult",
    "WordTiming",
]
