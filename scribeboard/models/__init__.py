from .user import User
from .audio_asset import AudioAsset
from .transcription import Transcription, TranscriptionProvider, TranscriptionStatus
from .speaker import Speaker
from .segment import Segment
from .api_key import ApiKey

__all__ = [
    "User",
    "AudioAsset",
    "Transcription",
    "TranscriptionProvider",
    "TranscriptionStatus",
    "Speaker",
    "Segment",
    "ApiKey",
]
