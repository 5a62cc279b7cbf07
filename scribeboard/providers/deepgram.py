import requests

from ..models import TranscriptionProvider
from .http import compact, post_json
from .mappers import map_deepgram_response
from .types import ProviderTranscriptionPayload, TranscriptionResult

DEFAULT_MODEL = "nova-3-general"
MODELS = ["nova-3-general", "nova-3-meeting", "nova-3-telehealth"]


class DeepgramProvider:
    """Deepgram pre-recorded transcription by audio URL."""

    id = TranscriptionProvider.DEEPGRAM.value

    def __init__(self, base_url, credentials, http=None, timeout=None):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        # module-level requests opens a session per call, safe across job threads
        self.http = http or requests
        self.timeout = timeout

    def list_models(self):
        return list(MODELS)

    def build_body(self, payload: ProviderTranscriptionPayload) -> dict:
        body = {
            "url": payload.file_url,
            "model": payload.model or DEFAULT_MODEL,
            "diarize": True if payload.diarize is None else payload.diarize,
            "smart_format": True,
            "utterances": True,
            "paragraphs": True,
            "detect_language": not payload.language,
            "language": payload.language,
            "prompt": payload.prompt,
        }
        return compact(body, payload.additional_config)

    def transcribe(self, payload: ProviderTranscriptionPayload) -> TranscriptionResult:
        api_key = self.credentials.get_decrypted_key(payload.user_id, TranscriptionProvider.DEEPGRAM)
        raw = post_json(
            self.http,
            f"{self.base_url}/v1/listen",
            {"Authorization": f"Token {api_key}", "Content-Type": "application/json"},
            self.build_body(payload),
            vendor="Deepgram",
            timeout=self.timeout,
        )
        return map_deepgram_response(raw)
