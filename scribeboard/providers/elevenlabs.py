import requests

from ..models import TranscriptionProvider
from .http import compact, post_json
from .mappers import map_elevenlabs_response
from .types import ProviderTranscriptionPayload, TranscriptionResult

DEFAULT_MODEL = "scribe_v1"


class ElevenLabsProvider:
    id = TranscriptionProvider.ELEVENLABS.value

    def __init__(self, base_url, credentials, http=None, timeout=None):
        self.base_url = base_url.rstrip("/")
        self.credentials = credentials
        # module-level requests opens a session per call, safe across job threads
        self.http = http or requests
        self.timeout = timeout

    def list_models(self):
        return [DEFAULT_MODEL]

    def build_body(self, payload: ProviderTranscriptionPayload) -> dict:
        body = {
            "diarize": True if payload.diarize is None else payload.diarize,
            "model_id": payload.model or DEFAULT_MODEL,
            "audio_url": payload.file_url,
            "language_code": payload.language,
            "prompt": payload.prompt,
        }
        return compact(body, payload.additional_config)

    def transcribe(self, payload: ProviderTranscriptionPayload) -> TranscriptionResult:
        api_key = self.credentials.get_decrypted_key(payload.user_id, TranscriptionProvider.ELEVENLABS)
        raw = post_json(
            self.http,
            f"{self.base_url}/v1/speech-to-text/recognize",
            {"xi-api-key": api_key, "Content-Type": "application/json"},
            self.build_body(payload),
            vendor="ElevenLabs",
            timeout=self.timeout,
        )
        return map_elevenlabs_response(raw)
