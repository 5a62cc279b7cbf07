import requests

from ..models import TranscriptionProvider
from .http import compact, post_json
from .mappers import map_openai_response
from .types import ProviderTranscriptionPayload, TranscriptionResult

DEFAULT_MODEL = "whisper-1"
MODELS = ["gpt-4o-transcribe", "whisper-1"]


class OpenAIProvider:
    """OpenAI audio transcriptions, verbose_json with diarization requested."""

    id = TranscriptionProvider.OPENAI.value

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
            "file": payload.file_url,
            "model": payload.model or DEFAULT_MODEL,
            "prompt": payload.prompt,
            "response_format": "verbose_json",
            "temperature": 0,
            "language": payload.language,
            "diarization": True if payload.diarize is None else payload.diarize,
        }
        return compact(body, payload.additional_config)

    def transcribe(self, payload: ProviderTranscriptionPayload) -> TranscriptionResult:
        api_key = self.credentials.get_decrypted_key(payload.user_id, TranscriptionProvider.OPENAI)
        raw = post_json(
            self.http,
            f"{self.base_url}/audio/transcriptions",
            {"Authorization": f"Bearer {api_key}", "Content-Type": "application/json"},
            self.build_body(payload),
            vendor="OpenAI",
            timeout=self.timeout,
        )
        return map_openai_response(raw)
