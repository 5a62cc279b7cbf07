import requests

from ..exceptions import UnsupportedProviderError
from ..models import TranscriptionProvider
from .deepgram import DeepgramProvider
from .elevenlabs import ElevenLabsProvider
from .openai import OpenAIProvider
from .types import TranscriptionProviderAdapter

ADAPTER_CLASSES = {
    TranscriptionProvider.DEEPGRAM: DeepgramProvider,
    TranscriptionProvider.ELEVENLABS: ElevenLabsProvider,
    TranscriptionProvider.OPENAI: OpenAIProvider,
}


def _coerce(provider) -> TranscriptionProvider:
    if isinstance(provider, TranscriptionProvider):
        return provider
    try:
        return TranscriptionProvider(provider)
    except ValueError:
        raise UnsupportedProviderError(provider) from None


class ProviderRegistry:
    """Maps a provider id to its adapter and API base URL."""

    def __init__(self, base_urls: dict, credentials, http=None, timeout=None):
        self.http = http or requests
        self.base_urls = {_coerce(k): v for k, v in base_urls.items()}
        self.adapters: dict[TranscriptionProvider, TranscriptionProviderAdapter] = {
            provider: cls(self.base_urls[provider], credentials, http=self.http, timeout=timeout)
            for provider, cls in ADAPTER_CLASSES.items()
            if provider in self.base_urls
        }

    @classmethod
    def from_config(cls, config, credentials, http=None):
        base_urls = {
            TranscriptionProvider.DEEPGRAM: config["DEEPGRAM_API_BASE"],
            TranscriptionProvider.ELEVENLABS: config["ELEVENLABS_API_BASE"],
            TranscriptionProvider.OPENAI: config["OPENAI_API_BASE"],
        }
        return cls(base_urls, credentials, http=http, timeout=config.get("PROVIDER_HTTP_TIMEOUT"))

    def get_adapter(self, provider) -> TranscriptionProviderAdapter:
        key = _coerce(provider)
        adapter = self.adapters.get(key)
        if adapter is None:
            raise UnsupportedProviderError(key.value)
        return adapter

    def get_base_url(self, provider) -> str:
        key = _coerce(provider)
        if key not in self.base_urls:
            raise UnsupportedProviderError(key.value)
        return self.base_urls[key]

    def list_providers(self):
        return [
            {"provider": provider.value, "models": adapter.list_models()}
            for provider, adapter in self.adapters.items()
        ]
