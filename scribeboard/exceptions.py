"""Custom exceptions for the transcription dashboard.

Every exception carries a machine readable ``code`` (persisted on failed jobs
as ``error_code``) and the HTTP status the API answers with.
"""


class ScribeboardError(Exception):
    """Base class for errors raised by scribeboard itself."""

    code = "INTERNAL_ERROR"
    status_code = 500


class ConfigurationError(ScribeboardError):
    """Raised when a provider or credential is not usable."""

    code = "CONFIGURATION_ERROR"
    status_code = 400


class UnsupportedProviderError(ConfigurationError):
    """Raised when no adapter is registered for a provider id."""

    code = "PROVIDER_NOT_SUPPORTED"

    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"Provider {provider} is not supported")


class CredentialNotConfiguredError(ConfigurationError):
    """Raised when the user has no API key stored for a provider."""

    code = "API_KEY_MISSING"

    def __init__(self, provider):
        self.provider = provider
        super().__init__(f"No {provider} API key configured")


class CredentialDecryptionError(ConfigurationError):
    """Raised when a stored API key cannot be decrypted."""

    code = "API_KEY_DECRYPTION_FAILED"

    def __init__(self, cause: Exception | None = None):
        self.cause = cause
        super().__init__("Unable to decrypt the stored secret")


class ProviderError(ScribeboardError):
    """Raised when a transcription vendor call fails."""

    code = "PROVIDER_ERROR"
    status_code = 502


class ProviderHTTPError(ProviderError):
    """Raised when a vendor answers with a non-success HTTP status."""

    code = "PROVIDER_HTTP_ERROR"

    def __init__(self, vendor: str, status: int, body: str):
        self.vendor = vendor
        self.status = status
        self.body = body
        super().__init__(f"{vendor} error ({status}): {body}")


class MalformedResponseError(ProviderError):
    """Raised when a vendor response is not a JSON object at all."""

    code = "PROVIDER_MALFORMED_RESPONSE"


class NotFoundError(ScribeboardError):
    code = "NOT_FOUND"
    status_code = 404


class TranscriptionNotFoundError(NotFoundError):
    code = "TRANSCRIPTION_NOT_FOUND"

    def __init__(self, transcription_id):
        self.transcription_id = transcription_id
        super().__init__(f"Transcription {transcription_id} or its audio file was not found")


class AudioAssetNotFoundError(NotFoundError):
    code = "AUDIO_ASSET_NOT_FOUND"

    def __init__(self, audio_asset_id):
        self.audio_asset_id = audio_asset_id
        super().__init__(f"Audio file {audio_asset_id} not found for this user")


class SpeakerNotFoundError(NotFoundError):
    code = "SPEAKER_NOT_FOUND"

    def __init__(self, speaker_id):
        self.speaker_id = speaker_id
        super().__init__(f"Speaker {speaker_id} not found")


class UploadError(ScribeboardError):
    """Raised when an uploaded audio file is missing or too large."""

    code = "UPLOAD_REJECTED"
    status_code = 400
