from flask import current_app

from ..exceptions import CredentialNotConfiguredError
from ..models import ApiKey, TranscriptionProvider
from ..utils.encryption import decrypt_secret, encrypt_secret


def _provider(provider) -> TranscriptionProvider:
    return provider if isinstance(provider, TranscriptionProvider) else TranscriptionProvider(provider)


class CredentialStore:
    """Per-user vendor API keys, encrypted at rest.

    ``session`` is the SQLAlchemy session (``db.session`` in the app, which is
    scoped per app context). ``encryption_key`` defaults to the app's
    ``ENCRYPTION_KEY``, read at call time.
    """

    def __init__(self, session, encryption_key=None):
        self.session = session
        self._encryption_key = encryption_key

    @property
    def encryption_key(self):
        if self._encryption_key is not None:
            return self._encryption_key
        return current_app.config.get("ENCRYPTION_KEY")

    def get_record(self, user_id, provider) -> ApiKey | None:
        return (
            self.session.query(ApiKey)
            .filter(ApiKey.user_id == user_id, ApiKey.provider == _provider(provider))
            .one_or_none()
        )

    def get_decrypted_key(self, user_id, provider) -> str:
        provider = _provider(provider)
        record = self.get_record(user_id, provider)
        if record is None:
            raise CredentialNotConfiguredError(provider.value)
        return decrypt_secret(record.encrypted, record.nonce, self.encryption_key)

    def save_key(self, user_id, provider, api_key: str, nickname: str | None = None) -> ApiKey:
        provider = _provider(provider)
        encrypted, nonce = encrypt_secret(api_key, self.encryption_key)
        record = self.get_record(user_id, provider)
        if record is None:
            record = ApiKey(user_id=user_id, provider=provider)
            self.session.add(record)
        record.encrypted = encrypted
        record.nonce = nonce
        record.nickname = nickname
        self.session.commit()
        current_app.logger.info('Saved %s API key for user %s', provider.value, user_id)
        return record

    def delete_key(self, user_id, provider) -> bool:
        record = self.get_record(user_id, provider)
        if record is None:
            return False
        self.session.delete(record)
        self.session.commit()
        return True

    def list_keys(self, user_id) -> list[ApiKey]:
        return (
            self.session.query(ApiKey)
            .filter(ApiKey.user_id == user_id)
            .order_by(ApiKey.provider)
            .all()
        )
