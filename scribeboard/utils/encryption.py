"""Secret encryption for stored vendor API keys (libsodium secretbox)."""

import base64

from nacl.exceptions import CryptoError
from nacl.secret import SecretBox
from nacl.utils import random

from ..exceptions import ConfigurationError, CredentialDecryptionError


def _box(encryption_key: str | None) -> SecretBox:
    if not encryption_key:
        raise ConfigurationError("ENCRYPTION_KEY is not configured")
    try:
        key = base64.b64decode(encryption_key, validate=True)
    except ValueError as exc:
        raise ConfigurationError("ENCRYPTION_KEY is not valid base64") from exc
    if len(key) != SecretBox.KEY_SIZE:
        raise ConfigurationError(f"ENCRYPTION_KEY must decode to {SecretBox.KEY_SIZE} bytes")
    return SecretBox(key)


def encrypt_secret(plain_text: str, encryption_key: str | None) -> tuple[str, str]:
    """Return ``(cipher_text, nonce)``, both base64, with a fresh nonce."""
    nonce = random(SecretBox.NONCE_SIZE)
    encrypted = _box(encryption_key).encrypt(plain_text.encode("utf-8"), nonce)
    return (
        base64.b64encode(encrypted.ciphertext).decode("ascii"),
        base64.b64encode(nonce).decode("ascii"),
    )


def decrypt_secret(cipher_text: str, nonce: str, encryption_key: str | None) -> str:
    box = _box(encryption_key)
    try:
        message = box.decrypt(base64.b64decode(cipher_text), base64.b64decode(nonce))
        return message.decode("utf-8")
    except (CryptoError, ValueError) as exc:
        raise CredentialDecryptionError(exc) from exc
