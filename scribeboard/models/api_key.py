from ..extensions import db
from .base import UserScopedMixin, TimestampMixin
from .transcription import TranscriptionProvider


class ApiKey(db.Model, UserScopedMixin, TimestampMixin):
    """A user's vendor API key, stored encrypted (see utils.encryption)."""
    __tablename__ = "api_keys"
    id = db.Column(db.Integer, primary_key=True)
    provider = db.Column(db.Enum(TranscriptionProvider, name="transcription_provider", native_enum=False, length=20), nullable=False)
    # base64 secretbox ciphertext and nonce
    encrypted = db.Column(db.Text, nullable=False)
    nonce = db.Column(db.String(64), nullable=False)
    nickname = db.Column(db.String(120))

    __table_args__ = (
        db.UniqueConstraint('user_id', 'provider', name='uq_api_keys_user_provider'),
    )

    def __repr__(self):
        return f"<ApiKey user_id={self.user_id} provider={self.provider}>"
