from ..extensions import db
from .base import UserScopedMixin, TimestampMixin


class AudioAsset(db.Model, UserScopedMixin, TimestampMixin):
    __tablename__ = "audio_assets"
    id = db.Column(db.Integer, primary_key=True)
    storage_provider = db.Column(db.String(20), nullable=False)  # LOCAL/S3
    file_url = db.Column(db.String(1024), nullable=False)
    file_name = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(255))
    size_bytes = db.Column(db.BigInteger, nullable=False)
    duration_seconds = db.Column(db.Integer)
    checksum = db.Column(db.String(64))  # sha256 hex
    expires_at = db.Column(db.DateTime(timezone=True))
