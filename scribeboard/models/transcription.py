from enum import Enum

from ..extensions import db
from .base import UserScopedMixin, TimestampMixin


class TranscriptionProvider(str, Enum):
    DEEPGRAM = "DEEPGRAM"
    ELEVENLABS = "ELEVENLABS"
    OPENAI = "OPENAI"


class TranscriptionStatus(str, Enum):
    PENDING = "PENDING"
    UPLOADING = "UPLOADING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class Transcription(db.Model, UserScopedMixin, TimestampMixin):
    __tablename__ = "transcriptions"
    id = db.Column(db.Integer, primary_key=True)
    audio_asset_id = db.Column(db.Integer, db.ForeignKey("audio_assets.id"), nullable=False, index=True)
    title = db.Column(db.String(200))
    provider = db.Column(db.Enum(TranscriptionProvider, name="transcription_provider", native_enum=False, length=20), nullable=False)
    model = db.Column(db.String(120))
    status = db.Column(
        db.Enum(TranscriptionStatus, name="transcription_status", native_enum=False, length=20),
        nullable=False,
        default=TranscriptionStatus.PENDING,
        index=True,
    )
    external_job_id = db.Column(db.String(255))
    language = db.Column(db.String(32))
    duration_seconds = db.Column(db.Float)
    confidence = db.Column(db.Float)
    prompt_used = db.Column(db.Text)
    custom_prompt = db.Column(db.Text)
    # request options (diarize, additional_config, language) and provider_response
    job_metadata = db.Column('metadata', db.JSON)
    error_code = db.Column(db.String(64))
    error_message = db.Column(db.Text)
    completed_at = db.Column(db.DateTime(timezone=True))

    audio_asset = db.relationship("AudioAsset")

    def __repr__(self):
        return f"<Transcription id={self.id} provider={self.provider} status={self.status}>"
