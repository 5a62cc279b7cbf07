from ..extensions import db
from .base import TimestampMixin


class Speaker(db.Model, TimestampMixin):
    __tablename__ = "speakers"
    id = db.Column(db.Integer, primary_key=True)
    transcription_id = db.Column(db.Integer, db.ForeignKey("transcriptions.id"), nullable=False, index=True)
    # vendor-local label, unique within a transcription when created
    speaker_key = db.Column(db.String(128), nullable=False)
    display_name = db.Column(db.String(100), nullable=False)

    def __repr__(self):
        return f"<Speaker id={self.id} transcription_id={self.transcription_id} key={self.speaker_key}>"
