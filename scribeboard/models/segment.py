from ..extensions import db


class Segment(db.Model):
    __tablename__ = "segments"
    id = db.Column(db.Integer, primary_key=True)
    transcription_id = db.Column(db.Integer, db.ForeignKey("transcriptions.id"), nullable=False, index=True)
    speaker_id = db.Column(db.Integer, db.ForeignKey("speakers.id"), nullable=True)
    # kept even when speaker_id resolves, so unresolved keys survive
    speaker_key = db.Column(db.String(128))
    start_ms = db.Column(db.Integer, nullable=False)
    end_ms = db.Column(db.Integer, nullable=False)
    text = db.Column(db.Text, nullable=False, default='')
    confidence = db.Column(db.Float)
    # [{start_ms, end_ms, text, confidence}]
    words = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), server_default=db.func.now())
