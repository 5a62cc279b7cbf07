from flask import current_app, has_app_context

from ..extensions import rq
from ..services.transcriptions import get_transcription_service


def _run_transcription(transcription_id: int):
    get_transcription_service().process(transcription_id)
    return transcription_id


def process_transcription_job(transcription_id: int):
    """Public job entrypoint.

    RQ workers call this without an app context, so one is created here.
    In-process runs already have one and reuse it.
    """
    if has_app_context():
        return _run_transcription(transcription_id)
    # lazy import to avoid circular imports at module import time
    from scribeboard import create_app
    app = create_app()
    with app.app_context():
        return _run_transcription(transcription_id)


def submit_transcription(transcription_id: int):
    """Fire-and-forget processing of a job; never raises for job failures."""
    current_app.logger.info('Submitting transcription %s for processing', transcription_id)
    return rq.enqueue(process_transcription_job, transcription_id, job_timeout=3600)
