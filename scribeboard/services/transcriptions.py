"""Transcription job lifecycle.

``TranscriptionService`` owns every status transition of a job:
PENDING -> PROCESSING -> COMPLETED | FAILED. It is also the only place that
turns an exception into a persisted FAILED state.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy import delete, select
from sqlalchemy.orm import selectinload

from ..exceptions import AudioAssetNotFoundError, SpeakerNotFoundError, TranscriptionNotFoundError
from ..extensions import db
from ..models import (
    AudioAsset,
    Segment,
    Speaker,
    Transcription,
    TranscriptionProvider,
    TranscriptionStatus,
)
from ..providers.types import ProviderTranscriptionPayload, TranscriptionResult

EDITABLE_FIELDS = ("title", "custom_prompt")


@dataclass
class TranscriptionDetail:
    transcription: Transcription
    speakers: list
    segments: list


def _now():
    return datetime.now(timezone.utc)


def _clean(value):
    if value is None:
        return None
    return value.strip() or None


class TranscriptionService:
    def __init__(self, session, registry):
        self.session = session
        self.registry = registry

    def create_job(
        self,
        user_id,
        audio_asset_id,
        provider,
        model=None,
        prompt_template=None,
        custom_prompt=None,
        language=None,
        diarize=None,
        additional_config=None,
    ) -> Transcription:
        asset = self.session.get(AudioAsset, audio_asset_id)
        if asset is None or asset.user_id != user_id:
            raise AudioAssetNotFoundError(audio_asset_id)

        job = Transcription(
            user_id=user_id,
            audio_asset_id=asset.id,
            provider=TranscriptionProvider(provider),
            model=model,
            status=TranscriptionStatus.PENDING,
            custom_prompt=custom_prompt,
            prompt_used=prompt_template or custom_prompt or None,
            job_metadata={
                "diarize": True if diarize is None else diarize,
                "additional_config": additional_config or {},
                "language": language,
            },
        )
        self.session.add(job)
        self.session.commit()
        current_app.logger.info('Created transcription %s (%s) for user %s', job.id, job.provider.value, user_id)
        return job

    def process(self, transcription_id) -> Transcription:
        job = self.session.get(Transcription, transcription_id)
        if job is None or job.audio_asset is None:
            raise TranscriptionNotFoundError(transcription_id)

        # an unsupported provider fails before the job is touched
        adapter = self.registry.get_adapter(job.provider)

        job.status = TranscriptionStatus.PROCESSING
        job.error_code = None
        job.error_message = None
        job.completed_at = None
        self.session.commit()
        current_app.logger.info('Transcription %s processing with %s', job.id, job.provider.value)

        options = dict(job.job_metadata or {})
        try:
            payload = ProviderTranscriptionPayload(
                user_id=job.user_id,
                file_url=job.audio_asset.file_url,
                model=job.model,
                prompt=job.custom_prompt or job.prompt_used,
                language=options.get("language"),
                diarize=options.get("diarize", True),
                additional_config=options.get("additional_config") or None,
            )
            result = adapter.transcribe(payload)
            self._persist_result(job, options, result)
        except Exception as exc:
            self._mark_failed(transcription_id, exc)
            raise

        current_app.logger.info(
            'Transcription %s completed: %d segments, %d speakers',
            job.id, len(result.segments), len(result.speakers),
        )
        return job

    def _persist_result(self, job, options, result: TranscriptionResult):
        # one unit of work: any failure rolls back segments, speakers and job together
        self.session.execute(delete(Segment).where(Segment.transcription_id == job.id))
        self.session.execute(delete(Speaker).where(Speaker.transcription_id == job.id))

        speakers = [
            Speaker(transcription_id=job.id, speaker_key=s.speaker_key, display_name=s.display_name)
            for s in result.speakers
        ]
        self.session.add_all(speakers)
        self.session.flush()
        speaker_ids = {s.speaker_key: s.id for s in speakers}

        self.session.add_all([
            Segment(
                transcription_id=job.id,
                speaker_id=speaker_ids.get(seg.speaker_key),
                speaker_key=seg.speaker_key,
                start_ms=seg.start_ms,
                end_ms=seg.end_ms,
                text=seg.text,
                confidence=seg.confidence,
                words=[w.model_dump() for w in seg.words] if seg.words else None,
            )
            for seg in result.segments
        ])

        job.status = TranscriptionStatus.COMPLETED
        job.external_job_id = result.external_job_id
        job.language = result.language or options.get("language")
        job.confidence = result.confidence
        if result.duration_seconds is not None:
            job.duration_seconds = result.duration_seconds
        else:
            job.duration_seconds = job.audio_asset.duration_seconds
        job.job_metadata = {**options, "provider_response": result.metadata or {}}
        job.completed_at = _now()
        self.session.commit()

    def _mark_failed(self, transcription_id, exc):
        self.session.rollback()
        code = getattr(exc, "code", None)
        current_app.logger.error('Transcription %s failed: %s', transcription_id, exc, exc_info=exc)
        try:
            job = self.session.get(Transcription, transcription_id)
            job.status = TranscriptionStatus.FAILED
            job.error_message = str(exc) or exc.__class__.__name__
            job.error_code = code if isinstance(code, str) else None
            job.completed_at = None
            self.session.commit()
        except Exception:
            self.session.rollback()
            current_app.logger.exception('Failed to persist FAILED state for transcription %s', transcription_id)

    def get_with_segments(self, transcription_id, user_id) -> TranscriptionDetail | None:
        """Job with asset, speakers and segments (by start_ms), or None if not owned."""
        job = self.session.execute(
            select(Transcription)
            .where(Transcription.id == transcription_id, Transcription.user_id == user_id)
            .options(selectinload(Transcription.audio_asset))
        ).scalar_one_or_none()
        if job is None:
            return None
        speakers = self.session.execute(
            select(Speaker).where(Speaker.transcription_id == job.id).order_by(Speaker.id)
        ).scalars().all()
        segments = self.session.execute(
            select(Segment)
            .where(Segment.transcription_id == job.id)
            .order_by(Segment.start_ms.asc(), Segment.id.asc())
        ).scalars().all()
        return TranscriptionDetail(job, speakers, segments)

    def list_for_user(self, user_id, limit=20) -> list[Transcription]:
        return self.session.execute(
            select(Transcription)
            .where(Transcription.user_id == user_id)
            .options(selectinload(Transcription.audio_asset))
            .order_by(Transcription.created_at.desc(), Transcription.id.desc())
            .limit(limit)
        ).scalars().all()

    def update_metadata(self, transcription_id, user_id, fields: dict) -> Transcription:
        job = self.session.execute(
            select(Transcription).where(Transcription.id == transcription_id, Transcription.user_id == user_id)
        ).scalar_one_or_none()
        if job is None:
            raise TranscriptionNotFoundError(transcription_id)
        for name in EDITABLE_FIELDS:
            if name in fields:
                setattr(job, name, _clean(fields[name]))
        self.session.commit()
        return job

    def rename_speaker(self, transcription_id, user_id, speaker_id, display_name) -> Speaker:
        speaker = self.session.execute(
            select(Speaker)
            .join(Transcription, Transcription.id == Speaker.transcription_id)
            .where(
                Speaker.id == speaker_id,
                Speaker.transcription_id == transcription_id,
                Transcription.user_id == user_id,
            )
        ).scalar_one_or_none()
        if speaker is None:
            raise SpeakerNotFoundError(speaker_id)
        speaker.display_name = display_name.strip()
        self.session.commit()
        return speaker


def get_transcription_service() -> TranscriptionService:
    return TranscriptionService(db.session, current_app.extensions["provider_registry"])
