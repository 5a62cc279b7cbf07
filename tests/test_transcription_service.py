import pytest

from helpers import FakeAdapter, FakeRegistry
from scribeboard.exceptions import (
    AudioAssetNotFoundError,
    CredentialNotConfiguredError,
    SpeakerNotFoundError,
    TranscriptionNotFoundError,
    UnsupportedProviderError,
)
from scribeboard.extensions import db
from scribeboard.models import Segment, Speaker, Transcription, TranscriptionStatus
from scribeboard.providers import SegmentResult, SpeakerResult, TranscriptionResult, WordTiming
from scribeboard.providers.mappers import map_openai_response
from scribeboard.services.transcriptions import TranscriptionService


def _result():
    segments = [
        SegmentResult(speaker_key='B', start_ms=2000, end_ms=3000, text='second'),
        SegmentResult(
            speaker_key='A', start_ms=0, end_ms=1500, text='first', confidence=0.9,
            words=[WordTiming(start_ms=0, end_ms=700, text='fir'), WordTiming(start_ms=700, end_ms=1500, text='st')],
        ),
        SegmentResult(speaker_key='ghost', start_ms=3000, end_ms=3500, text='unmatched'),
    ]
    return TranscriptionResult(
        external_job_id='ext-1',
        language='en',
        duration_seconds=12.5,
        confidence=0.8,
        segments=segments,
        speakers=[SpeakerResult(speaker_key='B', display_name='Speaker 1'),
                  SpeakerResult(speaker_key='A', display_name='Speaker 2')],
        metadata={'id': 'ext-1'},
    )


def _service(adapter):
    return TranscriptionService(db.session, FakeRegistry(adapter))


def _create(service, user, asset, **kwargs):
    kwargs.setdefault('provider', 'OPENAI')
    return service.create_job(user_id=user.id, audio_asset_id=asset.id, **kwargs)


def test_create_job_defaults(user, audio_asset):
    job = _create(_service(FakeAdapter()), user, audio_asset, custom_prompt='acme glossary')

    assert job.status == TranscriptionStatus.PENDING
    assert job.prompt_used == 'acme glossary'
    assert job.job_metadata == {'diarize': True, 'additional_config': {}, 'language': None}
    assert job.completed_at is None


def test_create_job_prompt_template_wins(user, audio_asset):
    job = _create(
        _service(FakeAdapter()), user, audio_asset,
        prompt_template='meeting', custom_prompt='custom', diarize=False, language='fr',
        additional_config={'smart_format': False},
    )
    assert job.prompt_used == 'meeting'
    assert job.custom_prompt == 'custom'
    assert job.job_metadata == {'diarize': False, 'additional_config': {'smart_format': False}, 'language': 'fr'}


def test_create_job_rejects_foreign_asset(other_user, audio_asset):
    with pytest.raises(AudioAssetNotFoundError):
        _create(_service(FakeAdapter()), other_user, audio_asset)
    assert Transcription.query.count() == 0


def test_process_persists_result(user, audio_asset):
    adapter = FakeAdapter(_result())
    service = _service(adapter)
    job = _create(service, user, audio_asset, model='whisper-1', custom_prompt='names', language='en')

    service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.status == TranscriptionStatus.COMPLETED
    assert job.completed_at is not None
    assert job.external_job_id == 'ext-1'
    assert job.duration_seconds == 12.5
    assert job.language == 'en'
    assert job.job_metadata['provider_response'] == {'id': 'ext-1'}
    assert job.job_metadata['diarize'] is True

    payload = adapter.payloads[0]
    assert payload.file_url == audio_asset.file_url
    assert payload.model == 'whisper-1'
    assert payload.prompt == 'names'
    assert payload.language == 'en'

    speakers = {s.speaker_key: s for s in Speaker.query.filter_by(transcription_id=job.id)}
    segments = Segment.query.filter_by(transcription_id=job.id).order_by(Segment.start_ms).all()
    assert [s.text for s in segments] == ['first', 'second', 'unmatched']
    assert segments[0].speaker_id == speakers['A'].id
    assert segments[1].speaker_id == speakers['B'].id
    assert segments[2].speaker_id is None
    assert segments[2].speaker_key == 'ghost'
    assert segments[0].words == [
        {'start_ms': 0, 'end_ms': 700, 'text': 'fir', 'confidence': None},
        {'start_ms': 700, 'end_ms': 1500, 'text': 'st', 'confidence': None},
    ]


def test_processing_twice_replaces_rows(user, audio_asset):
    service = _service(FakeAdapter(_result()))
    job = _create(service, user, audio_asset)

    service.process(job.id)
    first = sorted((s.speaker_key, s.start_ms, s.text) for s in Segment.query.filter_by(transcription_id=job.id))
    service.process(job.id)

    segments = Segment.query.filter_by(transcription_id=job.id).all()
    assert sorted((s.speaker_key, s.start_ms, s.text) for s in segments) == first
    assert len(segments) == 3
    assert Speaker.query.filter_by(transcription_id=job.id).count() == 2


def test_adapter_failure_marks_job_failed(user, audio_asset):
    service = _service(FakeAdapter(error=RuntimeError('vendor exploded')))
    job = _create(service, user, audio_asset)

    with pytest.raises(RuntimeError):
        service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.status == TranscriptionStatus.FAILED
    assert job.error_message == 'vendor exploded'
    assert job.error_code is None
    assert job.completed_at is None
    assert Segment.query.filter_by(transcription_id=job.id).count() == 0
    assert Speaker.query.filter_by(transcription_id=job.id).count() == 0


def test_coded_failure_records_error_code(user, audio_asset):
    service = _service(FakeAdapter(error=CredentialNotConfiguredError('OPENAI')))
    job = _create(service, user, audio_asset)

    with pytest.raises(CredentialNotConfiguredError):
        service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.error_code == 'API_KEY_MISSING'
    assert 'OPENAI' in job.error_message


def test_failure_keeps_previous_transcript(user, audio_asset):
    adapter = FakeAdapter(_result())
    service = _service(adapter)
    job = _create(service, user, audio_asset)
    service.process(job.id)

    adapter.error = RuntimeError('second run failed')
    with pytest.raises(RuntimeError):
        service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.status == TranscriptionStatus.FAILED
    assert job.completed_at is None
    assert Segment.query.filter_by(transcription_id=job.id).count() == 3


def test_failure_while_saving_result_keeps_previous_transcript(user, audio_asset):
    adapter = FakeAdapter(_result())
    service = _service(adapter)
    job = _create(service, user, audio_asset)
    service.process(job.id)

    # not JSON serializable, so the commit of the new rows fails
    adapter.result = TranscriptionResult(
        segments=[SegmentResult(speaker_key='A', start_ms=0, end_ms=10, text='replacement')],
        speakers=[SpeakerResult(speaker_key='A', display_name='Speaker 1')],
        metadata={'bad': object()},
    )
    with pytest.raises(Exception):
        service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.status == TranscriptionStatus.FAILED
    assert job.completed_at is None
    assert Segment.query.filter_by(transcription_id=job.id).count() == 3
    assert Speaker.query.filter_by(transcription_id=job.id).count() == 2
    assert 'replacement' not in [s.text for s in Segment.query.filter_by(transcription_id=job.id)]


def test_rerun_of_failed_job_clears_error(user, audio_asset):
    adapter = FakeAdapter(error=RuntimeError('temporary'))
    service = _service(adapter)
    job = _create(service, user, audio_asset)
    with pytest.raises(RuntimeError):
        service.process(job.id)

    adapter.error = None
    adapter.result = _result()
    service.process(job.id)

    job = db.session.get(Transcription, job.id)
    assert job.status == TranscriptionStatus.COMPLETED
    assert job.error_code is None
    assert job.error_message is None


def test_unknown_job_raises_without_mutation(user):
    with pytest.raises(TranscriptionNotFoundError):
        _service(FakeAdapter()).process(9999)


def test_unsupported_provider_leaves_job_pending(user, audio_asset):
    service = _service(None)
    job = _create(service, user, audio_asset)

    with pytest.raises(UnsupportedProviderError):
        service.process(job.id)

    assert db.session.get(Transcription, job.id).status == TranscriptionStatus.PENDING


def test_openai_end_to_end_duration_falls_back_to_asset(user, audio_asset):
    raw = {'id': 'task-9', 'segments': [{'speaker': 'speaker_0', 'start': 4.2, 'text': 'no end here'}]}
    service = _service(FakeAdapter(map_openai_response(raw)))
    job = _create(service, user, audio_asset, provider='OPENAI')

    service.process(job.id)

    job = db.session.get(Transcription, job.id)
    segment = Segment.query.filter_by(transcription_id=job.id).one()
    assert segment.end_ms == segment.start_ms == 4200
    assert job.duration_seconds == 45


def test_get_with_segments_orders_by_start(user, other_user, audio_asset):
    service = _service(FakeAdapter(_result()))
    job = _create(service, user, audio_asset)
    service.process(job.id)

    detail = service.get_with_segments(job.id, user.id)

    assert [s.start_ms for s in detail.segments] == [0, 2000, 3000]
    assert detail.transcription.audio_asset.id == audio_asset.id
    assert [s.speaker_key for s in detail.speakers] == ['B', 'A']
    assert service.get_with_segments(job.id, other_user.id) is None


def test_list_for_user_newest_first(user, audio_asset):
    service = _service(FakeAdapter())
    ids = [_create(service, user, audio_asset).id for _ in range(3)]
    assert [j.id for j in service.list_for_user(user.id, limit=2)] == ids[::-1][:2]


def test_update_metadata_only_touches_given_fields(user, audio_asset):
    service = _service(FakeAdapter())
    job = _create(service, user, audio_asset, custom_prompt='keep me')

    service.update_metadata(job.id, user.id, {'title': '  Weekly sync  '})
    assert job.title == 'Weekly sync'
    assert job.custom_prompt == 'keep me'

    service.update_metadata(job.id, user.id, {'custom_prompt': '   ', 'title': None})
    assert job.custom_prompt is None
    assert job.title is None
    assert job.status == TranscriptionStatus.PENDING


def test_rename_speaker_requires_matching_job(user, other_user, audio_asset):
    service = _service(FakeAdapter(_result()))
    job = _create(service, user, audio_asset)
    service.process(job.id)
    speaker = Speaker.query.filter_by(transcription_id=job.id, speaker_key='A').one()

    renamed = service.rename_speaker(job.id, user.id, speaker.id, 'Alice')
    assert renamed.display_name == 'Alice'

    with pytest.raises(SpeakerNotFoundError):
        service.rename_speaker(job.id + 1, user.id, speaker.id, 'Bob')
    with pytest.raises(SpeakerNotFoundError):
        service.rename_speaker(job.id, other_user.id, speaker.id, 'Mallory')
