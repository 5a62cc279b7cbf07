"""JSON shapes returned by the API (snake_case keys, ISO timestamps)."""

import math


def _iso(value):
    return value.isoformat() if value else None


def _enum(value):
    return getattr(value, "value", value)


def _safe_number(value):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if math.isfinite(value) else None


def parse_word_timings(value):
    """Stored word list back to API shape; malformed entries are dropped."""
    if not isinstance(value, list):
        return None
    entries = []
    for item in value:
        if not isinstance(item, dict):
            continue
        text = item.get("text") if isinstance(item.get("text"), str) else item.get("word")
        start = _safe_number(item.get("start_ms", item.get("start")))
        end = _safe_number(item.get("end_ms", item.get("end")))
        if isinstance(text, str) and text and start is not None and end is not None:
            entries.append({
                "text": text,
                "start_ms": start,
                "end_ms": end,
                "confidence": _safe_number(item.get("confidence")),
            })
    return entries or None


def serialize_audio_asset(asset):
    if asset is None:
        return None
    return {
        "id": asset.id,
        "user_id": asset.user_id,
        "storage_provider": asset.storage_provider,
        "file_url": asset.file_url,
        "file_name": asset.file_name,
        "mime_type": asset.mime_type,
        "size_bytes": asset.size_bytes,
        "duration_seconds": asset.duration_seconds,
        "checksum": asset.checksum,
        "expires_at": _iso(asset.expires_at),
        "created_at": _iso(asset.created_at),
    }


def serialize_speaker(speaker):
    return {
        "id": speaker.id,
        "transcription_id": speaker.transcription_id,
        "speaker_key": speaker.speaker_key,
        "display_name": speaker.display_name,
        "created_at": _iso(speaker.created_at),
        "updated_at": _iso(speaker.updated_at),
    }


def serialize_segment(segment):
    return {
        "id": segment.id,
        "transcription_id": segment.transcription_id,
        "speaker_id": segment.speaker_id,
        "speaker_key": segment.speaker_key,
        "start_ms": segment.start_ms,
        "end_ms": segment.end_ms,
        "text": segment.text,
        "confidence": segment.confidence,
        "words": parse_word_timings(segment.words),
        "created_at": _iso(segment.created_at),
    }


def serialize_transcription(job, include_asset=True):
    data = {
        "id": job.id,
        "user_id": job.user_id,
        "audio_asset_id": job.audio_asset_id,
        "title": job.title,
        "status": _enum(job.status),
        "provider": _enum(job.provider),
        "model": job.model,
        "external_job_id": job.external_job_id,
        "language": job.language,
        "duration_seconds": job.duration_seconds,
        "prompt_used": job.prompt_used,
        "custom_prompt": job.custom_prompt,
        "confidence": job.confidence,
        "metadata": job.job_metadata,
        "error_code": job.error_code,
        "error_message": job.error_message,
        "created_at": _iso(job.created_at),
        "updated_at": _iso(job.updated_at),
        "completed_at": _iso(job.completed_at),
    }
    if include_asset:
        data["audio_asset"] = serialize_audio_asset(job.audio_asset)
    return data


def serialize_detail(detail):
    data = serialize_transcription(detail.transcription)
    data["speakers"] = [serialize_speaker(s) for s in detail.speakers]
    data["segments"] = [serialize_segment(s) for s in detail.segments]
    return data


def serialize_api_key(record):
    # the secret itself never leaves the credential store
    return {
        "id": record.id,
        "provider": _enum(record.provider),
        "nickname": record.nickname,
        "created_at": _iso(record.created_at),
        "updated_at": _iso(record.updated_at),
    }
