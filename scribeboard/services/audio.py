import hashlib
import time
from datetime import datetime, timedelta, timezone

from flask import current_app

from ..exceptions import UploadError
from ..extensions import db
from ..models import AudioAsset
from .storage import save_file, storage_provider_name


def parse_duration(raw) -> int | None:
    """Positive number of seconds, rounded; anything else is ignored."""
    if raw is None:
        return None
    raw = str(raw).strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if value != value or value <= 0 or value == float('inf'):
        return None
    return int(value + 0.5)


def _measure(stream):
    """Size and sha256 of a seekable stream, rewound afterwards."""
    digest = hashlib.sha256()
    size = 0
    stream.seek(0)
    for chunk in iter(lambda: stream.read(1024 * 1024), b''):
        digest.update(chunk)
        size += len(chunk)
    stream.seek(0)
    return size, digest.hexdigest()


def register_upload(user_id, file_storage, duration_seconds=None) -> AudioAsset:
    if file_storage is None or not file_storage.filename:
        raise UploadError("Missing file")

    size, checksum = _measure(file_storage.stream)
    max_bytes = current_app.config.get('MAX_UPLOAD_BYTES')
    if max_bytes and size > max_bytes:
        raise UploadError(f"File too large (limit {max_bytes} bytes)")

    prefix = f"audio/{user_id}/{int(time.time() * 1000)}"
    file_url = save_file(file_storage, prefix)

    retention = current_app.config.get('AUDIO_RETENTION_DAYS', 60)
    asset = AudioAsset(
        user_id=user_id,
        storage_provider=storage_provider_name(),
        file_url=file_url,
        file_name=file_storage.filename,
        mime_type=file_storage.mimetype or None,
        size_bytes=size,
        duration_seconds=parse_duration(duration_seconds),
        checksum=checksum,
        expires_at=datetime.now(timezone.utc) + timedelta(days=retention),
    )
    db.session.add(asset)
    db.session.commit()
    current_app.logger.info('Stored audio asset %s (%s bytes) for user %s', asset.id, size, user_id)
    return asset
