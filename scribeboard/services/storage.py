import os

import boto3
from botocore.client import Config
from flask import current_app
from werkzeug.utils import secure_filename

# presigned GET URLs have to outlive the vendor fetching the audio
PRESIGNED_URL_TTL = 7 * 24 * 3600


def _ensure_local_dir():
    d = current_app.config['LOCAL_STORAGE_DIR']
    os.makedirs(d, exist_ok=True)
    return d


def _s3_client():
    s3_kwargs = {}
    endpoint = current_app.config.get('S3_ENDPOINT')
    if endpoint:
        s3_kwargs['endpoint_url'] = endpoint
    region = current_app.config.get('S3_REGION')
    if region:
        s3_kwargs['region_name'] = region
    return boto3.client(
        's3',
        aws_access_key_id=current_app.config.get('S3_ACCESS_KEY'),
        aws_secret_access_key=current_app.config.get('S3_SECRET_KEY'),
        config=Config(signature_version='s3v4', s3={'addressing_style': 'virtual'}),
        **s3_kwargs,
    )


def storage_provider_name():
    return 'S3' if current_app.config.get('STORAGE_BACKEND', 'local') == 's3' else 'LOCAL'


def save_file(file_storage, prefix=""):
    """Store an uploaded file and return a URL a provider can fetch.

    Local storage returns a ``file://`` URL. S3 returns
    ``S3_PUBLIC_BASE_URL/<key>`` when configured, else a presigned GET URL.
    """
    filename = secure_filename(file_storage.filename) or 'audio'
    key = f"{prefix}-{filename}" if prefix else filename

    if storage_provider_name() == 'S3':
        s3 = _s3_client()
        bucket = current_app.config.get('S3_BUCKET')
        stream = getattr(file_storage, 'stream', file_storage)
        extra = {'ContentType': file_storage.mimetype} if getattr(file_storage, 'mimetype', None) else None
        s3.upload_fileobj(stream, bucket, key, ExtraArgs=extra)
        public_base = current_app.config.get('S3_PUBLIC_BASE_URL')
        if public_base:
            return f"{public_base.rstrip('/')}/{key}"
        return s3.generate_presigned_url(
            'get_object',
            Params={'Bucket': bucket, 'Key': key},
            ExpiresIn=PRESIGNED_URL_TTL,
        )

    d = _ensure_local_dir()
    path = os.path.join(d, key)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    file_storage.save(path)
    return f"file://{os.path.abspath(path)}"
