"""Initial schema: users, api keys, audio assets, transcriptions, speakers, segments

Revision ID: 0001_initial
Revises: None
Create Date: 2026-10-19 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

PROVIDERS = ('DEEPGRAM', 'ELEVENLABS', 'OPENAI')
STATUSES = ('PENDING', 'UPLOADING', 'PROCESSING', 'COMPLETED', 'FAILED', 'CANCELLED')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    # stored as VARCHAR + CHECK, no native enum types
    provider_enum = sa.Enum(*PROVIDERS, name='transcription_provider', native_enum=False, length=20)
    status_enum = sa.Enum(*STATUSES, name='transcription_status', native_enum=False, length=20)

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('name', sa.String(120)),
        *_timestamps(),
    )

    op.create_table(
        'api_keys',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('provider', provider_enum, nullable=False),
        sa.Column('encrypted', sa.Text(), nullable=False),
        sa.Column('nonce', sa.String(64), nullable=False),
        sa.Column('nickname', sa.String(120)),
        *_timestamps(),
        sa.UniqueConstraint('user_id', 'provider', name='uq_api_keys_user_provider'),
    )
    op.create_index('ix_api_keys_user_id', 'api_keys', ['user_id'])

    op.create_table(
        'audio_assets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('storage_provider', sa.String(20), nullable=False),
        sa.Column('file_url', sa.String(1024), nullable=False),
        sa.Column('file_name', sa.String(255), nullable=False),
        sa.Column('mime_type', sa.String(255)),
        sa.Column('size_bytes', sa.BigInteger(), nullable=False),
        sa.Column('duration_seconds', sa.Integer()),
        sa.Column('checksum', sa.String(64)),
        sa.Column('expires_at', sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index('ix_audio_assets_user_id', 'audio_assets', ['user_id'])

    op.create_table(
        'transcriptions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('audio_asset_id', sa.Integer(), sa.ForeignKey('audio_assets.id'), nullable=False),
        sa.Column('title', sa.String(200)),
        sa.Column('provider', provider_enum, nullable=False),
        sa.Column('model', sa.String(120)),
        sa.Column('status', status_enum, nullable=False),
        sa.Column('external_job_id', sa.String(255)),
        sa.Column('language', sa.String(32)),
        sa.Column('duration_seconds', sa.Float()),
        sa.Column('confidence', sa.Float()),
        sa.Column('prompt_used', sa.Text()),
        sa.Column('custom_prompt', sa.Text()),
        sa.Column('metadata', sa.JSON()),
        sa.Column('error_code', sa.String(64)),
        sa.Column('error_message', sa.Text()),
        sa.Column('completed_at', sa.DateTime(timezone=True)),
        *_timestamps(),
    )
    op.create_index('ix_transcriptions_user_id', 'transcriptions', ['user_id'])
    op.create_index('ix_transcriptions_audio_asset_id', 'transcriptions', ['audio_asset_id'])
    op.create_index('ix_transcriptions_status', 'transcriptions', ['status'])

    op.create_table(
        'speakers',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transcription_id', sa.Integer(), sa.ForeignKey('transcriptions.id'), nullable=False),
        sa.Column('speaker_key', sa.String(128), nullable=False),
        sa.Column('display_name', sa.String(100), nullable=False),
        *_timestamps(),
    )
    op.create_index('ix_speakers_transcription_id', 'speakers', ['transcription_id'])

    op.create_table(
        'segments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transcription_id', sa.Integer(), sa.ForeignKey('transcriptions.id'), nullable=False),
        sa.Column('speaker_id', sa.Integer(), sa.ForeignKey('speakers.id'), nullable=True),
        sa.Column('speaker_key', sa.String(128)),
        sa.Column('start_ms', sa.Integer(), nullable=False),
        sa.Column('end_ms', sa.Integer(), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('confidence', sa.Float()),
        sa.Column('words', sa.JSON()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_segments_transcription_id', 'segments', ['transcription_id'])


def downgrade() -> None:
    for table in ('segments', 'speakers', 'transcriptions', 'audio_assets', 'api_keys', 'users'):
        op.drop_table(table)
