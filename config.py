import base64
import os
from dotenv import load_dotenv
load_dotenv()


def _float_or_none(value):
    return float(value) if value else None


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///scribeboard.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    RQ_QUEUE = os.getenv("RQ_QUEUE", "default")
    # run background jobs inline instead of handing them to RQ / a thread
    TASKS_EAGER = os.getenv("TASKS_EAGER", "false").lower() in ("1", "true", "yes")
    # base64 encoded 32 byte key for the API key secret box
    ENCRYPTION_KEY = os.getenv("ENCRYPTION_KEY")
    DEEPGRAM_API_BASE = os.getenv("DEEPGRAM_API_BASE", "https://api.deepgram.com")
    ELEVENLABS_API_BASE = os.getenv("ELEVENLABS_API_BASE", "https://api.elevenlabs.io")
    OPENAI_API_BASE = os.getenv("OPENAI_API_BASE", "https://api.openai.com/v1")
    PROVIDER_HTTP_TIMEOUT = _float_or_none(os.getenv("PROVIDER_HTTP_TIMEOUT"))
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "local")
    LOCAL_STORAGE_DIR = os.getenv("LOCAL_STORAGE_DIR", "./storage")
    S3_ENDPOINT = os.getenv("S3_ENDPOINT")
    S3_REGION = os.getenv("S3_REGION")
    S3_BUCKET = os.getenv("S3_BUCKET")
    S3_ACCESS_KEY = os.getenv("S3_ACCESS_KEY")
    S3_SECRET_KEY = os.getenv("S3_SECRET_KEY")
    S3_PUBLIC_BASE_URL = os.getenv("S3_PUBLIC_BASE_URL")
    MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(1024 * 1024 * 1024)))
    AUDIO_RETENTION_DAYS = int(os.getenv("AUDIO_RETENTION_DAYS", "60"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    REDIS_URL = None
    TASKS_EAGER = True
    ENCRYPTION_KEY = base64.b64encode(b"k" * 32).decode("ascii")
    STORAGE_BACKEND = "local"
    LOG_LEVEL = "DEBUG"
