import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from scribeboard import create_app
from scribeboard.extensions import db
from scribeboard.models import AudioAsset, User


@pytest.fixture
def app(tmp_path):
    app = create_app("config.TestConfig")
    app.config['LOCAL_STORAGE_DIR'] = str(tmp_path / 'storage')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(email='owner@example.com', password='secret-password'):
    user = User(email=email, name='Owner')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def user(app):
    return make_user()


@pytest.fixture
def other_user(app):
    return make_user(email='someone-else@example.com')


@pytest.fixture
def audio_asset(user):
    asset = AudioAsset(
        user_id=user.id,
        storage_provider='LOCAL',
        file_url='https://files.example.com/audio/meeting.mp3',
        file_name='meeting.mp3',
        mime_type='audio/mpeg',
        size_bytes=2048,
        duration_seconds=45,
    )
    db.session.add(asset)
    db.session.commit()
    return asset


@pytest.fixture
def login(client, user):
    with client.session_transaction() as sess:
        sess['_user_id'] = str(user.id)
        sess['_fresh'] = True
    return user
