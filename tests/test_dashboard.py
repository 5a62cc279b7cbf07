from scribeboard.extensions import db
from scribeboard.models import Transcription, TranscriptionProvider


def test_dashboard_redirects_to_login(client):
    resp = client.get('/app/')
    assert resp.status_code == 302
    assert '/auth/login' in resp.headers['Location']


def test_login_and_logout(client, user):
    resp = client.post('/auth/login', data={'email': 'Owner@Example.com', 'password': 'secret-password'})
    assert resp.status_code == 302
    assert resp.headers['Location'].endswith('/app/')

    assert client.get('/app/').status_code == 200
    assert client.post('/auth/logout').status_code == 302
    assert client.get('/app/').status_code == 302


def test_bad_password(client, user):
    resp = client.post('/auth/login', data={'email': 'owner@example.com', 'password': 'nope'})
    assert resp.status_code == 200
    assert b'Invalid credentials' in resp.data


def test_detail_page(client, login, audio_asset):
    job = Transcription(user_id=login.id, audio_asset_id=audio_asset.id, provider=TranscriptionProvider.OPENAI,
                        title='Standup')
    db.session.add(job)
    db.session.commit()

    assert b'Standup' in client.get('/app/').data
    assert client.get(f'/app/transcriptions/{job.id}').status_code == 200
    assert client.get('/app/transcriptions/999').status_code == 404
