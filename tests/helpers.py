"""Test doubles for the vendor HTTP session and the provider registry."""

from scribeboard.exceptions import UnsupportedProviderError


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else ('' if payload is None else str(payload))

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._payload is None:
            raise ValueError('No JSON object could be decoded')
        return self._payload


class FakeHttp:
    """Records every POST and answers with queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, headers=None, json=None, timeout=None):
        self.calls.append({'url': url, 'headers': headers, 'json': json, 'timeout': timeout})
        return self.responses.pop(0)


class FakeCredentials:
    def __init__(self, key='test-api-key-123'):
        self.key = key
        self.requests = []

    def get_decrypted_key(self, user_id, provider):
        self.requests.append((user_id, provider))
        return self.key


class FakeAdapter:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.payloads = []

    def list_models(self):
        return ['fake-1']

    def transcribe(self, payload):
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.result


class FakeRegistry:
    def __init__(self, adapter):
        self.adapter = adapter

    def get_adapter(self, provider):
        if self.adapter is None:
            raise UnsupportedProviderError(provider)
        return self.adapter
