"""
Pytest configuration and fixtures
"""
import json
import os
import random
from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import requests

# Set test environment
os.environ['FLASK_ENV'] = 'testing'

from profile_review.config import Settings


# ========================================
# Settings
# ========================================
@pytest.fixture
def settings():
    """Settings with every sleep set to zero"""
    return Settings(
        openai_api_key='sk-test',
        openai_assistant_id='asst_test',
        apify_api_token='apify-test-token',
        apify_endpoint='https://apify.test/run-sync',
        max_fetch_attempts=3,
        max_analysis_attempts=3,
        analysis_backoff_seconds=0,
        poll_interval_seconds=0,
        max_polls=3,
        request_timeout_seconds=5,
    )


@pytest.fixture
def no_sleep():
    return Mock()


# ========================================
# Firestore
# ========================================
COOKIES_A = [
    {"domain": ".linkedin.com", "name": "li_at", "value": "token-a"},
    {"domain": ".linkedin.com", "name": "JSESSIONID", "value": "ajax:1"},
]
COOKIES_B = [
    {"domain": ".linkedin.com", "name": "li_at", "value": "token-b"},
]


class FakeDocument:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return self._data


class FakeFirestore:
    """Minimal Firestore client: collection(name).stream() -> documents."""

    def __init__(self, collections=None, error=None):
        self.collections = collections or {}
        self.error = error
        self.stream_calls = 0

    def collection(self, name):
        fake = self

        class _Collection:
            def stream(self):
                fake.stream_calls += 1
                if fake.error:
                    raise fake.error
                return iter(fake.collections.get(name, []))

        return _Collection()


@pytest.fixture
def cookie_documents():
    return [
        FakeDocument('accounts-1', {'ana@example.com': json.dumps(COOKIES_A)}),
        FakeDocument('accounts-2', {'bruno@example.com': json.dumps(COOKIES_B)}),
    ]


@pytest.fixture
def fake_db(cookie_documents):
    return FakeFirestore({'linkedin_cookies': cookie_documents})


@pytest.fixture
def rng():
    return random.Random(42)


# ========================================
# Apify (requests session)
# ========================================
class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text if text is not None else json.dumps(body)

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    """Replays scripted responses (or raises scripted errors) and records every post."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def post(self, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append({'url': url, 'params': params, 'json': json, 'timeout': timeout})
        if not self.responses:
            return FakeResponse(200, [])
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def make_session():
    return FakeSession


# ========================================
# OpenAI assistant
# ========================================
def assistant_message(text, role='assistant'):
    return SimpleNamespace(
        role=role,
        content=[SimpleNamespace(type='text', text=SimpleNamespace(value=text))]
    )


def make_openai_client(run_statuses=None, messages=None, create_error=None):
    """
    Scripted assistant client. run_statuses is consumed one per runs.retrieve
    call; the last status repeats once the list is exhausted.
    """
    statuses = list(run_statuses or ['completed'])
    client = Mock()
    threads = client.beta.threads

    if create_error is not None:
        threads.create.side_effect = create_error
    else:
        threads.create.return_value = SimpleNamespace(id='thread_1')
    threads.runs.create.return_value = SimpleNamespace(id='run_1')

    def retrieve(run_id, thread_id):
        status = statuses.pop(0) if len(statuses) > 1 else statuses[0]
        return SimpleNamespace(id=run_id, status=status, last_error=None)

    threads.runs.retrieve.side_effect = retrieve
    threads.messages.list.return_value = SimpleNamespace(data=messages or [])
    return client


@pytest.fixture
def openai_factory():
    return make_openai_client


# ========================================
# Flask
# ========================================
@pytest.fixture
def review_service():
    return Mock()


@pytest.fixture
def chat_service():
    return Mock()


@pytest.fixture
def app(settings, review_service, chat_service):
    """Create Flask app for testing"""
    from profile_review import create_app
    app = create_app(
        settings=settings,
        review_service=review_service,
        chat_service=chat_service,
        testing=True,
    )
    return app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture
def firestore_factory():
    return FakeFirestore


@pytest.fixture
def document_factory():
    return FakeDocument


@pytest.fixture
def response_factory():
    return FakeResponse


@pytest.fixture
def message_factory():
    return assistant_message
