"""
Tests for the HTTP routes
"""
import time

import pytest

from profile_review.models import AnalysisResult, FinalReport, ScoreSet
from profile_review.utils.exceptions import ExternalAPIError, ProfileFetchExhausted

PROFILE_URL = "https://www.linkedin.com/in/ana-silva/"
PROFILE_BLOCK = {
    "name": "Ana Silva",
    "headline": "Dev",
    "location": "Location not specified",
    "profileUrl": PROFILE_URL,
}


def _full_report():
    return FinalReport(
        profile=PROFILE_BLOCK,
        objective='first_job',
        analysis=AnalysisResult(analysis_text='# Report', objective='first_job'),
        scores=ScoreSet(),
    )


class TestScrapeRoute:

    @pytest.mark.parametrize("path", ['/api/scrape', '/scrape'])
    def test_full_success(self, client, review_service, path):
        review_service.fetch_and_analyze.return_value = _full_report()

        response = client.post(path, json={"profileUrl": PROFILE_URL, "objective": "first_job"})

        assert response.status_code == 200
        body = response.get_json()
        assert body['success'] is True
        assert body['data']['profile']['name'] == 'Ana Silva'
        assert body['data']['scores']['headline_quality'] == 7
        review_service.fetch_and_analyze.assert_called_once_with(PROFILE_URL, 'first_job')

    def test_default_objective_passed_as_none(self, client, review_service):
        review_service.fetch_and_analyze.return_value = _full_report()
        client.post('/api/scrape', json={"profileUrl": PROFILE_URL})
        review_service.fetch_and_analyze.assert_called_once_with(PROFILE_URL, None)

    def test_partial_success(self, client, review_service):
        review_service.fetch_and_analyze.return_value = FinalReport.partial_from(
            PROFILE_BLOCK, 'general', [{"firstName": "Ana"}], "analysis exploded"
        )

        response = client.post('/api/scrape', json={"profileUrl": PROFILE_URL})

        assert response.status_code == 207
        body = response.get_json()
        assert body['success'] is True
        assert body['partialSuccess'] is True
        assert body['noteType'] == 'warning'
        assert body['note']
        assert body['data']['partial'] is True
        assert body['data']['error'] == "analysis exploded"

    @pytest.mark.parametrize("payload", [{}, {"profileUrl": ""}, {"profileUrl": "   "}, {"objective": "general"}])
    def test_validation_errors(self, client, review_service, payload):
        response = client.post('/api/scrape', json=payload)
        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'VALIDATION_ERROR'
        review_service.fetch_and_analyze.assert_not_called()

    def test_non_json_body(self, client, review_service):
        response = client.post('/api/scrape', data='profileUrl=x', content_type='text/plain')
        assert response.status_code == 400

    def test_fetch_exhausted(self, client, review_service):
        review_service.fetch_and_analyze.side_effect = ProfileFetchExhausted(
            attempts=3,
            last_error="403 Client Error",
            details={'status_code': 403, 'api_error': {'error': 'cookie expired'}}
        )

        response = client.post('/api/scrape', json={"profileUrl": PROFILE_URL})

        assert response.status_code == 502
        body = response.get_json()
        assert body['success'] is False
        assert body['contactSupport'] is True
        assert body['error_code'] == 'PROFILE_FETCH_EXHAUSTED'
        assert body['details']['api_error'] == {'error': 'cookie expired'}

    def test_request_deadline(self, app, client, review_service, settings):
        from dataclasses import replace
        from profile_review.extensions import SETTINGS_KEY
        app.extensions[SETTINGS_KEY] = replace(settings, request_timeout_seconds=0.05)
        review_service.fetch_and_analyze.side_effect = lambda *args: time.sleep(0.5)

        response = client.post('/api/scrape', json={"profileUrl": PROFILE_URL})

        assert response.status_code == 504
        assert response.get_json()['error_code'] == 'REQUEST_TIMEOUT'


class TestObjectivesRoute:

    @pytest.mark.parametrize("path", ['/api/objectives', '/objectives'])
    def test_lists_objectives(self, client, path):
        response = client.get(path)
        assert response.status_code == 200
        ids = [objective['id'] for objective in response.get_json()['objectives']]
        assert ids == ['first_job', 'career_upgrade', 'international', 'ssi_improvement']


class TestChatRoute:

    @pytest.mark.parametrize("path", ['/api/chat', '/chat'])
    def test_chat(self, client, chat_service, path):
        chat_service.reply.return_value = {'success': True, 'message': 'Hi!', 'timestamp': 'now'}

        response = client.post(path, json={
            "message": "How do I write a resume?",
            "history": [{"role": "user", "content": "Hello"}]
        })

        assert response.status_code == 200
        assert response.get_json()['message'] == 'Hi!'
        chat_service.reply.assert_called_once_with(
            "How do I write a resume?",
            role='recruiter',
            history=[{"role": "user", "content": "Hello"}]
        )

    def test_empty_message(self, client, chat_service):
        response = client.post('/api/chat', json={"message": "  "})
        assert response.status_code == 400
        chat_service.reply.assert_not_called()

    def test_provider_error(self, client, chat_service):
        chat_service.reply.side_effect = ExternalAPIError('OpenAI', 'Error processing message')
        response = client.post('/api/chat', json={"message": "hello"})
        assert response.status_code == 502
        assert response.get_json()['details']['service'] == 'OpenAI'


class TestHealthRoutes:

    def test_ping(self, client):
        response = client.get('/ping')
        assert response.status_code == 200
        assert response.data == b'pong'

    def test_healthz(self, client):
        assert client.get('/healthz').get_json() == {"status": "ok"}

    def test_health(self, client):
        body = client.get('/health').get_json()
        assert body['status'] == 'healthy'
        assert body['services']['openai'] == 'configured'
        assert body['services']['assistant'] == 'configured'
        assert 'firebase' in body['services']

    def test_unknown_route(self, client):
        response = client.get('/api/nope')
        assert response.status_code == 404
        assert response.get_json()['error_code'] == 'NOT_FOUND'
