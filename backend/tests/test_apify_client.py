"""
Tests for the Apify profile fetcher
"""
import pytest
import requests

from profile_review.models import PayloadShape
from profile_review.services.apify_client import (
    ProfileFetcher,
    build_payloads,
    is_valid_response,
    process_profile_data
)
from profile_review.services.credential_store import CredentialSource
from profile_review.utils.exceptions import ProfileFetchExhausted, UpstreamUnavailable

PROFILE_URL = "https://www.linkedin.com/in/ana-silva/"
ANA = {"items": [{"firstName": "Ana", "lastName": "Silva", "headline": "Dev"}]}


class TestResponsePredicate:

    @pytest.mark.parametrize("data, expected", [
        ([], False),
        ([{}], True),
        ({"items": []}, False),
        ({"items": [{}]}, True),
        ({"firstName": "A"}, True),
        ({"foo": "bar"}, False),
        ({"profileId": "123"}, True),
        (None, False),
        ("profile", False),
    ])
    def test_is_valid_response(self, data, expected):
        assert is_valid_response(data) is expected

    def test_process_unwraps_items(self):
        assert process_profile_data(ANA) == ANA["items"]

    def test_process_keeps_lists_and_plain_dicts(self):
        assert process_profile_data([{"a": 1}]) == [{"a": 1}]
        assert process_profile_data({"firstName": "A"}) == {"firstName": "A"}


class TestBuildPayloads:

    def test_three_shapes_in_order(self, fake_db, rng):
        credential_set = CredentialSource(fake_db, rng=rng).get_random_credential_set()
        payloads = build_payloads(PROFILE_URL, credential_set, {"useApifyProxy": True})
        assert [shape for shape, _ in payloads] == [
            PayloadShape.INPUT_URLS,
            PayloadShape.INPUT_PROFILE_URLS,
            PayloadShape.FLAT_URLS,
        ]
        assert payloads[0][1]["input"]["urls"] == [PROFILE_URL]
        assert payloads[1][1]["input"]["profileUrls"] == [PROFILE_URL]
        assert payloads[2][1]["urls"] == [PROFILE_URL]
        for _, payload in payloads:
            body = payload.get("input", payload)
            assert body["cookie"] == credential_set.cookies
            assert body["proxy"] == {"useApifyProxy": True}


class TestProfileFetcher:

    def _fetcher(self, settings, db, session, rng):
        return ProfileFetcher(settings, CredentialSource(db, rng=rng), session=session)

    def test_first_shape_accepted(self, settings, fake_db, rng, make_session, response_factory):
        session = make_session([response_factory(200, ANA)])
        profile = self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL)

        assert profile == ANA["items"]
        assert len(session.calls) == 1
        call = session.calls[0]
        assert call["url"] == settings.apify_endpoint
        assert call["params"] == {"token": settings.apify_api_token}
        assert call["timeout"] == settings.apify_timeout
        assert call["json"]["input"]["urls"] == [PROFILE_URL]

    def test_falls_through_shapes(self, settings, fake_db, rng, make_session, response_factory):
        session = make_session([
            response_factory(200, []),
            response_factory(500, {"error": "actor crashed"}),
            response_factory(200, {"firstName": "Ana"}),
        ])
        profile = self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL)

        assert profile == {"firstName": "Ana"}
        assert len(session.calls) == 3
        assert "urls" in session.calls[2]["json"]

    def test_rotates_credentials_between_attempts(self, settings, fake_db, rng, make_session, response_factory):
        session = make_session([response_factory(200, [])] * 3 + [response_factory(200, ANA)])
        profile = self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL)

        assert profile == ANA["items"]
        first_cookies = session.calls[0]["json"]["input"]["cookie"]
        second_cookies = session.calls[3]["json"]["input"]["cookie"]
        assert first_cookies != second_cookies

    def test_at_most_nine_calls(self, settings, fake_db, rng, make_session, response_factory):
        session = make_session([response_factory(200, {"foo": "bar"})] * 20)
        with pytest.raises(ProfileFetchExhausted) as exc_info:
            self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL)

        assert len(session.calls) == 9
        assert exc_info.value.details["attempts"] == 3
        assert len(exc_info.value.details["attempt_log"]) == 9

    def test_transport_errors_are_unwrapped(self, settings, fake_db, rng, make_session, response_factory):
        forbidden = response_factory(403, {"error": {"type": "cookie-expired"}})
        session = make_session([forbidden] * 9)
        with pytest.raises(ProfileFetchExhausted) as exc_info:
            self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL)

        details = exc_info.value.details
        assert details["status_code"] == 403
        assert details["api_error"] == {"error": {"type": "cookie-expired"}}
        assert isinstance(exc_info.value.__cause__, requests.exceptions.HTTPError)

    def test_network_errors_move_to_next_shape(self, settings, fake_db, rng, make_session, response_factory):
        session = make_session([
            requests.exceptions.ConnectionError("reset"),
            requests.exceptions.Timeout("slow"),
            response_factory(200, ANA),
        ])
        assert self._fetcher(settings, fake_db, session, rng).fetch(PROFILE_URL) == ANA["items"]

    def test_no_credentials_on_every_attempt(self, settings, firestore_factory, rng, make_session):
        session = make_session([])
        with pytest.raises(ProfileFetchExhausted) as exc_info:
            self._fetcher(settings, firestore_factory({}), session, rng).fetch(PROFILE_URL)

        assert session.calls == []
        assert isinstance(exc_info.value.__cause__, UpstreamUnavailable)
        outcomes = [entry["outcome"] for entry in exc_info.value.details["attempt_log"]]
        assert outcomes == ["no_credentials"] * 3
        assert exc_info.value.to_dict()["contactSupport"] is True

    def test_concurrent_fetches_do_not_share_logs(self, settings, fake_db, rng, make_session, response_factory):
        fetcher = self._fetcher(settings, fake_db, make_session([response_factory(200, {"foo": "bar"})] * 18), rng)
        for _ in range(2):
            with pytest.raises(ProfileFetchExhausted) as exc_info:
                fetcher.fetch(PROFILE_URL)
            assert len(exc_info.value.details["attempt_log"]) == 9
