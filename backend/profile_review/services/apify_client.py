"""
Apify client - LinkedIn profile scraping with cookie rotation

The scraper actor's input schema is not documented consistently, so every
cookie set is tried with three request body shapes before moving on to the
next cookie set.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests

from profile_review.config import Settings
from profile_review.models import CredentialSet, PayloadShape, ProfileFetchAttempt, ScrapedProfile
from profile_review.services.credential_store import CredentialSource
from profile_review.utils.exceptions import NoCredentialsAvailable, ProfileFetchExhausted, extract_api_error

logger = logging.getLogger(__name__)

EXPECTED_PROFILE_KEYS = ('profileId', 'firstName', 'lastName', 'headline', 'summary')


def is_valid_response(data: Any) -> bool:
    """True when a scraper response body plausibly contains profile data."""
    if isinstance(data, list):
        return len(data) > 0
    if isinstance(data, dict):
        items = data.get('items')
        if isinstance(items, list) and items:
            return True
        return any(key in data for key in EXPECTED_PROFILE_KEYS)
    return False


def process_profile_data(data: Any) -> ScrapedProfile:
    """Normalize an accepted body to sequence form: unwrap `items` when present."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get('items'), list):
        return data['items']
    return data


def build_payloads(profile_url: str, credential_set: CredentialSet, proxy: Dict[str, Any]) -> List[Tuple[PayloadShape, Dict[str, Any]]]:
    cookies = credential_set.cookies
    return [
        (PayloadShape.INPUT_URLS, {
            'input': {'urls': [profile_url], 'cookie': cookies, 'proxy': proxy}
        }),
        (PayloadShape.INPUT_PROFILE_URLS, {
            'input': {'profileUrls': [profile_url], 'cookie': cookies, 'proxy': proxy}
        }),
        (PayloadShape.FLAT_URLS, {
            'urls': [profile_url], 'cookie': cookies, 'proxy': proxy
        }),
    ]


class ProfileFetcher:
    """Fetches a LinkedIn profile through the Apify scraper actor."""

    def __init__(self, settings: Settings, credentials: CredentialSource, session: Optional[requests.Session] = None):
        self.settings = settings
        self.credentials = credentials
        self.session = session or requests.Session()

    def _next_credentials(self, tried: List[CredentialSet]) -> CredentialSet:
        if not tried:
            return self.credentials.get_random_credential_set()
        return self.credentials.get_next_untried(tried)

    def _post(self, payload: Dict[str, Any]) -> Any:
        response = self.session.post(
            self.settings.apify_endpoint,
            params={'token': self.settings.apify_api_token},
            json=payload,
            headers={'Content-Type': 'application/json'},
            timeout=self.settings.apify_timeout,
        )
        response.raise_for_status()
        return response.json()

    def _try_payloads(self, attempt: int, profile_url: str, credential_set: CredentialSet,
                      attempt_log: List[ProfileFetchAttempt]) -> Tuple[Optional[ScrapedProfile], Optional[BaseException]]:
        last_error = None
        for shape, payload in build_payloads(profile_url, credential_set, self.settings.apify_proxy):
            log_extra = {'attempt': attempt, 'payload_shape': shape.value, 'source': credential_set.source}
            logger.info("Calling Apify scraper", extra=log_extra)
            try:
                data = self._post(payload)
            except (requests.exceptions.RequestException, ValueError) as e:
                logger.warning(f"Apify call failed: {e}", extra=log_extra)
                attempt_log.append(ProfileFetchAttempt(attempt, credential_set.source, shape, 'error', str(e)))
                last_error = e
                continue

            if is_valid_response(data):
                logger.info("Apify returned profile data", extra=log_extra)
                attempt_log.append(ProfileFetchAttempt(attempt, credential_set.source, shape, 'accepted'))
                return process_profile_data(data), None

            logger.info("Apify response has no profile data, trying next payload shape", extra=log_extra)
            attempt_log.append(ProfileFetchAttempt(attempt, credential_set.source, shape, 'rejected'))
        return None, last_error

    def fetch(self, profile_url: str) -> ScrapedProfile:
        max_attempts = self.settings.max_fetch_attempts
        tried: List[CredentialSet] = []
        last_error: Optional[BaseException] = None
        attempt_log: List[ProfileFetchAttempt] = []

        for attempt in range(1, max_attempts + 1):
            logger.info(f"Profile scraping attempt {attempt}/{max_attempts}")
            try:
                credential_set = self._next_credentials(tried)
            except NoCredentialsAvailable as e:
                logger.warning(f"No cookie set available on attempt {attempt}: {e.message}")
                attempt_log.append(ProfileFetchAttempt(attempt, None, None, 'no_credentials', e.message))
                last_error = e
                continue

            tried.append(credential_set)
            profile, error = self._try_payloads(attempt, profile_url, credential_set, attempt_log)
            if profile is not None:
                logger.info(f"Profile scraped on attempt {attempt}", extra={'source': credential_set.source})
                return profile

            last_error = error or RuntimeError(
                f"No payload shape returned profile data with cookies from {credential_set.source}"
            )

        raise self._exhausted(max_attempts, last_error, attempt_log)

    def _exhausted(self, attempts: int, last_error: Optional[BaseException],
                   attempt_log: List[ProfileFetchAttempt]) -> ProfileFetchExhausted:
        message = getattr(last_error, 'message', None) or (str(last_error) if last_error else None)
        details = {
            'attempt_log': [attempt.to_dict() for attempt in attempt_log],
            **extract_api_error(last_error),
        }
        logger.error(f"Profile scraping failed after {attempts} attempts: {message}")
        exhausted = ProfileFetchExhausted(attempts=attempts, last_error=message, details=details)
        exhausted.__cause__ = last_error
        return exhausted
