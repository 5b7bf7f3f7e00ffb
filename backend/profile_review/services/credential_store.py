"""
Credential store - LinkedIn cookie sets kept in Firestore

Each document in the cookie collection maps an account label (usually the
account e-mail) to the cookie export for that account, serialized as a string.
Exports come in a few shapes: a JSON array, a bare comma-separated list of
cookie objects, or something hand-edited that is only partly valid JSON.
"""
import json
import logging
import random
import re
from typing import Any, Dict, Iterable, List, Optional

from google.api_core import exceptions as google_exceptions

from profile_review.models import CredentialSet
from profile_review.utils.exceptions import NoCredentialsAvailable, UpstreamUnavailable

logger = logging.getLogger(__name__)

# Flat cookie object carrying a domain or name key, e.g. {"domain": ".linkedin.com", ...}
COOKIE_FRAGMENT_PATTERN = re.compile(r'\{[^{}]*"(?:domain|name)"\s*:[^{}]*\}')


def _only_cookie_dicts(items: Iterable[Any]) -> List[Dict[str, Any]]:
    return [item for item in items if isinstance(item, dict)]


def _parse_strict(cleaned: str) -> Optional[List[Dict[str, Any]]]:
    try:
        parsed = json.loads(cleaned)
    except (ValueError, RecursionError):
        return None
    if isinstance(parsed, dict):
        return [parsed]
    if isinstance(parsed, list):
        return _only_cookie_dicts(parsed)
    return None


def _parse_bracket_wrapped(cleaned: str) -> Optional[List[Dict[str, Any]]]:
    try:
        parsed = json.loads(f"[{cleaned}]")
    except (ValueError, RecursionError):
        return None
    return _only_cookie_dicts(parsed)


def _parse_fragments(cleaned: str) -> List[Dict[str, Any]]:
    cookies = []
    for match in COOKIE_FRAGMENT_PATTERN.finditer(cleaned):
        try:
            cookie = json.loads(match.group(0))
        except ValueError as e:
            logger.debug(f"Skipping unparseable cookie fragment: {e}")
            continue
        if isinstance(cookie, dict):
            cookies.append(cookie)
    return cookies


def decode_cookie_string(raw: Any) -> List[Dict[str, Any]]:
    """
    Decode a serialized cookie export into a list of cookie dicts.

    Tries, in order: a strict JSON parse, wrapping the string in brackets
    (comma-separated objects without the enclosing array), and finally pulling
    individual cookie objects out with a regex. Returns [] when nothing can be
    recovered; never raises.
    """
    if not isinstance(raw, str):
        return []
    cleaned = raw.strip().strip("'").strip()
    if not cleaned:
        return []

    for parser in (_parse_strict, _parse_bracket_wrapped):
        cookies = parser(cleaned)
        if cookies:
            return cookies

    return _parse_fragments(cleaned)


class CredentialSource:
    """Random and non-repeating selection of cookie sets from Firestore."""

    def __init__(self, db, collection: str = "linkedin_cookies", rng: Optional[random.Random] = None):
        self.db = db
        self.collection = collection
        self.rng = rng or random.Random()

    def _stream_documents(self):
        if self.db is None:
            raise UpstreamUnavailable("Firestore client is not initialized")
        try:
            return list(self.db.collection(self.collection).stream())
        except (google_exceptions.GoogleAPICallError, google_exceptions.RetryError, ConnectionError, OSError) as e:
            logger.error(f"Failed to read cookie collection '{self.collection}': {e}")
            raise UpstreamUnavailable(
                "Credential store is unreachable",
                details={'collection': self.collection, 'reason': str(e)}
            ) from e

    def list_all_credential_sets(self) -> List[CredentialSet]:
        documents = self._stream_documents()
        logger.info(f"Found {len(documents)} documents in '{self.collection}'")

        credential_sets = []
        for document in documents:
            data = document.to_dict() or {}
            for label, serialized in data.items():
                if not isinstance(serialized, str):
                    continue
                cookies = decode_cookie_string(serialized)
                if not cookies:
                    logger.warning("Skipping undecodable cookie export", extra={
                        'document': document.id,
                        'source': label
                    })
                    continue
                credential_sets.append(CredentialSet(source=label, cookies=cookies))

        if not credential_sets:
            raise UpstreamUnavailable(
                "Credential store holds no usable cookie sets",
                details={'collection': self.collection, 'documents': len(documents)}
            )

        logger.info(f"Loaded {len(credential_sets)} cookie sets")
        return credential_sets

    def get_random_credential_set(self) -> CredentialSet:
        credential_sets = self.list_all_credential_sets()
        if not credential_sets:
            raise NoCredentialsAvailable()
        selected = self.rng.choice(credential_sets)
        logger.info("Selected random cookie set", extra={
            'source': selected.source,
            'cookie_count': len(selected)
        })
        return selected

    def get_next_untried(self, tried: Iterable[CredentialSet]) -> CredentialSet:
        tried = list(tried)
        if not tried:
            return self.get_random_credential_set()

        credential_sets = self.list_all_credential_sets()
        tried_fingerprints = {credential_set.fingerprint for credential_set in tried}
        untried = [s for s in credential_sets if s.fingerprint not in tried_fingerprints]

        if not untried:
            logger.info("All cookie sets already tried, picking a random one again")
            return self.rng.choice(credential_sets)

        selected = self.rng.choice(untried)
        logger.info("Selected untried cookie set", extra={
            'source': selected.source,
            'remaining': len(untried)
        })
        return selected
