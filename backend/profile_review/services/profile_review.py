"""
Profile review service - scrape, analyze and score a LinkedIn profile in one request
"""
import logging
import random
import time
from typing import Callable, Optional

import requests

from profile_review.config import Settings
from profile_review.models import DEFAULT_OBJECTIVE, FinalReport
from profile_review.services.apify_client import ProfileFetcher
from profile_review.services.credential_store import CredentialSource
from profile_review.services.profile_analyzer import ProfileAnalyzer
from profile_review.services.profile_normalizer import extract_basic_info
from profile_review.services.score_extractor import extract_scores
from profile_review.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)


class ProfileReviewService:
    """Sequences fetch -> normalize -> analyze -> score for a single request."""

    def __init__(self, fetcher: ProfileFetcher, analyzer: ProfileAnalyzer,
                 score_extractor: Callable = extract_scores):
        self.fetcher = fetcher
        self.analyzer = analyzer
        self.score_extractor = score_extractor

    def fetch_and_analyze(self, profile_url: str, objective: Optional[str] = None) -> FinalReport:
        """
        Full review of one profile.

        Raises ValidationError for a missing URL and ProfileFetchExhausted when
        the profile cannot be scraped. An error during analysis or scoring
        returns a partial report with the profile block only.
        """
        profile_url = (profile_url or '').strip() if isinstance(profile_url, str) else ''
        if not profile_url:
            raise ValidationError("Profile URL is required", field='profileUrl')
        objective = objective or DEFAULT_OBJECTIVE

        logger.info("Starting profile review", extra={'objective': objective})
        profile_data = self.fetcher.fetch(profile_url)
        profile_info = extract_basic_info(profile_data, profile_url)

        try:
            analysis = self.analyzer.analyze(profile_data, objective)
            scores = self.score_extractor(analysis)
        except Exception as e:
            logger.error(f"Analysis failed after a successful scrape: {type(e).__name__}: {e}", exc_info=True)
            return FinalReport.partial_from(profile_info, objective, profile_data, str(e))

        logger.info("Profile review completed", extra={
            'structured': analysis.is_structured_format,
            'fallback': analysis.is_fallback
        })
        return FinalReport(
            profile=profile_info,
            objective=objective,
            analysis=analysis,
            scores=scores,
        )


def build_profile_review_service(settings: Settings, db, openai_client,
                                 session: Optional[requests.Session] = None,
                                 sleep: Callable[[float], None] = time.sleep,
                                 rng: Optional[random.Random] = None) -> ProfileReviewService:
    """Wire the pipeline components from explicit settings and clients."""
    credentials = CredentialSource(db, collection=settings.cookie_collection, rng=rng)
    fetcher = ProfileFetcher(settings, credentials, session=session)
    analyzer = ProfileAnalyzer(settings, client=openai_client, sleep=sleep)
    return ProfileReviewService(fetcher, analyzer)
