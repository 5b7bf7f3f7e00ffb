"""
Profile review routes - scrape + analyze a LinkedIn profile, list objectives
"""
import logging

from flask import Blueprint, jsonify, request

from profile_review.config import SCRAPE_RATE_LIMIT
from profile_review.extensions import get_review_service, get_settings, limiter
from profile_review.models import list_objectives
from profile_review.utils.async_runner import run_with_timeout
from profile_review.utils.validation import ScrapeRequest, validate_request

logger = logging.getLogger(__name__)

profile_review_bp = Blueprint('profile_review', __name__)


@profile_review_bp.route('/api/scrape', methods=['POST'])
@profile_review_bp.route('/scrape', methods=['POST'])
@limiter.limit(SCRAPE_RATE_LIMIT)
def scrape_profile():
    """Fetch, analyze and score one profile. 200 full report, 207 partial report."""
    payload = validate_request(ScrapeRequest, request.get_json(silent=True))
    profile_url = payload['profileUrl']
    objective = payload.get('objective')

    service = get_review_service()
    timeout = get_settings().request_timeout_seconds
    logger.info("Profile review requested", extra={'objective': objective or 'general'})

    try:
        report = run_with_timeout(service.fetch_and_analyze, profile_url, objective, timeout=timeout)
    except TimeoutError as e:
        logger.error(f"Profile review exceeded the request deadline: {e}")
        return jsonify({
            'success': False,
            'error': 'The profile review took too long. Please try again in a few minutes.',
            'error_code': 'REQUEST_TIMEOUT',
            'details': {'timeout_seconds': timeout}
        }), 504

    if report.partial:
        return jsonify({
            'success': True,
            'partialSuccess': True,
            'message': 'Profile data retrieved, but the analysis could not be completed.',
            'note': report.note,
            'noteType': 'warning',
            'data': report.to_dict()
        }), 207

    return jsonify({
        'success': True,
        'message': 'Profile analyzed successfully',
        'data': report.to_dict()
    }), 200


@profile_review_bp.route('/api/objectives', methods=['GET'])
@profile_review_bp.route('/objectives', methods=['GET'])
def objectives():
    return jsonify({
        'success': True,
        'objectives': list_objectives()
    })
