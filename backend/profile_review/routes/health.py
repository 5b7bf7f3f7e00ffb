"""
Health check routes
"""
import firebase_admin
from flask import Blueprint, jsonify

from profile_review.extensions import get_db, get_settings

health_bp = Blueprint('health', __name__)


@health_bp.route('/ping')
def ping():
    return "pong"


@health_bp.route('/health')
def health():
    """Health check endpoint"""
    # Check Firebase status
    firebase_status = 'unknown'
    firebase_error = None
    try:
        if firebase_admin._apps:
            firebase_status = 'initialized' if get_db() else 'apps_exist_but_db_none'
        else:
            firebase_status = 'not_initialized'
    except Exception as e:
        firebase_status = 'error'
        firebase_error = str(e)

    settings = get_settings()
    return jsonify({
        'status': 'healthy',
        'services': {
            'openai': 'configured' if settings.openai_api_key else 'not_configured',
            'assistant': 'configured' if settings.openai_assistant_id else 'fallback_only',
            'apify': 'configured' if settings.apify_api_token else 'not_configured',
            'firebase': {
                'status': firebase_status,
                'error': firebase_error
            }
        }
    })


@health_bp.get("/healthz")
def healthz():
    """Kubernetes health check endpoint"""
    return jsonify({"status": "ok"}), 200
