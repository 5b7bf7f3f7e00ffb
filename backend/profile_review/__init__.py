"""
LinkedIn profile review backend - Flask application factory
"""
import logging

from flask import Flask

from profile_review.config import FLASK_SECRET, Settings
from profile_review.extensions import (
    CHAT_SERVICE_KEY,
    REVIEW_SERVICE_KEY,
    SETTINGS_KEY,
    init_app_extensions
)
from profile_review.logging_config import configure_logging
from profile_review.utils.exceptions import register_error_handlers
from profile_review.utils.sentry_config import init_sentry

logger = logging.getLogger(__name__)


def create_app(settings: Settings = None, review_service=None, chat_service=None, testing: bool = False) -> Flask:
    """
    Build the Flask app.

    Services passed in are used as-is; otherwise they are built lazily from
    settings (or the environment) on the first request that needs them.
    """
    if not testing:
        configure_logging()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = FLASK_SECRET
    if testing:
        app.config['TESTING'] = True
        app.config['RATELIMIT_ENABLED'] = False

    init_app_extensions(app, init_db=not testing)

    app.extensions[SETTINGS_KEY] = settings or Settings.from_env()
    if review_service is not None:
        app.extensions[REVIEW_SERVICE_KEY] = review_service
    if chat_service is not None:
        app.extensions[CHAT_SERVICE_KEY] = chat_service

    if not testing:
        init_sentry()

    register_error_handlers(app)

    from profile_review.routes import chat_bp, health_bp, profile_review_bp
    app.register_blueprint(health_bp)
    app.register_blueprint(profile_review_bp)
    app.register_blueprint(chat_bp)

    logger.info("Profile review app initialized")
    return app
