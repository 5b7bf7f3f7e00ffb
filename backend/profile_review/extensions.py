"""
Flask extensions and initialization
"""
import logging
import os

import firebase_admin
from firebase_admin import credentials, firestore
from flask import Flask, current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from profile_review.config import CORS_ORIGINS, DEFAULT_RATE_LIMITS, FIREBASE_PROJECT_ID, Settings

logger = logging.getLogger(__name__)

# Global Firestore client
db = None

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=DEFAULT_RATE_LIMITS,
    storage_uri="memory://",  # Use in-memory storage (can upgrade to Redis later)
    strategy="fixed-window",
    headers_enabled=True  # Include rate limit headers in response
)

REVIEW_SERVICE_KEY = 'profile_review.review_service'
CHAT_SERVICE_KEY = 'profile_review.chat_service'
SETTINGS_KEY = 'profile_review.settings'
OPENAI_CLIENT_KEY = 'profile_review.openai_client'


def init_firebase():
    """Initialize Firebase and set up the Firestore client. Failures are logged, never raised."""
    global db
    if firebase_admin._apps:  # already initialized
        try:
            db = firestore.client()
            logger.info("Firebase already initialized, reusing Firestore client")
            return db
        except Exception as e:
            logger.warning(f"Firebase already initialized but Firestore client failed: {e}")
            firebase_admin._apps.clear()

    cred = None
    cred_path = os.environ.get("GOOGLE_APPLICATION_CREDENTIALS")
    if cred_path and os.path.exists(cred_path):
        cred = credentials.Certificate(cred_path)
        logger.info(f"Using credentials from GOOGLE_APPLICATION_CREDENTIALS: {cred_path}")

    options = {'projectId': FIREBASE_PROJECT_ID} if FIREBASE_PROJECT_ID else None

    try:
        if cred:
            firebase_admin.initialize_app(cred, options)
            logger.info("Firebase initialized with credentials file")
        else:
            # No credentials file - rely on the environment (cloud runtimes)
            logger.warning("No Firebase credentials file found, initializing with project ID only")
            firebase_admin.initialize_app(options=options)

        db = firestore.client()
        logger.info("Firestore client initialized successfully")
    except Exception as e:
        logger.error(f"Firebase initialization failed: {e}", exc_info=True)
        db = None
        logger.warning("App will start but profile fetches will fail with UPSTREAM_UNAVAILABLE")
    return db


def get_db():
    """Returns the Firestore client instance, or None when Firebase is unavailable."""
    global db
    # If db is None but Firebase Admin is initialized, create the client on demand
    if db is None and firebase_admin._apps:
        try:
            db = firestore.client()
            logger.info("Firestore client created on demand")
        except Exception as e:
            logger.error(f"Failed to create Firestore client: {e}")
            return None
    return db


def init_app_extensions(app: Flask, init_db: bool = True):
    """Initializes Flask extensions like CORS, Rate Limiting, and Firebase."""
    origins = [o.strip() for o in CORS_ORIGINS.split(",") if o.strip()]
    if not origins or origins == ["*"]:
        origins = "*"
    CORS(app, resources={r"/*": {
        "origins": origins,
        "methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
        "max_age": 3600
    }})

    limiter.init_app(app)
    app.limiter = limiter

    if init_db:
        init_firebase()


def get_settings() -> Settings:
    settings = current_app.extensions.get(SETTINGS_KEY)
    if settings is None:
        settings = Settings.from_env()
        current_app.extensions[SETTINGS_KEY] = settings
    return settings


def get_openai_client():
    """Shared OpenAI client for the current app (None without an API key)."""
    if OPENAI_CLIENT_KEY not in current_app.extensions:
        from profile_review.services.openai_client import create_openai_client
        current_app.extensions[OPENAI_CLIENT_KEY] = create_openai_client(get_settings())
    return current_app.extensions[OPENAI_CLIENT_KEY]


def get_review_service():
    """Profile review service for the current app, built on first use."""
    service = current_app.extensions.get(REVIEW_SERVICE_KEY)
    if service is None:
        from profile_review.services.profile_review import build_profile_review_service
        service = build_profile_review_service(get_settings(), get_db(), get_openai_client())
        current_app.extensions[REVIEW_SERVICE_KEY] = service
    return service


def get_chat_service():
    """Career chat service for the current app, built on first use."""
    service = current_app.extensions.get(CHAT_SERVICE_KEY)
    if service is None:
        from profile_review.services.chat_service import ChatService
        service = ChatService(get_settings(), client=get_openai_client())
        current_app.extensions[CHAT_SERVICE_KEY] = service
    return service
