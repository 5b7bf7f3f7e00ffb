"""
Sentry error tracking configuration
"""
import logging
import os
from urllib.parse import parse_qsl, urlencode

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = ('authorization', 'cookie', 'x-api-key')
SENSITIVE_PARAMS = ('token', 'api_key', 'password')


def init_sentry(dsn=None):
    """
    Initialize Sentry error tracking.
    Set SENTRY_DSN environment variable to enable. Returns True when enabled.
    """
    sentry_dsn = dsn or os.environ.get('SENTRY_DSN')

    if not sentry_dsn:
        logger.info("Sentry DSN not configured. Error tracking disabled.")
        return False

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(transaction_style='url'),
            ],
            traces_sample_rate=0.1,  # 10% of transactions
            environment=os.environ.get('FLASK_ENV', 'production'),
            release=os.environ.get('RENDER_GIT_COMMIT', 'unknown'),
            # Filter sensitive data
            before_send=lambda event, hint: filter_sensitive_data(event),
        )
    except Exception as e:
        logger.warning(f"Failed to initialize Sentry: {e}")
        return False

    logger.info("Sentry error tracking initialized")
    return True


def filter_sensitive_data(event):
    """
    Filter out sensitive data from Sentry events.
    """
    request = event.get('request')
    if request:
        # Remove sensitive headers
        headers = request.get('headers')
        if isinstance(headers, dict):
            for header in list(headers):
                if header.lower() in SENSITIVE_HEADERS:
                    headers.pop(header, None)

        # Mask sensitive query params
        query_string = request.get('query_string')
        if isinstance(query_string, str) and query_string:
            pairs = [
                (key, '[Filtered]' if key.lower() in SENSITIVE_PARAMS else value)
                for key, value in parse_qsl(query_string, keep_blank_values=True)
            ]
            request['query_string'] = urlencode(pairs)

        # Mask cookie payloads
        data = request.get('data')
        if isinstance(data, dict):
            for key in list(data):
                if key.lower() in ('cookie', 'cookies'):
                    data[key] = '[Filtered]'

    # Remove user data that might be sensitive
    if 'user' in event:
        event['user'].pop('email', None)
        event['user'].pop('username', None)

    return event
