"""
Custom exception classes for consistent error handling
"""
from typing import Any, Dict

from flask import jsonify


class ProfileReviewException(Exception):
    """Base exception for all profile review errors"""
    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        self.message = message
        self.error_code = error_code or self.error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        return {
            'success': False,
            'error': self.message,
            'error_code': self.error_code,
            'details': self.details
        }

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


class ValidationError(ProfileReviewException):
    """Input validation error"""
    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str = None, details: dict = None):
        if field:
            message = f"Validation error for field '{field}': {message}"
        super().__init__(message, self.error_code, details)


class ExternalAPIError(ProfileReviewException):
    """External API error (Apify, OpenAI, Firestore)"""
    status_code = 502
    error_code = "EXTERNAL_API_ERROR"

    def __init__(self, service: str, message: str = None, details: dict = None):
        if not message:
            message = f"{service} API error. Please try again later."
        super().__init__(message, self.error_code, {
            'service': service,
            **(details or {})
        })


class NoCredentialsAvailable(ProfileReviewException):
    """No LinkedIn cookie set could be obtained from the credential store"""
    status_code = 503
    error_code = "NO_CREDENTIALS_AVAILABLE"

    def __init__(self, message: str = "No LinkedIn cookie sets available", details: dict = None):
        super().__init__(message, self.error_code, details)


class UpstreamUnavailable(NoCredentialsAvailable):
    """Credential store unreachable or holding no eligible records"""
    error_code = "UPSTREAM_UNAVAILABLE"


class ProfileFetchExhausted(ProfileReviewException):
    """Every cookie set / payload shape combination failed to return a profile"""
    status_code = 502
    error_code = "PROFILE_FETCH_EXHAUSTED"

    def __init__(self, attempts: int, last_error: str = None, details: dict = None):
        message = (
            "We could not access your LinkedIn profile after several attempts. "
            "Please contact support."
        )
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(message, self.error_code, {
            'attempts': attempts,
            'last_error': last_error or 'Unknown error',
            **(details or {})
        })

    def to_dict(self):
        result = super().to_dict()
        result['contactSupport'] = True
        return result


class AnalysisError(ProfileReviewException):
    """Failure inside one assistant run; retried, never surfaced to the caller"""
    error_code = "ANALYSIS_ERROR"


class RunFailed(AnalysisError):
    """Assistant run finished with failed / cancelled / expired"""
    error_code = "RUN_FAILED"

    def __init__(self, status: str, details: dict = None):
        self.status = status
        super().__init__(f"Assistant run ended with status: {status}", self.error_code, details)


class RunTimeout(AnalysisError):
    """Assistant run still pending after the polling budget"""
    error_code = "RUN_TIMEOUT"

    def __init__(self, polls: int, details: dict = None):
        self.polls = polls
        super().__init__(f"Timed out waiting for the analysis after {polls} polls", self.error_code, details)


class EmptyResponse(AnalysisError):
    """Completed run produced no assistant text"""
    error_code = "EMPTY_RESPONSE"

    def __init__(self, message: str = "No response received from the assistant", details: dict = None):
        super().__init__(message, self.error_code, details)


def extract_api_error(exc: BaseException) -> Dict[str, Any]:
    """
    Unwrap an HTTP-level error (requests or the OpenAI SDK) into the provider's
    own status code and error body. Returns {} when exc carries no response.
    """
    response = getattr(exc, 'response', None)
    status_code = getattr(response, 'status_code', None)
    if response is None or status_code is None:
        return {}
    try:
        body = response.json()
    except ValueError:
        body = getattr(response, 'text', None)
    return {
        'status_code': status_code,
        'api_error': body
    }


def handle_profile_review_exception(e: ProfileReviewException):
    """Flask error handler for profile review exceptions"""
    return e.to_response()


def register_error_handlers(app):
    """Register error handlers with Flask app"""
    app.register_error_handler(ProfileReviewException, handle_profile_review_exception)

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({
            'success': False,
            'error': 'Bad request',
            'error_code': 'BAD_REQUEST',
            'details': {'message': str(e)}
        }), 400

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({
            'success': False,
            'error': 'Resource not found',
            'error_code': 'NOT_FOUND',
            'details': {}
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({
            'success': False,
            'error': 'Method not allowed',
            'error_code': 'METHOD_NOT_ALLOWED',
            'details': {}
        }), 405

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({
            'success': False,
            'error': 'An unexpected error occurred. Please try again later.',
            'error_code': 'INTERNAL_ERROR',
            'details': {}
        }), 500
