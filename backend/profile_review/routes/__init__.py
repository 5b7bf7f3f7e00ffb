"""
Routes package - all API route blueprints
"""
from profile_review.routes.health import health_bp
from profile_review.routes.profile_review import profile_review_bp
from profile_review.routes.chat import chat_bp

__all__ = [
    'health_bp',
    'profile_review_bp',
    'chat_bp'
]
