"""
Career chat routes
"""
from flask import Blueprint, jsonify, request

from profile_review.extensions import get_chat_service
from profile_review.utils.validation import ChatRequest, validate_request

chat_bp = Blueprint('chat', __name__)


@chat_bp.route('/api/chat', methods=['POST'])
@chat_bp.route('/chat', methods=['POST'])
def chat():
    payload = validate_request(ChatRequest, request.get_json(silent=True))
    result = get_chat_service().reply(
        payload['message'],
        role=payload.get('role', 'recruiter'),
        history=payload.get('history'),
    )
    return jsonify(result)
