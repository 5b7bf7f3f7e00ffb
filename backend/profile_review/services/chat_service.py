"""
Career chat service - OpenAI chat completion with canned fallback answers
"""
import logging
import os
from typing import Any, Dict, List, Optional

import openai

from profile_review.config import Settings
from profile_review.models.report import utc_timestamp
from profile_review.utils.chat_responses import get_fallback_response
from profile_review.utils.exceptions import ExternalAPIError, ValidationError, extract_api_error

logger = logging.getLogger(__name__)

MAX_HISTORY_MESSAGES = 10

RECRUITER_SYSTEM_PROMPT = """You are Fernanda, an experienced recruiter with more than 10 years in the technology and software development market.
Your specialty is evaluating developer profiles and giving guidance on careers, resumes, LinkedIn and interviews.
You are the DevClub career mentor (DevClub is a developer community).

Keep your answers objective, practical and useful. Use concrete examples and actionable tips.
Be encouraging but honest. Use a professional and friendly tone.

When giving tips about:
- Resume: emphasize clarity, relevance and tailoring for each job
- LinkedIn: highlight visibility to recruiters and consistency
- Interviews: focus on technical preparation and soft skills
- Portfolio: emphasize quality over quantity
- GitHub: highlight organization and code documentation

Use markdown formatting to organize your answer when appropriate."""

DEFAULT_SYSTEM_PROMPT = "You are a helpful and informative assistant."


def _clean_history(history: Any) -> List[Dict[str, str]]:
    if not isinstance(history, list):
        return []
    turns = [
        {'role': turn['role'], 'content': str(turn.get('content', ''))}
        for turn in history
        if isinstance(turn, dict) and turn.get('role') in ('user', 'assistant')
    ]
    return turns[-MAX_HISTORY_MESSAGES:]


class ChatService:
    """Single-turn chat passthrough; conversation history is supplied by the caller."""

    def __init__(self, settings: Settings, client=None, development: Optional[bool] = None):
        self.settings = settings
        self.client = client
        if development is None:
            development = os.getenv('FLASK_ENV') == 'development'
        self.development = development

    def reply(self, message: str, role: str = 'recruiter', history: Any = None) -> Dict[str, Any]:
        if not message or not str(message).strip():
            raise ValidationError("Message is required", field='message')

        logger.info(f"Processing chat message: {str(message)[:30]}...")

        if self.client is None or self.development:
            logger.info("Using fallback chat response (development mode or no API key)")
            return {
                'success': True,
                'message': get_fallback_response(message),
                'fallback': True,
                'timestamp': utc_timestamp()
            }

        system_prompt = RECRUITER_SYSTEM_PROMPT if role == 'recruiter' else DEFAULT_SYSTEM_PROMPT
        messages = [{'role': 'system', 'content': system_prompt}]
        messages.extend(_clean_history(history))
        messages.append({'role': 'user', 'content': message})

        try:
            response = self.client.chat.completions.create(
                model=self.settings.openai_chat_model,
                messages=messages,
                temperature=0.7,
                max_tokens=1000,
            )
        except openai.OpenAIError as e:
            logger.error(f"Chat completion failed: {e}")
            raise ExternalAPIError('OpenAI', 'Error processing message', details={
                'reason': str(e),
                **extract_api_error(e)
            }) from e

        choices = getattr(response, 'choices', None) or []
        content = choices[0].message.content if choices and choices[0].message else None
        if not content:
            raise ExternalAPIError('OpenAI', 'Invalid response format from the OpenAI API')

        return {
            'success': True,
            'message': content,
            'responseId': getattr(response, 'id', None),
            'timestamp': utc_timestamp()
        }
