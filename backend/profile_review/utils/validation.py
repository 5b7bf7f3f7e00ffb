"""
Input validation schemas using Pydantic
"""
from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, List, Optional
from profile_review.utils.exceptions import ValidationError


class ScrapeRequest(BaseModel):
    """Validation schema for profile review requests"""
    profileUrl: str = Field(..., max_length=500, description="LinkedIn profile URL")
    objective: Optional[str] = Field(None, max_length=100, description="Review objective id")

    @field_validator('profileUrl')
    @classmethod
    def validate_profile_url(cls, v):
        if not v or not v.strip():
            raise ValueError('Profile URL is required')
        return v.strip()

    @field_validator('objective')
    @classmethod
    def validate_objective(cls, v):
        if v is None:
            return None
        return v.strip() or None


class ChatMessage(BaseModel):
    role: str = Field(..., max_length=20)
    content: str = Field('', max_length=20000)


class ChatRequest(BaseModel):
    """Validation schema for career chat requests"""
    message: str = Field(..., max_length=5000, description="User message")
    role: Optional[str] = Field('recruiter', max_length=50, description="Assistant persona")
    history: Optional[List[ChatMessage]] = Field(None, description="Previous conversation turns")

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        if not v or not v.strip():
            raise ValueError('Message is required')
        return v.strip()


def validate_request(schema_class: type[BaseModel], data: Optional[Dict[str, Any]], raise_on_error: bool = True):
    """
    Validate request data against a Pydantic schema.

    Args:
        schema_class: Pydantic model class
        data: Request data to validate (None is treated as an empty body)
        raise_on_error: If True, raise ValidationError. If False, return (is_valid, errors)

    Returns:
        If raise_on_error=True: Validated data dict
        If raise_on_error=False: (is_valid: bool, validated_data: dict, errors: list)
    """
    if data is None:
        data = {}
    if not isinstance(data, dict):
        if raise_on_error:
            raise ValidationError("Request body must be a JSON object")
        return False, {}, ["Request body must be a JSON object"]

    try:
        validated = schema_class(**data)
        if raise_on_error:
            return validated.model_dump(exclude_none=True)
        else:
            return True, validated.model_dump(exclude_none=True), []
    except Exception as e:
        if isinstance(e, ValidationError):
            raise
        # Convert Pydantic validation errors to our ValidationError
        errors = []
        if hasattr(e, 'errors'):
            for error in e.errors():
                field = '.'.join(str(x) for x in error.get('loc', []))
                message = error.get('msg', 'Validation error')
                errors.append(f"{field}: {message}")

        error_message = '; '.join(errors) if errors else str(e)

        if raise_on_error:
            raise ValidationError(error_message, details={'validation_errors': errors})
        else:
            return False, {}, errors
