"""
Profile normalizer - canonical name / headline / location from scraped data
"""
from typing import Any, Dict, Optional, Sequence

DEFAULT_NAME = "LinkedIn User"
DEFAULT_HEADLINE = "LinkedIn Professional"
DEFAULT_LOCATION = "Location not specified"

HEADLINE_FIELDS = ('headline', 'subTitle', 'occupation')
LOCATION_FIELDS = ('location', 'locationName', 'geoLocation')


def _primary_record(profile: Any) -> Dict[str, Any]:
    """First element of a list-shaped profile, or the profile itself."""
    if isinstance(profile, list):
        profile = profile[0] if profile else None
    return profile if isinstance(profile, dict) else {}


def _as_text(value: Any) -> Optional[str]:
    """Display text for a scraped field; structured values like {"city": ..., "country": ...} are joined."""
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value) if value else None
    if isinstance(value, dict):
        parts = [part.strip() for part in value.values() if isinstance(part, str) and part.strip()]
        return ", ".join(parts) or None
    return None


def _first_field(record: Dict[str, Any], fields: Sequence[str]) -> Optional[str]:
    for name in fields:
        text = _as_text(record.get(name))
        if text:
            return text
    return None


def extract_name(profile: Any) -> str:
    record = _primary_record(profile)
    first_name, last_name = record.get('firstName'), record.get('lastName')
    if first_name and last_name:
        return f"{first_name} {last_name}"
    return _first_field(record, ('name', 'title')) or DEFAULT_NAME


def extract_headline(profile: Any) -> str:
    return _first_field(_primary_record(profile), HEADLINE_FIELDS) or DEFAULT_HEADLINE


def extract_location(profile: Any) -> str:
    return _first_field(_primary_record(profile), LOCATION_FIELDS) or DEFAULT_LOCATION


def extract_basic_info(profile: Any, profile_url: str) -> Dict[str, str]:
    """Profile block shown on every report, successful or partial."""
    return {
        'name': extract_name(profile),
        'headline': extract_headline(profile),
        'location': extract_location(profile),
        'profileUrl': profile_url,
    }
