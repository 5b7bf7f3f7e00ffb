"""
Credential and scraped-profile data models
"""
import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from profile_review.models.enums import Objective, PayloadShape

# Raw provider body after unwrapping: list of profile dicts or a single dict
ScrapedProfile = Union[List[Dict[str, Any]], Dict[str, Any]]


@dataclass(eq=False)
class CredentialSet:
    """A LinkedIn session-cookie bundle read from the credential store."""
    source: str
    cookies: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def fingerprint(self) -> str:
        canonical = json.dumps(self.cookies, sort_keys=True, separators=(',', ':'), default=str)
        return hashlib.sha256(canonical.encode('utf-8')).hexdigest()

    def __eq__(self, other):
        if not isinstance(other, CredentialSet):
            return NotImplemented
        return self.fingerprint == other.fingerprint

    def __hash__(self):
        return hash(self.fingerprint)

    def __len__(self):
        return len(self.cookies)

    def __repr__(self):
        # Never print cookie values
        return f"CredentialSet(source={self.source!r}, cookies={len(self.cookies)})"


@dataclass
class ProfileFetchAttempt:
    """One provider call made while fetching a profile."""
    attempt: int
    credential_source: Optional[str]
    payload_shape: Optional[PayloadShape]
    outcome: str  # "accepted", "rejected", "error", "no_credentials"
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'attempt': self.attempt,
            'credentialSource': self.credential_source,
            'payloadShape': self.payload_shape.value if self.payload_shape else None,
            'outcome': self.outcome,
            'error': self.error,
        }


# ========================================
# Objectives
# ========================================
OBJECTIVE_CATALOG = {
    Objective.FIRST_JOB.value: {
        'name': 'First Job',
        'description': 'Optimize your profile to land your first job as a developer',
        'prompt': 'First job as a software developer',
    },
    Objective.CAREER_UPGRADE.value: {
        'name': 'Career Upgrade',
        'description': 'Improve your profile to reach a senior or management position',
        'prompt': 'Career upgrade to a senior or management position',
    },
    Objective.INTERNATIONAL.value: {
        'name': 'International Market',
        'description': 'Adapt your profile for opportunities in the global market',
        'prompt': 'Opportunities in the international market',
    },
    Objective.SSI_IMPROVEMENT.value: {
        'name': 'Improve SSI',
        'description': 'Increase your Social Selling Index and visibility on LinkedIn',
        'prompt': 'Improve the Social Selling Index (SSI) and visibility',
    },
}


def describe_objective(objective: Optional[str]) -> str:
    """Human readable objective for prompts; unknown tags pass through as-is."""
    entry = OBJECTIVE_CATALOG.get(objective)
    if entry:
        return entry['prompt']
    return str(objective) if objective else ''


def list_objectives() -> List[Dict[str, str]]:
    return [
        {'id': objective_id, 'name': entry['name'], 'description': entry['description']}
        for objective_id, entry in OBJECTIVE_CATALOG.items()
    ]
