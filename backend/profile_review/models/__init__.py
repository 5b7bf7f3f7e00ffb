"""
Models package - data models, enums and objective catalog
"""
from profile_review.models.enums import (
    AnalysisStage,
    DEFAULT_OBJECTIVE,
    Objective,
    PayloadShape,
    RunStatus,
    TERMINAL_FAILURE_STATUSES
)
from profile_review.models.profile import (
    CredentialSet,
    ProfileFetchAttempt,
    ScrapedProfile,
    OBJECTIVE_CATALOG,
    describe_objective,
    list_objectives
)
from profile_review.models.report import (
    AnalysisResult,
    DEFAULT_SCORES,
    FinalReport,
    ScoreSet
)

__all__ = [
    # Enums
    'AnalysisStage',
    'DEFAULT_OBJECTIVE',
    'Objective',
    'PayloadShape',
    'RunStatus',
    'TERMINAL_FAILURE_STATUSES',
    # Profile models
    'CredentialSet',
    'ProfileFetchAttempt',
    'ScrapedProfile',
    'OBJECTIVE_CATALOG',
    'describe_objective',
    'list_objectives',
    # Report models
    'AnalysisResult',
    'DEFAULT_SCORES',
    'FinalReport',
    'ScoreSet'
]
