"""
Enums and constants for data models
"""
from enum import Enum


class Objective(Enum):
    """Career objective a profile is analyzed against"""
    FIRST_JOB = "first_job"
    CAREER_UPGRADE = "career_upgrade"
    INTERNATIONAL = "international"
    SSI_IMPROVEMENT = "ssi_improvement"


DEFAULT_OBJECTIVE = "general"


class PayloadShape(Enum):
    """Candidate request bodies for the Apify scraper actor, in the order they are tried"""
    INPUT_URLS = "input.urls"
    INPUT_PROFILE_URLS = "input.profileUrls"
    FLAT_URLS = "urls"


class RunStatus(Enum):
    """Poller states for an assistant run"""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


# Provider statuses that end a run without output
TERMINAL_FAILURE_STATUSES = frozenset({"failed", "cancelled", "expired"})


class AnalysisStage(Enum):
    """Stages of one analysis attempt plus the two terminal outcomes"""
    CREATE_CONVERSATION = "create_conversation"
    SUBMIT_PROMPT = "submit_prompt"
    START_RUN = "start_run"
    POLL_COMPLETION = "poll_completion"
    EXTRACT_MESSAGE = "extract_message"
    PARSE_OUTPUT = "parse_output"
    COMPLETED = "completed"
    FALLBACK = "fallback"
