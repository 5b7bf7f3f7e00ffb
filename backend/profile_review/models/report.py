"""
Analysis, score and report data models
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one AnalysisEngine.analyze call."""
    analysis_text: str
    objective: str
    analysis_structured: Optional[Dict[str, Any]] = None
    is_structured_format: bool = False
    conversation_id: Optional[str] = None
    run_id: Optional[str] = None
    is_fallback: bool = False
    success: bool = True
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'analysis': self.analysis_text,
            'analysisStructured': self.analysis_structured,
            'isStructuredFormat': self.is_structured_format,
            'conversationId': self.conversation_id,
            'runId': self.run_id,
            'objective': self.objective,
            'isFallback': self.is_fallback,
            'timestamp': self.timestamp,
        }


DEFAULT_SCORES = {
    'profile_completeness': 8,
    'headline_quality': 7,
    'experience_details': 8,
    'skills_relevance': 7,
    'overall_impression': 8,
}


@dataclass(frozen=True)
class ScoreSet:
    """The five grades shown on the report card."""
    profile_completeness: float = DEFAULT_SCORES['profile_completeness']
    headline_quality: float = DEFAULT_SCORES['headline_quality']
    experience_details: float = DEFAULT_SCORES['experience_details']
    skills_relevance: float = DEFAULT_SCORES['skills_relevance']
    overall_impression: float = DEFAULT_SCORES['overall_impression']

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class FinalReport:
    """Unit returned to the caller of fetch_and_analyze."""
    profile: Dict[str, str]
    objective: str
    analysis: Optional[AnalysisResult] = None
    scores: Optional[ScoreSet] = None
    partial: bool = False
    note: Optional[str] = None
    error: Optional[str] = None
    profile_data: Any = None
    timestamp: str = field(default_factory=utc_timestamp)

    @classmethod
    def partial_from(cls, profile: Dict[str, str], objective: str, profile_data: Any, error: str) -> "FinalReport":
        return cls(
            profile=profile,
            objective=objective,
            partial=True,
            note="Automatic analysis failed, but we can still show your profile.",
            error=error,
            profile_data=profile_data,
        )

    def to_dict(self) -> Dict[str, Any]:
        if self.partial:
            return {
                'profile': self.profile,
                'objective': self.objective,
                'profileData': self.profile_data,
                'error': self.error,
                'note': self.note,
                'partial': True,
                'timestamp': self.timestamp,
            }
        analysis = self.analysis
        return {
            'profile': self.profile,
            'objective': self.objective,
            'analysis': analysis.analysis_text if analysis else None,
            'analysisStructured': analysis.analysis_structured if analysis else None,
            'isStructuredFormat': analysis.is_structured_format if analysis else False,
            'isFallback': analysis.is_fallback if analysis else False,
            'scores': (self.scores or ScoreSet()).to_dict(),
            'partial': False,
            'timestamp': self.timestamp,
        }
