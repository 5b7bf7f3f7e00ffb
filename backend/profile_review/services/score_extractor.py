"""
Score extractor - five report-card grades from the assistant's JSON answer

The assistant prompt changed over time and each version produced grades in a
different layout. Every known layout is a ScoreShape; shapes are tried in
order and the first one that matches wins. Keys are accepted in English and
in the Portuguese the assistant is told to use for score names.
"""
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from profile_review.models import DEFAULT_SCORES, AnalysisResult, ScoreSet

logger = logging.getLogger(__name__)

NUMBER_PATTERN = re.compile(r'(\d+(?:\.\d+)?)')


def _as_number(value: Any) -> Optional[float]:
    """Numeric value of value, or None. Zero counts as missing, like other falsy grades."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip().replace(',', '.'))
        except ValueError:
            return None
    else:
        return None
    # NaN and infinities count as missing
    if not math.isfinite(number):
        return None
    return number or None


def _lookup(data: Any, *keys: str) -> Any:
    """First present value among alias keys of a dict."""
    if not isinstance(data, dict):
        return None
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _nested(data: Dict[str, Any], path_aliases: Sequence[Sequence[str]]) -> Any:
    """Walk a path where every step has alias keys, e.g. [('analysis', 'análise'), ('grade', 'nota')]."""
    current = data
    for aliases in path_aliases:
        current = _lookup(current, *aliases)
        if current is None:
            return None
    return current


def _grade(data: Any, *aliases: str, default: float) -> float:
    """First numeric alias value, or the default."""
    if not isinstance(data, dict):
        return default
    for key in aliases:
        number = _as_number(data.get(key))
        if number is not None:
            return number
    return default


def _scores(profile_completeness, headline_quality, experience_details, skills_relevance, overall_impression) -> ScoreSet:
    return ScoreSet(
        profile_completeness=profile_completeness,
        headline_quality=headline_quality,
        experience_details=experience_details,
        skills_relevance=skills_relevance,
        overall_impression=overall_impression,
    )


@dataclass(frozen=True)
class ScoreShape:
    name: str
    matches: Callable[[Dict[str, Any]], bool]
    extract: Callable[[Dict[str, Any]], ScoreSet]


# ========================================
# a. analysis.grade.{overall, presentation, professional, skills, linkedin}
# ========================================
_GRADE_PATH = (('analysis', 'análise', 'analise'), ('grade', 'nota'))


def _match_nested_grade(data):
    return isinstance(_nested(data, _GRADE_PATH), dict)


def _extract_nested_grade(data):
    grade = _nested(data, _GRADE_PATH)
    return _scores(
        _grade(grade, 'overall', 'score_geral', default=DEFAULT_SCORES['profile_completeness']),
        _grade(grade, 'presentation', 'score_apresentação', 'score_apresentacao', default=DEFAULT_SCORES['headline_quality']),
        _grade(grade, 'professional', 'score_profissional', default=DEFAULT_SCORES['experience_details']),
        _grade(grade, 'skills', 'score_habilidades', default=DEFAULT_SCORES['skills_relevance']),
        _grade(grade, 'linkedin', 'score_linkedin', default=DEFAULT_SCORES['overall_impression']),
    )


# ========================================
# b. flat profile_grade / title_grade / experience_grade / skills_grade
# ========================================
def _match_flat_grades(data):
    return _as_number(_lookup(data, 'profile_grade', 'nota_perfil')) is not None


def _extract_flat_grades(data):
    profile_grade = _grade(data, 'profile_grade', 'nota_perfil', default=DEFAULT_SCORES['profile_completeness'])
    return _scores(
        profile_grade,
        _grade(data, 'title_grade', 'nota_titulo', default=DEFAULT_SCORES['headline_quality']),
        _grade(data, 'experience_grade', 'nota_experiencia', default=DEFAULT_SCORES['experience_details']),
        _grade(data, 'skills_grade', 'nota_habilidades', default=DEFAULT_SCORES['skills_relevance']),
        _grade(data, 'profile_grade', 'nota_perfil', default=DEFAULT_SCORES['overall_impression']),
    )


# ========================================
# c. number inside the free-text initial impression
# ========================================
_IMPRESSION_PATH = (('general_summary', 'resumo_geral'), ('initial_impression', 'impressao_inicial'))


def _match_impression_text(data):
    return isinstance(_nested(data, _IMPRESSION_PATH), str)


def _extract_impression_text(data):
    match = NUMBER_PATTERN.search(_nested(data, _IMPRESSION_PATH))
    grade = float(match.group(1)) if match else None
    if grade is not None and not math.isfinite(grade):
        grade = None
    return _scores(
        grade if grade is not None else DEFAULT_SCORES['profile_completeness'],
        DEFAULT_SCORES['headline_quality'],
        DEFAULT_SCORES['experience_details'],
        DEFAULT_SCORES['skills_relevance'],
        grade if grade is not None else DEFAULT_SCORES['overall_impression'],
    )


# ========================================
# d. "Overall Grade" object with its own sub-fields
# ========================================
def _overall_grade_object(data):
    return _lookup(data, 'Overall Grade', 'Nota Geral')


def _match_overall_grade(data):
    return isinstance(_overall_grade_object(data), dict)


def _extract_overall_grade(data):
    grades = _overall_grade_object(data)
    return _scores(
        _grade(grades, 'notaPerfil', 'profileGrade', default=DEFAULT_SCORES['profile_completeness']),
        _grade(grades, 'notaTitulo', 'titleGrade', default=DEFAULT_SCORES['headline_quality']),
        _grade(grades, 'notaExperiencia', 'experienceGrade', 'notaOportunidadesMelhoria', 'improvementGrade',
               default=DEFAULT_SCORES['experience_details']),
        _grade(grades, 'notaHabilidades', 'skillsGrade', default=DEFAULT_SCORES['skills_relevance']),
        _grade(grades, 'notaPerfil', 'profileGrade', 'notaGeral', 'overallGrade',
               default=DEFAULT_SCORES['overall_impression']),
    )


# ========================================
# e. summary.totalGrade, spread over all five fields
# ========================================
_TOTAL_PATH = (('summary', 'resumoGeral'), ('totalGrade', 'notaTotal'))


def _match_total_grade(data):
    return _as_number(_nested(data, _TOTAL_PATH)) is not None


def _extract_total_grade(data):
    total = _as_number(_nested(data, _TOTAL_PATH))
    return _scores(total, total - 1, total, total - 1.5, total)


SCORE_SHAPES = (
    ScoreShape('nested_grade', _match_nested_grade, _extract_nested_grade),
    ScoreShape('flat_grades', _match_flat_grades, _extract_flat_grades),
    ScoreShape('impression_text', _match_impression_text, _extract_impression_text),
    ScoreShape('overall_grade', _match_overall_grade, _extract_overall_grade),
    ScoreShape('total_grade', _match_total_grade, _extract_total_grade),
)


def extract_scores(result: Optional[AnalysisResult]) -> ScoreSet:
    """Five grades for a report; defaults whenever nothing can be extracted."""
    if result is None or not result.is_structured_format or not isinstance(result.analysis_structured, dict):
        return ScoreSet()

    data = result.analysis_structured
    for shape in SCORE_SHAPES:
        if shape.matches(data):
            logger.info(f"Scores extracted using the {shape.name} layout")
            return shape.extract(data)

    logger.info("No known score layout in the analysis, using default scores")
    return ScoreSet()
