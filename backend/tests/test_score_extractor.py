"""
Tests for report-card score extraction
"""
import json

import pytest

from profile_review.models import DEFAULT_SCORES, AnalysisResult, ScoreSet
from profile_review.services.score_extractor import SCORE_SHAPES, extract_scores

FIELDS = ('profile_completeness', 'headline_quality', 'experience_details', 'skills_relevance', 'overall_impression')


def _structured(data):
    return AnalysisResult(analysis_text='{}', objective='general', analysis_structured=data, is_structured_format=True)


def _as_tuple(scores):
    return tuple(getattr(scores, field) for field in FIELDS)


DEFAULTS = tuple(DEFAULT_SCORES[field] for field in FIELDS)


class TestShapes:

    def test_shape_order(self):
        assert [shape.name for shape in SCORE_SHAPES] == [
            'nested_grade', 'flat_grades', 'impression_text', 'overall_grade', 'total_grade'
        ]

    def test_nested_grade(self):
        data = {"analysis": {"grade": {
            "overall": 9, "presentation": 6, "professional": 7.5, "skills": 8, "linkedin": 5
        }}}
        assert _as_tuple(extract_scores(_structured(data))) == (9, 6, 7.5, 8, 5)

    def test_nested_grade_portuguese_keys(self):
        data = {"análise": {"nota": {"score_geral": 9, "score_habilidades": "6"}}}
        assert _as_tuple(extract_scores(_structured(data))) == (9, 7, 8, 6.0, 8)

    def test_flat_grades(self):
        data = {"profile_grade": 7, "title_grade": 5, "experience_grade": 6, "skills_grade": 9}
        assert _as_tuple(extract_scores(_structured(data))) == (7, 5, 6, 9, 7)

    def test_impression_text(self):
        data = {"general_summary": {"initial_impression": "Good profile, grade 7.5 out of 10"}}
        assert _as_tuple(extract_scores(_structured(data))) == (7.5, 7, 8, 7, 7.5)

    def test_impression_text_without_number(self):
        data = {"general_summary": {"initial_impression": "Promising profile"}}
        assert _as_tuple(extract_scores(_structured(data))) == DEFAULTS

    def test_overall_grade_partial(self):
        data = {"Overall Grade": {"notaPerfil": 9, "notaTitulo": 8}}
        scores = extract_scores(_structured(data))
        assert scores.profile_completeness == 9
        assert scores.headline_quality == 8
        assert scores.overall_impression == 9
        assert scores.experience_details == DEFAULT_SCORES['experience_details']
        assert scores.skills_relevance == DEFAULT_SCORES['skills_relevance']

    def test_overall_grade_experience_synonym(self):
        data = {"Nota Geral": {"notaPerfil": 6, "notaOportunidadesMelhoria": 4, "notaHabilidades": 5}}
        assert _as_tuple(extract_scores(_structured(data))) == (6, 7, 4, 5, 6)

    def test_overall_grade_missing_experience_synonym(self):
        data = {"Overall Grade": {"profileGrade": 6}}
        scores = extract_scores(_structured(data))
        assert all(isinstance(value, (int, float)) for value in _as_tuple(scores))
        assert scores.experience_details == DEFAULT_SCORES['experience_details']

    def test_total_grade(self):
        data = {"summary": {"totalGrade": 8}}
        assert _as_tuple(extract_scores(_structured(data))) == (8, 7, 8, 6.5, 8)

    def test_total_grade_portuguese(self):
        data = {"resumoGeral": {"notaTotal": "9"}}
        assert _as_tuple(extract_scores(_structured(data))) == (9.0, 8.0, 9.0, 7.5, 9.0)

    def test_first_matching_shape_wins(self):
        data = {
            "profile_grade": 3,
            "Overall Grade": {"notaPerfil": 9},
        }
        assert extract_scores(_structured(data)).profile_completeness == 3


class TestDefaults:

    @pytest.mark.parametrize("grade", [0, None, "", "n/a", False, True])
    def test_falsy_and_non_numeric_values(self, grade):
        data = {"analysis": {"grade": {"overall": grade}}}
        assert extract_scores(_structured(data)).profile_completeness == DEFAULT_SCORES['profile_completeness']

    @pytest.mark.parametrize("grade", [float('nan'), float('inf'), float('-inf'), "NaN", "Infinity"])
    def test_non_finite_values(self, grade):
        data = {"analysis": {"grade": {"overall": grade, "skills": 6}}}
        scores = extract_scores(_structured(data))
        assert scores.profile_completeness == DEFAULT_SCORES['profile_completeness']
        assert scores.skills_relevance == 6

    def test_non_finite_total_grade(self):
        scores = extract_scores(_structured({"summary": {"totalGrade": float('nan')}}))
        assert _as_tuple(scores) == DEFAULTS
        assert json.loads(json.dumps(scores.to_dict(), allow_nan=False))

    def test_overflowing_impression_number(self):
        data = {"general_summary": {"initial_impression": "grade " + "9" * 400}}
        assert _as_tuple(extract_scores(_structured(data))) == DEFAULTS

    def test_empty_structured_object(self):
        assert _as_tuple(extract_scores(_structured({}))) == DEFAULTS

    def test_unknown_layout(self):
        assert _as_tuple(extract_scores(_structured({"verdict": "great"}))) == DEFAULTS

    def test_unstructured_text(self):
        result = AnalysisResult(analysis_text='Nice profile, 9/10', objective='general')
        assert _as_tuple(extract_scores(result)) == DEFAULTS

    def test_fallback_report(self):
        result = AnalysisResult(analysis_text='# Report', objective='general', is_fallback=True)
        assert extract_scores(result) == ScoreSet()

    def test_none(self):
        assert extract_scores(None) == ScoreSet()
