# Tests for ImageMetadata, ValidationIssue and ValidationResult

import dataclasses

import pytest

from microstock_studio.state import (
    ContentType,
    ImageMetadata,
    ScoreBand,
    Severity,
    ValidationIssue,
    ValidationResult,
)


class TestImageMetadata:
    """ImageMetadata dataclass"""

    def test_defaults(self):
        meta = ImageMetadata(title="t", description="d", keywords=("a",))
        assert meta.content_type == ContentType.PHOTOGRAPHY
        assert meta.is_ai is False
        assert meta.author == ""
        assert meta.keyword_analysis is None

    def test_is_frozen(self):
        meta = ImageMetadata(title="t", description="d", keywords=())
        with pytest.raises(dataclasses.FrozenInstanceError):
            meta.title = "other"

    def test_content_type_values(self):
        assert ContentType("3D Render") is ContentType.RENDER_3D
        assert {c.value for c in ContentType} == {
            "Photography", "Illustration", "3D Render", "Vector",
        }


class TestValidationResult:
    """ValidationResult helpers"""

    def _result(self, *severities: Severity, score: int = 80) -> ValidationResult:
        issues = [ValidationIssue(s, f"{s.value} issue", "title") for s in severities]
        return ValidationResult(score=score, issues=issues)

    def test_empty_result_passes(self):
        result = ValidationResult(score=100)
        assert result.passed is True
        assert result.issues == []
        assert result.recommendations == []

    def test_error_blocks(self):
        result = self._result(Severity.ERROR, Severity.WARNING)
        assert result.passed is False
        assert len(result.errors) == 1
        assert len(result.warnings) == 1

    def test_warning_and_info_do_not_block(self):
        assert self._result(Severity.WARNING, Severity.INFO).passed is True

    def test_to_dict(self):
        result = ValidationResult(
            score=90,
            issues=[ValidationIssue(Severity.INFO, "note"), ValidationIssue(Severity.ERROR, "bad", "isAI")],
            recommendations=["fix it"],
        )
        assert result.to_dict() == {
            "score": 90,
            "issues": [
                {"severity": "info", "message": "note"},
                {"severity": "error", "message": "bad", "field": "isAI"},
            ],
            "recommendations": ["fix it"],
        }


class TestScoreBand:
    """Score bands shown next to the score"""

    @pytest.mark.parametrize(
        "score, band",
        [
            (100, ScoreBand.GOOD),
            (90, ScoreBand.GOOD),
            (89, ScoreBand.FAIR),
            (70, ScoreBand.FAIR),
            (69, ScoreBand.POOR),
            (0, ScoreBand.POOR),
        ],
    )
    def test_from_score(self, score, band):
        assert ScoreBand.from_score(score) is band
        assert ValidationResult(score=score).band is band
