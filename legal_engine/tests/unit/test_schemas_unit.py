"""
Unit tests for the pydantic result schemas.

Tests risk level thresholds, derived clause levels, model validation and the
error hierarchy.
"""

import pytest
from pydantic import ValidationError

from legal_engine.models.schemas import (
    AnalysisResult,
    Clause,
    ClauseSpan,
    CompileResult,
    DocumentType,
    ErrorResponse,
    RiskLevel,
    Template,
)
from legal_engine.services.errors import (
    EmptyDocumentError,
    LegalEngineError,
    MalformedInputError,
    TemplateNotFoundError,
    UnsupportedLanguageError,
)


class TestRiskLevel:
    """Tests for the fixed score thresholds."""

    @pytest.mark.parametrize("score,expected", [
        (0.0, RiskLevel.LOW),
        (0.2999, RiskLevel.LOW),
        (0.3, RiskLevel.MEDIUM),
        (0.4999, RiskLevel.MEDIUM),
        (0.5, RiskLevel.HIGH),
        (0.6999, RiskLevel.HIGH),
        (0.7, RiskLevel.CRITICAL),
        (1.0, RiskLevel.CRITICAL),
    ])
    def test_from_score_thresholds(self, score, expected):
        assert RiskLevel.from_score(score) is expected

    def test_levels_serialize_as_strings(self):
        assert RiskLevel.CRITICAL.value == "critical"
        assert RiskLevel("medium") is RiskLevel.MEDIUM


class TestClause:
    """Tests for Clause validation."""

    def _clause(self, **overrides):
        data = {
            "id": "clause-001",
            "text": "Either party may terminate.",
            "clause_type": "Termination",
            "risk_score": 0.3,
            "span": ClauseSpan(start=0, end=27),
        }
        data.update(overrides)
        return Clause(**data)

    def test_risk_level_derived_from_score(self):
        clause = self._clause(risk_score=0.72)
        assert clause.risk_level is RiskLevel.CRITICAL

    def test_consistent_risk_level_accepted(self):
        clause = self._clause(risk_score=0.55, risk_level="high")
        assert clause.risk_level is RiskLevel.HIGH

    def test_inconsistent_risk_level_rejected(self):
        with pytest.raises(ValidationError):
            self._clause(risk_score=0.1, risk_level="critical")

    def test_score_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            self._clause(risk_score=1.2)

    def test_section_defaults_to_none(self):
        assert self._clause().section is None


class TestClauseSpan:
    def test_valid_span(self):
        span = ClauseSpan(start=5, end=10)
        assert (span.start, span.end) == (5, 10)

    def test_empty_span_allowed(self):
        assert ClauseSpan(start=3, end=3).end == 3

    def test_reversed_span_rejected(self):
        with pytest.raises(ValidationError):
            ClauseSpan(start=10, end=5)

    def test_negative_offset_rejected(self):
        with pytest.raises(ValidationError):
            ClauseSpan(start=-1, end=5)


class TestAnalysisResult:
    def _result(self, **overrides):
        data = {
            "risk_score": 0.42,
            "risk_level": RiskLevel.MEDIUM,
            "language": "en",
            "word_count": 120,
            "page_count": 1,
            "document_type": DocumentType.CONTRACT,
        }
        data.update(overrides)
        return AnalysisResult(**data)

    def test_consistent_result(self):
        result = self._result()
        assert result.clauses == []
        assert result.issues == []

    def test_inconsistent_level_rejected(self):
        with pytest.raises(ValidationError):
            self._result(risk_level=RiskLevel.LOW)

    def test_page_count_minimum_one(self):
        with pytest.raises(ValidationError):
            self._result(page_count=0)


class TestTemplate:
    def test_template_is_frozen(self):
        template = Template(
            id="nda", name="NDA", description="d", body="{{a}}",
            required_variables=("a",), language_support=("en",)
        )
        with pytest.raises(ValidationError):
            template.name = "Other"

    def test_duplicate_required_variables_rejected(self):
        with pytest.raises(ValidationError):
            Template(
                id="nda", name="NDA", description="d", body="{{a}}",
                required_variables=("a", "a"),
            )

    def test_info_omits_body(self):
        template = Template(
            id="tos", name="Terms", description="d", body="{{company_name}}",
            required_variables=("company_name",), language_support=("en", "fr")
        )
        info = template.info()
        assert info.id == "tos"
        assert info.required_variables == ["company_name"]
        assert info.language_support == ["en", "fr"]
        assert "body" not in info.model_dump()


class TestResultModels:
    def test_compile_result_defaults(self):
        result = CompileResult(template_id="nda", compiled_document="x", variables_applied=0)
        assert result.missing_variables == []

    def test_error_response_serialization(self):
        response = ErrorResponse(error="TemplateNotFound", message="missing")
        assert response.model_dump() == {
            "error": "TemplateNotFound",
            "message": "missing",
            "details": None,
        }


class TestErrors:
    """Tests for the engine error hierarchy."""

    def test_error_codes(self):
        assert EmptyDocumentError().to_response().error == "EmptyDocument"
        assert UnsupportedLanguageError("xx").error_code == "UnsupportedLanguage"
        assert TemplateNotFoundError("lease").error_code == "TemplateNotFound"
        assert MalformedInputError("bad").error_code == "MalformedInput"

    def test_all_errors_share_base(self):
        for error in (EmptyDocumentError(), UnsupportedLanguageError("xx"),
                      TemplateNotFoundError("lease"), MalformedInputError("bad")):
            assert isinstance(error, LegalEngineError)

    def test_unsupported_language_details(self):
        response = UnsupportedLanguageError("xx", ["ja", "en"]).to_response()
        assert response.details == {"language": "xx", "supported": ["en", "ja"]}
        assert "xx" in response.message

    def test_template_not_found_details(self):
        error = TemplateNotFoundError("lease")
        assert error.to_response().details == {"template_id": "lease"}
        assert str(error) == "Template 'lease' not found"
