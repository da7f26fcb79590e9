"""
Legal engine facade.

Exposes the four engine operations:
- analyze: clause breakdown, issues and document risk score
- risk_score: weighted risk-factor breakdown with recommendations
- compile: template compilation with variable bindings
- list_templates: template catalog, optionally filtered by language

The engine holds only immutable registries and configuration, so one
instance can serve concurrent callers.
"""

from typing import Any, Mapping, Optional, Union

from legal_engine.config import EngineSettings
from legal_engine.models.schemas import (
    AnalysisResult,
    CompileResult,
    RiskLevel,
    RiskScoreResult,
    TemplateListResult,
)
from legal_engine.services.clause_classifier import ClauseClassifier
from legal_engine.services.clause_segmenter import ClauseSegmenter
from legal_engine.services.issue_detector import IssueDetector
from legal_engine.services import language_profiles, template_registry
from legal_engine.services.language_profiles import LanguageProfileRegistry
from legal_engine.services.preprocessor import DocumentPreprocessor
from legal_engine.services.risk_aggregator import RiskAggregator
from legal_engine.services.template_compiler import TemplateCompiler
from legal_engine.services.template_registry import TemplateRegistry
from legal_engine.utils.logging import get_logger
from legal_engine.utils.performance import log_execution_time

logger = get_logger("engine")

Document = Union[str, bytes]


class LegalEngine:
    """
    Stateless analysis and template engine.

    Usage:
        engine = create_engine()
        result = engine.analyze(text, "en")
        print(result.risk_level, len(result.issues))
    """

    def __init__(
        self,
        settings: EngineSettings,
        profiles: LanguageProfileRegistry,
        templates: TemplateRegistry
    ):
        self.settings = settings
        self.profiles = profiles
        self.templates = templates

        self.preprocessor = DocumentPreprocessor(profiles, settings.preprocessing)
        self.segmenter = ClauseSegmenter(max_clause_chars=settings.segmentation.max_clause_chars)
        self.classifier = ClauseClassifier(settings.scoring)
        self.issue_detector = IssueDetector()
        self.aggregator = RiskAggregator(settings.aggregation)
        self.compiler = TemplateCompiler()

    def _classify(self, prepared):
        candidates = self.segmenter.segment(prepared.text, prepared.profile)
        return self.classifier.classify_all(candidates, prepared.profile)

    @log_execution_time("analyze")
    def analyze(
        self,
        document: Document,
        language: Optional[str] = None,
        document_type: Optional[str] = None
    ) -> AnalysisResult:
        """
        Analyze a legal document.

        Args:
            document: Document text (str or UTF-8 bytes)
            language: Language code; detected when None
            document_type: Document type; inferred from the title when None

        Returns:
            AnalysisResult with clauses in document order

        Raises:
            EmptyDocumentError, UnsupportedLanguageError, MalformedInputError
        """
        prepared = self.preprocessor.prepare(document, language, document_type)
        scored = self._classify(prepared)

        section_numbers = self.segmenter.section_numbers(prepared.text, prepared.profile)
        issues = self.issue_detector.detect(
            scored, prepared.profile, prepared.document_type, section_numbers
        )
        risk_score = self.aggregator.document_score(scored)

        result = AnalysisResult(
            risk_score=risk_score,
            risk_level=RiskLevel.from_score(risk_score),
            clauses=[clause.to_clause() for clause in scored],
            issues=issues,
            language=prepared.language,
            word_count=prepared.word_count,
            page_count=prepared.page_count,
            document_type=prepared.document_type,
        )

        logger.info(
            "document_analyzed",
            language=result.language,
            document_type=result.document_type.value,
            clause_count=len(result.clauses),
            issue_count=len(result.issues),
            risk_score=result.risk_score,
            risk_level=result.risk_level.value,
        )
        return result

    @log_execution_time("risk_score")
    def risk_score(
        self,
        document: Document,
        language: Optional[str] = None
    ) -> RiskScoreResult:
        """
        Compute the weighted risk-factor breakdown of a document.

        Args:
            document: Document text (str or UTF-8 bytes)
            language: Language code; detected when None

        Returns:
            RiskScoreResult
        """
        prepared = self.preprocessor.prepare(document, language)
        scored = self._classify(prepared)
        result = self.aggregator.breakdown(scored, prepared.language)

        logger.info(
            "risk_scored",
            language=result.language,
            overall_score=result.overall_score,
            risk_level=result.risk_level.value,
            recommendation_count=len(result.recommendations),
        )
        return result

    @log_execution_time("compile")
    def compile(
        self,
        template_id: str,
        variables: Optional[Mapping[str, Any]] = None
    ) -> CompileResult:
        """
        Compile a template.

        Raises:
            TemplateNotFoundError: unknown template id
            MalformedInputError: a variable is not a string
        """
        template = self.templates.get_template(template_id)
        result = self.compiler.compile(template, variables)

        logger.info(
            "template_compiled",
            template_id=result.template_id,
            variables_applied=result.variables_applied,
            missing_variables=result.missing_variables,
        )
        return result

    @log_execution_time("list_templates")
    def list_templates(self, language: Optional[str] = None) -> TemplateListResult:
        """List templates, optionally only those supporting a language."""
        templates = [t.info() for t in self.templates.list_templates(language)]

        logger.info("templates_listed", language=language, count=len(templates))
        return TemplateListResult(templates=templates, count=len(templates))


def create_engine(settings: Optional[EngineSettings] = None) -> LegalEngine:
    """
    Build an engine with the default language profiles and templates.

    Args:
        settings: Engine settings; defaults when None

    Returns:
        LegalEngine ready for concurrent use
    """
    settings = settings or EngineSettings()
    return LegalEngine(
        settings=settings,
        profiles=language_profiles.build_default_registry(),
        templates=template_registry.build_default_registry(),
    )
