"""
Typed failures raised by the legal engine.

Every input-driven failure is deterministic, so none of these are retryable.
The external API layer serializes them through ``to_response()``.
"""

from typing import Any, Dict, Optional

from legal_engine.models.schemas import ErrorResponse


class LegalEngineError(Exception):
    """Base class for all engine failures."""

    error_code = "LegalEngineError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_response(self) -> ErrorResponse:
        """Serialize the failure for the caller layer."""
        return ErrorResponse(
            error=self.error_code,
            message=self.message,
            details=self.details,
        )


class EmptyDocumentError(LegalEngineError):
    """Raised when a document is empty or whitespace-only."""

    error_code = "EmptyDocument"

    def __init__(self, message: str = "Document is empty"):
        super().__init__(message)


class UnsupportedLanguageError(LegalEngineError):
    """Raised when a language code has no loaded profile."""

    error_code = "UnsupportedLanguage"

    def __init__(self, language: str, supported: Optional[list] = None):
        details = {"language": language}
        if supported is not None:
            details["supported"] = sorted(supported)
        super().__init__(f"Unsupported language: {language!r}", details)
        self.language = language


class TemplateNotFoundError(LegalEngineError):
    """Raised when a template id is not in the registry."""

    error_code = "TemplateNotFound"

    def __init__(self, template_id: str):
        super().__init__(
            f"Template {template_id!r} not found",
            {"template_id": template_id},
        )
        self.template_id = template_id


class MalformedInputError(LegalEngineError):
    """Raised on encoding or normalization failures and invalid arguments."""

    error_code = "MalformedInput"
