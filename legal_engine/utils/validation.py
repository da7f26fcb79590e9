"""
Validation utilities using Literal types.

Normalizes caller-supplied codes before they reach the analysis pipeline.
"""

from typing import Any, Dict, Literal, Mapping, Optional

from legal_engine.models.schemas import DocumentType
from legal_engine.services.errors import MalformedInputError, UnsupportedLanguageError


LanguageCode = Literal["en", "ja", "de", "fr"]
SUPPORTED_LANGUAGES = ("en", "ja", "de", "fr")


def normalize_language(value: Optional[str]) -> Optional[LanguageCode]:
    """
    Validate and normalize a language code.

    Lower-cases, trims and drops a region subtag ("en-US" -> "en").

    Args:
        value: Language code or None

    Returns:
        Normalized language code or None

    Raises:
        UnsupportedLanguageError: code is not one of en, ja, de, fr
    """
    if value is None:
        return None
    code = str(value).strip().lower().replace("_", "-").split("-", 1)[0]
    if code in SUPPORTED_LANGUAGES:
        return code  # type: ignore
    raise UnsupportedLanguageError(str(value), list(SUPPORTED_LANGUAGES))


def validate_document_type(value: Optional[str]) -> Optional[DocumentType]:
    """
    Validate and return a document type.

    Raises:
        MalformedInputError: value is not a known document type
    """
    if value is None:
        return None
    try:
        return DocumentType(str(value).strip().lower())
    except ValueError:
        raise MalformedInputError(
            f"Invalid document_type: {value!r}",
            {"allowed": [t.value for t in DocumentType]},
        )


def validate_variables(variables: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    """
    Validate a template variable map.

    Raises:
        MalformedInputError: a key or value is not a string
    """
    if variables is None:
        return {}
    if not isinstance(variables, Mapping):
        raise MalformedInputError("variables must be a mapping of strings to strings")
    invalid = sorted(
        str(key) for key, value in variables.items()
        if not isinstance(key, str) or not isinstance(value, str)
    )
    if invalid:
        raise MalformedInputError(
            "Template variables must be strings",
            {"invalid_variables": invalid},
        )
    return dict(variables)
