"""
Document preprocessing.

Normalizes raw document text so that every downstream span refers to one
canonical string, counts words, estimates pages and resolves the language
and document type used by the rest of the pipeline.
"""

import logging
import math
import re
import unicodedata
from dataclasses import dataclass
from typing import Optional, Union

from legal_engine.config import PreprocessingConfig
from legal_engine.models.schemas import DocumentType
from legal_engine.services.errors import EmptyDocumentError, MalformedInputError
from legal_engine.services.language_profiles import LanguageProfile, LanguageProfileRegistry
from legal_engine.utils.decorators import translate_errors
from legal_engine.utils.validation import normalize_language, validate_document_type

logger = logging.getLogger(__name__)

_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_TRAILING_SPACE = re.compile(r" +\n")
_EXCESS_BLANK_LINES = re.compile(r"\n{3,}")
# C0/C1 control characters other than tab and newline
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


@dataclass(frozen=True)
class PreparedDocument:
    """Normalized document ready for segmentation."""
    text: str
    language: str
    profile: LanguageProfile
    word_count: int
    page_count: int
    document_type: DocumentType


@translate_errors("normalization")
def normalize_text(raw: Union[str, bytes]) -> str:
    """
    Normalize raw document text.

    Applies NFKC, unifies line endings, collapses horizontal whitespace to a
    single space, strips trailing spaces and collapses runs of blank lines to
    one paragraph break.

    Raises:
        MalformedInputError: bytes are not UTF-8 or the text holds NUL/control characters
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        raise MalformedInputError(f"Document must be text, got {type(raw).__name__}")
    if "\x00" in raw or "\ufffd" in raw:
        raise MalformedInputError("Document contains NUL or replacement characters")

    text = unicodedata.normalize("NFKC", raw)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _CONTROL_CHARS.sub(" ", text)
    text = _HORIZONTAL_WHITESPACE.sub(" ", text)
    text = _TRAILING_SPACE.sub("\n", text)
    text = _EXCESS_BLANK_LINES.sub("\n\n", text)
    return text.strip()


def count_words(text: str) -> int:
    """Whitespace-delimited token count."""
    return len(text.split())


class DocumentPreprocessor:
    """Turns raw input into a PreparedDocument."""

    def __init__(self, profiles: LanguageProfileRegistry, config: PreprocessingConfig):
        self.profiles = profiles
        self.config = config

    def estimate_pages(self, text: str, word_count: int, profile: LanguageProfile) -> int:
        """Estimated page count, minimum 1."""
        if profile.counts_characters:
            characters = sum(1 for ch in text if not ch.isspace())
            return max(1, math.ceil(characters / self.config.chars_per_page))
        return max(1, math.ceil(word_count / self.config.words_per_page))

    def prepare(
        self,
        raw: Union[str, bytes],
        language: Optional[str] = None,
        document_type: Optional[str] = None
    ) -> PreparedDocument:
        """
        Normalize a document and resolve its language and type.

        Args:
            raw: Document text (str or UTF-8 bytes)
            language: Declared language code; detected when None
            document_type: Declared document type; inferred when None

        Returns:
            PreparedDocument

        Raises:
            UnsupportedLanguageError: declared language has no profile
            EmptyDocumentError: document is empty or whitespace-only
            MalformedInputError: undecodable input or unknown document type
        """
        if raw is None:
            raise EmptyDocumentError()
        text = normalize_text(raw)
        if not text:
            raise EmptyDocumentError()

        declared_language = normalize_language(language)
        declared_type = validate_document_type(document_type)

        code = declared_language or self.profiles.detect_language(text)
        profile = self.profiles.get_profile(code)

        if declared_type is None:
            inferred = profile.detect_document_type(text[:self.config.title_window])
            declared_type = DocumentType(inferred) if inferred else DocumentType.CONTRACT

        word_count = count_words(text)
        page_count = self.estimate_pages(text, word_count, profile)

        logger.debug(
            f"Prepared document: language={code} type={declared_type.value} "
            f"words={word_count} pages={page_count}"
        )

        return PreparedDocument(
            text=text,
            language=code,
            profile=profile,
            word_count=word_count,
            page_count=page_count,
            document_type=declared_type,
        )
