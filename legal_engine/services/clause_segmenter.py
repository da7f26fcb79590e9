"""
Section-aware clause segmentation for legal documents.

Splits normalized text on legal section boundaries (articles, sections,
numbered and lettered items), paragraph breaks and, for long paragraphs,
sentence boundaries. Every clause keeps its character span in the
normalized text; spans never overlap and appear in source order.
"""

import re
import logging
from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass

from legal_engine.services.language_profiles import LanguageProfile

logger = logging.getLogger(__name__)

_WORD = re.compile(r"\w")
_LAST_TOKEN = re.compile(r"(\S+)$")
_ENUMERATOR = re.compile(r"\d+(?:\.\d+)*")
MAX_LABEL_LENGTH = 60


@dataclass
class ClauseCandidate:
    """A segmented clause with its position and structural context."""
    text: str
    start: int
    end: int
    ordinal: int = 0
    heading: Optional[str] = None  # own or enclosing section heading
    section_number: Optional[str] = None
    marker_type: Optional[str] = None  # article, section, numbered, lettered, ...

    @property
    def location(self) -> str:
        """Human-readable reference used by issues."""
        return self.heading or f"Clause {self.ordinal}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "start": self.start,
            "end": self.end,
            "ordinal": self.ordinal,
            "heading": self.heading,
            "section_number": self.section_number,
            "marker_type": self.marker_type,
        }


def heading_label(line: str) -> str:
    """Shorten a heading line to a location label."""
    line = line.strip()
    if len(line) <= MAX_LABEL_LENGTH:
        return line
    return line[:MAX_LABEL_LENGTH - 3].rstrip() + "..."


class ClauseSegmenter:
    """
    Language-aware clause segmenter.

    Recognizes the heading markers of the given language profile:
    - Articles and sections (ARTICLE I, Section 1.1, §5, 第3条, etc.)
    - Numbered items (1., 2.1, 3.2.1)
    - Lettered items ((a), (iv), (1))
    - Definitions, recitals and exhibits
    """

    def __init__(self, max_clause_chars: int = 800):
        """
        Initialize the clause segmenter.

        Args:
            max_clause_chars: Paragraphs longer than this are split at sentence boundaries
        """
        self.max_clause_chars = max_clause_chars

    def _split_into_segments(
        self,
        text: str,
        profile: LanguageProfile
    ) -> List[Dict[str, Any]]:
        """
        Split text into paragraph/section segments.

        A heading line opens a segment and a blank line closes one. A title
        heading ("2. LIMITATION OF LIABILITY") immediately followed by another
        heading is a pure title: it is not emitted, but becomes the context of
        the segments below it. A title standing alone before a body paragraph
        is merged with that paragraph. A heading whose marker opens the clause
        text on the same line ("2. Liability shall be unlimited.") is a clause
        on its own.

        Returns:
            List of segment dicts with start, end, heading, number and marker
        """
        segments = []
        current = None
        context = {"heading": None, "number": None}
        pos = 0

        def is_pure_title(segment):
            return segment["title"] and segment["lines"] == 1

        def close(segment):
            if segment is None or is_pure_title(segment):
                return
            segments.append(segment)

        for line in text.split("\n"):
            line_start = pos
            line_end = pos + len(line)
            pos = line_end + 1

            if not line.strip():
                if current is not None and not is_pure_title(current):
                    close(current)
                    current = None
                continue

            heading = profile.match_heading(line)

            if heading:
                close(current)
                title = profile.is_title(heading.remainder)
                label = heading_label(line) if title else heading_label(heading.marker)
                context = {"heading": label, "number": heading.number}
                current = {
                    "start": line_start,
                    "end": line_end,
                    "heading": label,
                    "number": heading.number,
                    "marker": heading.marker_type,
                    "title": title,
                    "lines": 1,
                }
            elif current is not None:
                current["end"] = line_end
                current["lines"] += 1
            else:
                current = {
                    "start": line_start,
                    "end": line_end,
                    "heading": context["heading"],
                    "number": context["number"],
                    "marker": None,
                    "title": False,
                    "lines": 1,
                }

        close(current)
        return segments

    def _sentence_boundaries(self, text: str, profile: LanguageProfile) -> List[int]:
        """Offsets just past each sentence terminator, skipping abbreviations."""
        boundaries = []
        for match in profile.sentence_terminator.finditer(text):
            token = _LAST_TOKEN.search(text[:match.start()])
            if token and match.group(0) == ".":
                word = token.group(1).lstrip("(\"'").lower()
                if word in profile.abbreviations or (len(word) == 1 and word.isalpha()):
                    continue
                # Item numbers opening a line ("2. Fees")
                at_line_start = token.start() == 0 or text[token.start() - 1] == "\n"
                if at_line_start and _ENUMERATOR.fullmatch(word):
                    continue
            boundaries.append(match.end())
        return boundaries

    def _split_large_segment(
        self,
        text: str,
        start: int,
        end: int,
        profile: LanguageProfile
    ) -> List[Tuple[int, int]]:
        """
        Split a long segment into consecutive pieces at sentence boundaries.

        Pieces are packed greedily up to max_clause_chars; a single sentence
        longer than the limit stays whole.
        """
        segment_text = text[start:end]
        cuts = [b for b in self._sentence_boundaries(segment_text, profile) if b < len(segment_text)]

        pieces = []
        piece_start = 0
        last_cut = None
        for cut in cuts + [len(segment_text)]:
            if cut - piece_start > self.max_clause_chars and last_cut is not None:
                pieces.append((start + piece_start, start + last_cut))
                piece_start = last_cut
            last_cut = cut
        pieces.append((start + piece_start, end))
        return pieces

    def _trim(self, text: str, start: int, end: int) -> Tuple[int, int]:
        while start < end and text[start].isspace():
            start += 1
        while end > start and text[end - 1].isspace():
            end -= 1
        return start, end

    def segment(self, text: str, profile: LanguageProfile) -> List[ClauseCandidate]:
        """
        Segment a normalized document into clauses.

        Args:
            text: Normalized document text
            profile: Language profile supplying boundary rules

        Returns:
            Ordered list of ClauseCandidate objects; at least one for non-empty text
        """
        if not text or not text.strip():
            return []

        segments = self._split_into_segments(text, profile)
        logger.debug(f"Detected {len(segments)} segments")

        candidates = []
        for segment in segments:
            start, end = self._trim(text, segment["start"], segment["end"])
            if end - start > self.max_clause_chars:
                spans = self._split_large_segment(text, start, end, profile)
            else:
                spans = [(start, end)]

            for piece_start, piece_end in spans:
                piece_start, piece_end = self._trim(text, piece_start, piece_end)
                piece = text[piece_start:piece_end]
                if not _WORD.search(piece):
                    continue
                candidates.append(ClauseCandidate(
                    text=piece,
                    start=piece_start,
                    end=piece_end,
                    heading=segment["heading"],
                    section_number=segment["number"],
                    marker_type=segment["marker"],
                ))

        if not candidates:
            start, end = self._trim(text, 0, len(text))
            candidates.append(ClauseCandidate(text=text[start:end], start=start, end=end))

        for ordinal, candidate in enumerate(candidates, start=1):
            candidate.ordinal = ordinal

        logger.info(
            f"Segmented document into {len(candidates)} clauses "
            f"(from {len(segments)} segments, language={profile.code})"
        )

        return candidates

    def section_numbers(self, text: str, profile: LanguageProfile) -> List[str]:
        """Section numbers defined by heading lines, in document order."""
        numbers = []
        for line in text.split("\n"):
            detection = profile.detect_heading(line)
            if detection and detection[1] and detection[1] not in numbers:
                numbers.append(detection[1])
        return numbers


# Convenience function for quick usage
def segment_clauses(
    text: str,
    profile: LanguageProfile,
    max_clause_chars: int = 800
) -> List[ClauseCandidate]:
    """
    Segment a normalized legal document into clauses.

    Args:
        text: Normalized document text
        profile: Language profile for boundary rules
        max_clause_chars: Maximum characters per clause before sentence splitting

    Returns:
        List of ClauseCandidate objects
    """
    segmenter = ClauseSegmenter(max_clause_chars=max_clause_chars)
    return segmenter.segment(text, profile)
