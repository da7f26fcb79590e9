"""
Per-language segmentation and classification resources.

A LanguageProfile bundles everything language-specific the pipeline needs:
heading markers, sentence boundary rules, clause-type rules in priority
order, risk signal patterns and document-type title markers. Profiles are
built once at start-up into an immutable registry and shared read-only by
all requests.
"""

import logging
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Pattern, Sequence, Tuple

from legal_engine.services.errors import UnsupportedLanguageError

logger = logging.getLogger(__name__)


OTHER_CLAUSE_TYPE = "Other"

# Clause types in rule priority order: specific legal terms outrank generic ones
CLAUSE_TYPE_PRIORITY = (
    "Indemnification",
    "Liability",
    "Intellectual Property",
    "Data Protection",
    "Confidentiality",
    "Force Majeure",
    "Termination",
    "Warranty",
    "Payment",
    "Jurisdiction",
    "Definitions",
)


@dataclass(frozen=True)
class ClauseRule:
    """
    Weighted keyword matcher producing a fixed clause type.

    Confidence is the sum of the weights of the distinct patterns found in
    the clause text; the rule matches when confidence reaches the threshold.
    """
    clause_type: str
    patterns: Tuple[Tuple[Pattern, float], ...]
    threshold: float = 1.0

    def confidence(self, text: str) -> float:
        return sum(weight for pattern, weight in self.patterns if pattern.search(text))

    def matches(self, text: str) -> bool:
        return self.confidence(text) >= self.threshold


@dataclass(frozen=True)
class HeadingMatch:
    """A heading marker found at the start of a line."""
    marker_type: str
    number: Optional[str]
    marker: str  # matched marker text, e.g. "Section 2" or "第1条"
    remainder: str  # rest of the line after the marker


@dataclass(frozen=True)
class LanguageProfile:
    """Immutable rule set for one document language."""
    code: str
    name: str
    # Ordered (marker_type, pattern); patterns may define a `number` group
    heading_patterns: Tuple[Tuple[str, Pattern], ...]
    sentence_terminator: Pattern
    abbreviations: frozenset
    clause_rules: Tuple[ClauseRule, ...]
    unlimited_liability: Tuple[Pattern, ...]
    liability_cap: Tuple[Pattern, ...]
    ambiguous_terms: Tuple[Pattern, ...]
    unilateral_terms: Tuple[Pattern, ...]
    cross_reference: Pattern
    governing_law: Tuple[Pattern, ...]
    # Ordered (document_type, pattern); first match wins
    document_type_markers: Tuple[Tuple[str, Pattern], ...]
    stopwords: frozenset = field(default_factory=frozenset)
    counts_characters: bool = False
    # A heading remainder longer than this is clause text, not a title
    max_title_chars: int = 60
    max_title_words: int = 8

    def match_heading(self, line: str) -> Optional[HeadingMatch]:
        """
        Match a section marker at the start of a line.

        The marker may stand alone ("3. Fees") or open the clause body on the
        same line ("3. Fees are payable monthly."); the text after the marker
        is returned as the remainder.
        """
        line = line.strip()
        if not line:
            return None

        for marker_type, pattern in self.heading_patterns:
            match = pattern.match(line)
            if match:
                number = match.groupdict().get("number")
                return HeadingMatch(
                    marker_type=marker_type,
                    number=normalize_section_number(number) if number else None,
                    marker=match.group(0).strip(),
                    remainder=line[match.end():].lstrip(_HEADING_SEPARATORS),
                )

        return None

    def detect_heading(self, line: str) -> Optional[Tuple[str, Optional[str]]]:
        """
        Detect if a line is a section heading.

        Returns:
            Tuple of (marker_type, section_number) or None
        """
        heading = self.match_heading(line)
        if heading is None:
            return None
        return (heading.marker_type, heading.number)

    def is_title(self, remainder: str) -> bool:
        """
        True when the text after a heading marker reads as a section title.

        Titles are short, carry no sentence terminator and do not open with
        a lower-case word; anything else is clause text.
        """
        remainder = remainder.strip()
        if not remainder:
            return True
        if len(remainder) > self.max_title_chars or len(remainder.split()) > self.max_title_words:
            return False
        if remainder[-1] in ",;:" or self.sentence_terminator.search(remainder + " "):
            return False
        first_letter = next((ch for ch in remainder if ch.isalpha()), None)
        return first_letter is None or not first_letter.islower()

    def classify(self, text: str) -> Tuple[str, float]:
        """Return (clause_type, confidence) of the first matching rule."""
        for rule in self.clause_rules:
            confidence = rule.confidence(text)
            if confidence >= rule.threshold:
                return rule.clause_type, confidence
        return OTHER_CLAUSE_TYPE, 0.0

    def find_terms(self, patterns: Iterable[Pattern], text: str) -> List[str]:
        """Distinct matched terms, lower-cased, in pattern order."""
        found = []
        for pattern in patterns:
            match = pattern.search(text)
            if match:
                term = match.group(0).lower()
                if term not in found:
                    found.append(term)
        return found

    def detect_document_type(self, opening_text: str) -> Optional[str]:
        for document_type, pattern in self.document_type_markers:
            if pattern.search(opening_text):
                return document_type
        return None


class LanguageProfileRegistry(Mapping):
    """Read-only mapping of language code to LanguageProfile."""

    def __init__(self, profiles: Iterable[LanguageProfile]):
        self._profiles = MappingProxyType({profile.code: profile for profile in profiles})

    def __getitem__(self, code: str) -> LanguageProfile:
        return self._profiles[code]

    def __iter__(self):
        return iter(self._profiles)

    def __len__(self) -> int:
        return len(self._profiles)

    @property
    def supported_languages(self) -> List[str]:
        return list(self._profiles)

    def get_profile(self, code: str) -> LanguageProfile:
        """
        Look up a profile.

        Raises:
            UnsupportedLanguageError: no profile is loaded for the code
        """
        try:
            return self._profiles[code]
        except KeyError:
            raise UnsupportedLanguageError(code, self.supported_languages)

    def detect_language(self, text: str) -> str:
        """
        Guess the language of a text.

        Kana/CJK-heavy text is Japanese; otherwise the profile with the most
        stop-word hits wins, defaulting to English on a tie.
        """
        sample = text[:5000]
        letters = [ch for ch in sample if not ch.isspace()]
        if letters and "ja" in self._profiles:
            cjk = sum(1 for ch in letters if _is_cjk(ch))
            if cjk / len(letters) > 0.2:
                return "ja"

        tokens = re.findall(r"[^\W\d_]+", sample.lower())
        best_code = "en" if "en" in self._profiles else next(iter(self._profiles))
        best_hits = 0
        for code, profile in self._profiles.items():
            if not profile.stopwords:
                continue
            hits = sum(1 for token in tokens if token in profile.stopwords)
            if hits > best_hits:
                best_code, best_hits = code, hits
        return best_code


_HEADING_SEPARATORS = " \t.,:)-\u2013\u2014\u3000"

_KANJI_DIGITS = {"〇": 0, "一": 1, "二": 2, "三": 3, "四": 4, "五": 5, "六": 6, "七": 7, "八": 8, "九": 9}
_KANJI_UNITS = {"十": 10, "百": 100, "千": 1000}


def kanji_to_int(numeral: str) -> int:
    """Convert a kanji numeral ("十二", "百五", "一〇") to an int."""
    if not any(ch in _KANJI_UNITS for ch in numeral):
        # Positional form
        return int("".join(str(_KANJI_DIGITS[ch]) for ch in numeral))
    total = 0
    digit = None
    for ch in numeral:
        if ch in _KANJI_UNITS:
            total += (1 if digit is None else digit) * _KANJI_UNITS[ch]
            digit = None
        else:
            digit = _KANJI_DIGITS[ch]
    return total + (digit or 0)


def normalize_section_number(number: str) -> str:
    """Canonical section number: trailing dot removed, kanji numerals as digits."""
    number = number.rstrip(".")
    if number and all(ch in _KANJI_DIGITS or ch in _KANJI_UNITS for ch in number):
        return str(kanji_to_int(number))
    return number


def _is_cjk(ch: str) -> bool:
    codepoint = ord(ch)
    return (
        0x3040 <= codepoint <= 0x30FF      # hiragana, katakana
        or 0x4E00 <= codepoint <= 0x9FFF   # CJK unified ideographs
        or 0x3400 <= codepoint <= 0x4DBF
        or 0xFF66 <= codepoint <= 0xFF9F   # half-width katakana
    )


# ═══════════════════════════════════════════════════════════════════════════════
# Profile construction
# ═══════════════════════════════════════════════════════════════════════════════

def _compile_all(patterns: Sequence[str], word_bounded: bool) -> Tuple[Pattern, ...]:
    return tuple(_compile(p, word_bounded) for p in patterns)


def _compile(pattern: str, word_bounded: bool) -> Pattern:
    if word_bounded:
        pattern = rf"(?<!\w){pattern}(?!\w)"
    return re.compile(pattern, re.IGNORECASE)


def _build_rules(
    keywords: Dict[str, Sequence[Tuple[str, float]]],
    word_bounded: bool
) -> Tuple[ClauseRule, ...]:
    rules = []
    for clause_type in CLAUSE_TYPE_PRIORITY:
        entries = keywords.get(clause_type)
        if not entries:
            continue
        rules.append(ClauseRule(
            clause_type=clause_type,
            patterns=tuple((_compile(p, word_bounded), w) for p, w in entries),
        ))
    return tuple(rules)


def _markers(entries: Sequence[Tuple[str, str]]) -> Tuple[Tuple[str, Pattern], ...]:
    return tuple((doc_type, re.compile(p, re.IGNORECASE)) for doc_type, p in entries)


_KANJI_NUMBER = r"[〇一二三四五六七八九十百千]+"

# Heading patterns shared by the Latin-script profiles
_MULTI_LEVEL = ("numbered", re.compile(r"^(?P<number>\d+(?:\.\d+)+)\.?(?=\s+\S)"))
_SINGLE_LEVEL = ("numbered", re.compile(r"^(?P<number>\d+)[.)](?=\s+\S)"))
_LETTERED = ("lettered", re.compile(r"^\((?:[a-z]|[ivx]+)\)(?=\s+\S)", re.IGNORECASE))


def _english() -> LanguageProfile:
    keywords = {
        "Indemnification": [
            (r"indemnif\w*", 1.0), (r"holds? harmless", 1.0),
            (r"defend", 0.5), (r"third[- ]party claims?", 0.5),
        ],
        "Liability": [
            (r"limitation of liability", 1.0), (r"liab(?:le|ility|ilities)", 1.0),
            (r"consequential damages", 0.5), (r"damages", 0.5),
        ],
        "Intellectual Property": [
            (r"intellectual property", 1.0), (r"copyrights?", 1.0), (r"patents?", 1.0),
            (r"works? (?:made )?for hire", 1.0), (r"trademarks?", 0.5),
            (r"assigns?", 0.5), (r"licen[cs]es?", 0.5),
        ],
        "Data Protection": [
            (r"personal data", 1.0), (r"data protection", 1.0), (r"GDPR", 1.0),
            (r"data subjects?", 1.0), (r"privacy", 0.5), (r"process(?:ing|or)", 0.5),
        ],
        "Confidentiality": [
            (r"confidential\w*", 1.0), (r"non-disclosure", 1.0), (r"trade secrets?", 1.0),
            (r"disclos\w+", 0.5),
        ],
        "Force Majeure": [
            (r"force majeure", 1.0), (r"acts? of god", 1.0),
            (r"beyond (?:its|their) reasonable control", 1.0),
        ],
        "Termination": [
            (r"terminat\w*", 1.0), (r"expir\w*", 0.5), (r"notice period", 0.5),
            (r"cancel\w*", 0.5),
        ],
        "Warranty": [
            (r"warrant(?:y|ies|s)", 1.0), (r"as[- ]is", 1.0), (r"merchantability", 1.0),
            (r"fitness for a particular purpose", 1.0),
        ],
        "Payment": [
            (r"pay(?:ment|ments|able|s)?", 1.0), (r"invoic\w*", 1.0), (r"fees?", 0.5),
            (r"interest", 0.5),
        ],
        "Jurisdiction": [
            (r"governing law", 1.0), (r"governed by", 1.0), (r"jurisdiction", 1.0),
            (r"arbitrat\w*", 1.0), (r"venue", 0.5), (r"courts?", 0.5), (r"laws of", 0.5),
        ],
        "Definitions": [
            (r"definitions?", 1.0), (r"shall mean", 1.0), (r"means", 0.5),
            (r"as defined", 0.5),
        ],
    }
    return LanguageProfile(
        code="en",
        name="English",
        heading_patterns=(
            ("article", re.compile(r"^(?:ARTICLE|Article)\s+(?P<number>[IVXLC]+|\d+)\b")),
            ("section", re.compile(r"^(?:SECTION|Section|§)\s*(?P<number>\d+(?:\.\d+)*)")),
            ("clause", re.compile(r"^(?:CLAUSE|Clause)\s+(?P<number>\d+(?:\.\d+)*)")),
            _MULTI_LEVEL,
            _SINGLE_LEVEL,
            _LETTERED,
            ("definitions", re.compile(r"^(?:DEFINITIONS|Definitions|RECITALS|Recitals|WHEREAS|WITNESSETH)\b")),
            ("exhibit", re.compile(r"^(?:EXHIBIT|Exhibit|SCHEDULE|Schedule|APPENDIX|Appendix)\s+[A-Z\d]+\b")),
        ),
        sentence_terminator=re.compile(r"[.!?]+(?=\s)"),
        abbreviations=frozenset({
            "inc", "ltd", "llc", "corp", "co", "e.g", "i.e", "etc", "no", "mr", "ms",
            "mrs", "dr", "vs", "u.s", "sec", "art", "para", "approx",
        }),
        clause_rules=_build_rules(keywords, word_bounded=True),
        unlimited_liability=_compile_all([
            r"unlimited", r"without (?:any )?limit(?:ation)?", r"fully liable",
            r"any and all (?:losses|damages|claims|liabilities)", r"uncapped",
        ], word_bounded=True),
        liability_cap=_compile_all([
            r"shall not exceed", r"capped", r"cap on liability", r"limited to",
            r"(?:maximum|aggregate) liability",
            r"not be liable for (?:any )?(?:indirect|consequential|incidental)",
        ], word_bounded=True),
        ambiguous_terms=_compile_all([
            r"reasonabl[ey]", r"best efforts?", r"promptly", r"material(?:ly)?",
            r"from time to time", r"as (?:appropriate|necessary|needed)",
            r"substantial(?:ly)?", r"satisfactory", r"timely", r"adequate",
        ], word_bounded=True),
        unilateral_terms=_compile_all([
            r"(?:sole|absolute) discretion", r"at any time (?:and )?without (?:prior )?notice",
            r"for any reason or no reason", r"irrevocabl[ey]", r"perpetual",
        ], word_bounded=True),
        cross_reference=re.compile(
            r"\b(?:Section|Article|Clause|Paragraph)\s+(\d+(?:\.\d+)*)", re.IGNORECASE
        ),
        governing_law=(
            re.compile(
                r"(?i:laws?\s+of)\s+(?:the\s+)?(?:(?i:state|commonwealth|province)\s+of\s+)?"
                r"([A-Z][A-Za-z]+(?:\s+[A-Z][A-Za-z]+)*)"
            ),
        ),
        document_type_markers=_markers([
            ("privacy_policy", r"\bprivacy (?:policy|notice)\b"),
            ("nda", r"\bnon-?disclosure\b|\bconfidentiality agreement\b|\bNDA\b"),
            ("terms", r"\bterms (?:of (?:service|use)|and conditions)\b"),
            ("license", r"\blicen[cs]e agreement\b|\bEULA\b"),
        ]),
        stopwords=frozenset({
            "the", "and", "of", "to", "shall", "in", "any", "by", "be", "or",
            "this", "with", "agreement", "party", "for", "is",
        }),
    )


def _german() -> LanguageProfile:
    keywords = {
        "Indemnification": [
            (r"freistell\w*", 1.0), (r"schadlos", 1.0), (r"ansprüche dritter", 0.5),
        ],
        "Liability": [
            (r"haftung\w*", 1.0), (r"haft(?:et|en)", 1.0), (r"schadensersatz\w*", 0.5),
            (r"folgeschäden", 0.5),
        ],
        "Intellectual Property": [
            (r"geistige[sn]? eigentum\w*", 1.0), (r"urheberrecht\w*", 1.0), (r"patent\w*", 1.0),
            (r"nutzungsrecht\w*", 1.0), (r"lizenz\w*", 0.5),
        ],
        "Data Protection": [
            (r"personenbezogene\w* daten", 1.0), (r"datenschutz\w*", 1.0), (r"DSGVO", 1.0),
            (r"auftragsverarbeit\w*", 1.0),
        ],
        "Confidentiality": [
            (r"vertraulich\w*", 1.0), (r"geheimhaltung\w*", 1.0), (r"geschäftsgeheimnis\w*", 1.0),
        ],
        "Force Majeure": [
            (r"höhere[rn]? gewalt", 1.0),
        ],
        "Termination": [
            (r"kündig\w*", 1.0), (r"rücktritt\w*", 1.0), (r"beendig\w*", 0.5), (r"laufzeit", 0.5),
        ],
        "Warranty": [
            (r"gewährleistung\w*", 1.0), (r"garantie\w*", 1.0), (r"mängel\w*", 0.5),
        ],
        "Payment": [
            (r"zahlung\w*", 1.0), (r"vergütung\w*", 1.0), (r"rechnung\w*", 0.5), (r"gebühr\w*", 0.5),
        ],
        "Jurisdiction": [
            (r"gerichtsstand\w*", 1.0), (r"anwendbare\w* recht", 1.0), (r"es gilt (?:das )?\w* ?recht", 1.0),
            (r"schiedsgericht\w*", 1.0), (r"gerichte?", 0.5),
        ],
        "Definitions": [
            (r"begriffsbestimmung\w*", 1.0), (r"definition\w*", 1.0), (r"bezeichnet", 0.5),
        ],
    }
    return LanguageProfile(
        code="de",
        name="Deutsch",
        heading_patterns=(
            ("article", re.compile(r"^(?:ARTIKEL|Artikel|Art\.)\s*(?P<number>\d+)\b")),
            ("section", re.compile(r"^§\s*(?P<number>\d+(?:\.\d+)*)")),
            ("section", re.compile(r"^(?:Abschnitt|ABSCHNITT|Ziffer|Ziff\.)\s*(?P<number>\d+(?:\.\d+)*)")),
            _MULTI_LEVEL,
            _SINGLE_LEVEL,
            _LETTERED,
            ("exhibit", re.compile(r"^(?:ANLAGE|Anlage|ANHANG|Anhang)\s+[A-Z\d]+\b")),
        ),
        sentence_terminator=re.compile(r"[.!?]+(?=\s)"),
        abbreviations=frozenset({
            "z.b", "bzw", "ggf", "nr", "abs", "art", "ca", "usw", "d.h", "u.a", "gmbh",
            "str", "vgl", "inkl", "zzgl",
        }),
        clause_rules=_build_rules(keywords, word_bounded=True),
        unlimited_liability=_compile_all([
            r"unbeschränkt\w*", r"unbegrenzt\w*", r"ohne (?:jede )?begrenzung", r"in voller höhe",
        ], word_bounded=True),
        liability_cap=_compile_all([
            r"begrenzt auf", r"beschränkt auf", r"höchstens", r"nicht übersteigen",
            r"haftungshöchstbetrag", r"haftungsbegrenzung",
        ], word_bounded=True),
        ambiguous_terms=_compile_all([
            r"angemessen\w*", r"unverzüglich", r"wesentlich\w*", r"nach billigem ermessen",
            r"gegebenenfalls", r"ggf\.", r"zumutbar\w*", r"zeitnah",
        ], word_bounded=False),
        unilateral_terms=_compile_all([
            r"nach eigenem ermessen", r"jederzeit ohne (?:vorherige )?ankündigung",
            r"unwiderruflich\w*", r"ohne angabe von gründen",
        ], word_bounded=True),
        cross_reference=re.compile(
            r"(?:§|\b(?:Ziffer|Artikel|Abschnitt)\b)\s*(\d+(?:\.\d+)*)", re.IGNORECASE
        ),
        governing_law=(
            re.compile(r"\b(\w+(?:sches|isches))\s+Recht\b", re.IGNORECASE),
            re.compile(r"Recht\s+(?:der|des|von)\s+(?:Bundesrepublik\s+)?([A-ZÄÖÜ]\w+)"),
        ),
        document_type_markers=_markers([
            ("privacy_policy", r"datenschutzerklärung|datenschutzhinweise"),
            ("nda", r"geheimhaltungsvereinbarung|vertraulichkeitsvereinbarung"),
            ("terms", r"nutzungsbedingungen|allgemeine geschäftsbedingungen|\bAGB\b"),
            ("license", r"lizenzvertrag|lizenzvereinbarung"),
        ]),
        stopwords=frozenset({
            "der", "die", "das", "und", "ist", "nicht", "mit", "den", "von", "zu",
            "des", "im", "eine", "ein", "vertrag", "wird",
        }),
    )


def _french() -> LanguageProfile:
    keywords = {
        "Indemnification": [
            (r"indemnis\w*", 1.0), (r"(?:tenir|relever) indemne", 1.0),
            (r"réclamations? de tiers", 0.5),
        ],
        "Liability": [
            (r"responsabilit\w*", 1.0), (r"responsables?", 1.0),
            (r"dommages?[- ]intérêts", 0.5), (r"dommages indirects", 0.5),
        ],
        "Intellectual Property": [
            (r"propriété intellectuelle", 1.0), (r"droits? d'auteur", 1.0), (r"brevets?", 1.0),
            (r"marques?", 0.5), (r"licences?", 0.5),
        ],
        "Data Protection": [
            (r"données (?:à caractère )?personnelles", 1.0), (r"RGPD", 1.0),
            (r"protection des données", 1.0), (r"sous-traitant", 0.5),
        ],
        "Confidentiality": [
            (r"confidentialit\w*", 1.0), (r"confidentiel\w*", 1.0), (r"secrets? d'affaires", 1.0),
        ],
        "Force Majeure": [
            (r"force majeure", 1.0),
        ],
        "Termination": [
            (r"résiliation", 1.0), (r"résili\w*", 1.0), (r"préavis", 0.5), (r"terme", 0.5),
        ],
        "Warranty": [
            (r"garanties?", 1.0), (r"vices? cachés", 1.0),
        ],
        "Payment": [
            (r"paiements?", 1.0), (r"factur\w*", 1.0), (r"prix", 0.5), (r"redevances?", 0.5),
        ],
        "Jurisdiction": [
            (r"droit applicable", 1.0), (r"régie? par", 1.0), (r"tribunaux?", 1.0),
            (r"juridictions?", 1.0), (r"arbitrag\w*", 1.0),
        ],
        "Definitions": [
            (r"définitions?", 1.0), (r"désigne", 0.5), (r"signifie", 0.5),
        ],
    }
    return LanguageProfile(
        code="fr",
        name="Français",
        heading_patterns=(
            ("article", re.compile(r"^(?:ARTICLE|Article)\s+(?P<number>\d+(?:\.\d+)*|[IVXLC]+)\b")),
            ("chapter", re.compile(r"^(?:CHAPITRE|Chapitre|TITRE|Titre)\s+(?P<number>\d+|[IVXLC]+)\b")),
            ("section", re.compile(r"^(?:SECTION|Section)\s+(?P<number>\d+(?:\.\d+)*)")),
            _MULTI_LEVEL,
            _SINGLE_LEVEL,
            _LETTERED,
            ("exhibit", re.compile(r"^(?:ANNEXE|Annexe)\s+[A-Z\d]+\b")),
        ),
        sentence_terminator=re.compile(r"[.!?]+(?=\s)"),
        abbreviations=frozenset({
            "art", "cf", "etc", "m", "mme", "no", "n°", "p", "s.a", "sarl", "c.-à-d", "env",
        }),
        clause_rules=_build_rules(keywords, word_bounded=True),
        unlimited_liability=_compile_all([
            r"illimitée?s?", r"sans (?:aucune )?limit\w*", r"intégralité des dommages",
        ], word_bounded=True),
        liability_cap=_compile_all([
            r"plafonn\w*", r"limitée? à", r"ne saurait excéder", r"n'excédera pas",
            r"ne pourra excéder",
        ], word_bounded=True),
        ambiguous_terms=_compile_all([
            r"raisonnabl\w*", r"meilleurs efforts", r"dans les meilleurs délais",
            r"substantiel\w*", r"le cas échéant", r"significati\w*", r"approprié\w*",
        ], word_bounded=True),
        unilateral_terms=_compile_all([
            r"(?:seule|entière) discrétion", r"à tout moment sans préavis", r"irrévocabl\w*",
        ], word_bounded=True),
        cross_reference=re.compile(r"\b(?:article|section|clause)\s+(\d+(?:\.\d+)*)", re.IGNORECASE),
        governing_law=(
            re.compile(r"\bdroit\s+(?!applicable\b)([a-zà-ÿ]+(?:ais|aise|ois|oise|ien|ienne|ge|se))\b", re.IGNORECASE),
            re.compile(r"\blois?\s+(?:de\s+la\s+|du\s+|de\s+l'|de\s+)([A-ZÀ-Ý][\wà-ÿ-]+)"),
        ),
        document_type_markers=_markers([
            ("privacy_policy", r"politique de confidentialité|politique de protection des données"),
            ("nda", r"accord de confidentialité|engagement de confidentialité"),
            ("terms", r"conditions générales"),
            ("license", r"contrat de licence"),
        ]),
        stopwords=frozenset({
            "le", "la", "les", "et", "des", "du", "un", "une", "est", "pour", "par",
            "dans", "sur", "au", "contrat", "partie",
        }),
    )


def _japanese() -> LanguageProfile:
    keywords = {
        "Indemnification": [
            (r"補償", 1.0), (r"防御", 0.5), (r"第三者からの(?:請求|クレーム)", 0.5),
        ],
        "Liability": [
            (r"損害賠償", 1.0), (r"責任", 1.0), (r"賠償", 0.5),
        ],
        "Intellectual Property": [
            (r"知的財産", 1.0), (r"著作権", 1.0), (r"特許", 1.0), (r"商標", 0.5), (r"ライセンス", 0.5),
        ],
        "Data Protection": [
            (r"個人情報", 1.0), (r"個人データ", 1.0), (r"データ保護", 1.0),
        ],
        "Confidentiality": [
            (r"秘密", 1.0), (r"機密", 1.0),
        ],
        "Force Majeure": [
            (r"不可抗力", 1.0), (r"天災", 1.0),
        ],
        "Termination": [
            (r"解除", 1.0), (r"解約", 1.0), (r"終了", 0.5), (r"有効期間", 0.5),
        ],
        "Warranty": [
            (r"保証", 1.0), (r"瑕疵", 1.0), (r"契約不適合", 1.0),
        ],
        "Payment": [
            (r"支払", 1.0), (r"代金", 1.0), (r"請求書", 0.5), (r"料金", 0.5),
        ],
        "Jurisdiction": [
            (r"管轄", 1.0), (r"準拠法", 1.0), (r"仲裁", 1.0), (r"裁判所", 0.5),
        ],
        "Definitions": [
            (r"定義", 1.0), (r"をいう", 0.5),
        ],
    }
    return LanguageProfile(
        code="ja",
        name="日本語",
        heading_patterns=(
            ("article", re.compile(r"^第\s*(?P<number>\d+|" + _KANJI_NUMBER + r")\s*条")),
            ("chapter", re.compile(r"^第\s*(?P<number>\d+|" + _KANJI_NUMBER + r")\s*章")),
            ("paragraph", re.compile(r"^\((?P<number>\d+)\)(?=\s*\S)")),
            _MULTI_LEVEL,
            _SINGLE_LEVEL,
        ),
        sentence_terminator=re.compile(r"[。！？!?]+"),
        abbreviations=frozenset(),
        clause_rules=_build_rules(keywords, word_bounded=False),
        unlimited_liability=_compile_all([
            r"無制限", r"一切の損害", r"(?:全て|すべて)の損害", r"上限なく",
        ], word_bounded=False),
        liability_cap=_compile_all([
            r"上限", r"を超えない", r"を限度", r"限度とする",
        ], word_bounded=False),
        ambiguous_terms=_compile_all([
            r"合理的", r"速やかに", r"遅滞なく", r"適切な", r"必要に応じて", r"相当の", r"重大な",
        ], word_bounded=False),
        unilateral_terms=_compile_all([
            r"単独の裁量", r"いつでも.{0,10}通知なく", r"取消不能",
        ], word_bounded=False),
        cross_reference=re.compile(r"第\s*(\d+|" + _KANJI_NUMBER + r")\s*条"),
        governing_law=(
            re.compile(r"([^\s、。はをがのと「」]{1,8})法(?:を準拠法|に準拠)"),
            re.compile(r"準拠法は([^\s、。はをがのと「」]{1,8})法"),
        ),
        document_type_markers=_markers([
            ("privacy_policy", r"プライバシーポリシー|個人情報保護方針"),
            ("nda", r"秘密保持契約|機密保持契約"),
            ("terms", r"利用規約"),
            ("license", r"ライセンス契約|使用許諾契約"),
        ]),
        counts_characters=True,
        max_title_chars=20,
    )


def build_default_registry() -> LanguageProfileRegistry:
    """Build the registry of the four supported languages."""
    registry = LanguageProfileRegistry([_english(), _japanese(), _german(), _french()])
    logger.info(f"Loaded language profiles: {', '.join(registry.supported_languages)}")
    return registry
