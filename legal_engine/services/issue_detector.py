"""
Structural issue detection.

Looks for document-level problems that per-clause scoring cannot see:
missing required clause types, uncapped or contradictory liability,
conflicting governing law, vague wording and dangling cross-references.
Each rule assigns its own severity, independent of clause risk levels.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from legal_engine.models.schemas import DocumentType, Issue, Severity
from legal_engine.services.clause_classifier import ScoredClause
from legal_engine.services.language_profiles import LanguageProfile, normalize_section_number

logger = logging.getLogger(__name__)

DOCUMENT_LOCATION = "document"

# Required clause types per document type, with the severity of their absence
REQUIRED_CLAUSES: Dict[DocumentType, Tuple[Tuple[str, Severity], ...]] = {
    DocumentType.CONTRACT: (
        ("Termination", Severity.HIGH),
        ("Liability", Severity.HIGH),
        ("Jurisdiction", Severity.MEDIUM),
    ),
    DocumentType.NDA: (
        ("Confidentiality", Severity.CRITICAL),
        ("Termination", Severity.MEDIUM),
        ("Jurisdiction", Severity.MEDIUM),
    ),
    DocumentType.TERMS: (
        ("Liability", Severity.HIGH),
        ("Termination", Severity.MEDIUM),
        ("Jurisdiction", Severity.MEDIUM),
    ),
    DocumentType.PRIVACY_POLICY: (
        ("Data Protection", Severity.CRITICAL),
    ),
    DocumentType.LICENSE: (
        ("Intellectual Property", Severity.HIGH),
        ("Liability", Severity.HIGH),
        ("Termination", Severity.MEDIUM),
    ),
    DocumentType.OTHER: (),
}

LIABILITY_TYPES = ("Liability", "Indemnification")
AMBIGUITY_THRESHOLD = 2


@dataclass(frozen=True)
class Finding:
    """An issue before id assignment."""
    description: str
    severity: Severity
    location: str


@dataclass(frozen=True)
class IssueContext:
    """Everything a structural rule may inspect."""
    clauses: Sequence[ScoredClause]
    profile: LanguageProfile
    document_type: DocumentType
    section_numbers: Sequence[str]


def missing_required_clauses(context: IssueContext) -> List[Finding]:
    present = {clause.clause_type for clause in context.clauses}
    return [
        Finding(
            description=f"Missing {clause_type} clause required for a {context.document_type.value} document.",
            severity=severity,
            location=DOCUMENT_LOCATION,
        )
        for clause_type, severity in REQUIRED_CLAUSES[context.document_type]
        if clause_type not in present
    ]


def uncapped_liability(context: IssueContext) -> List[Finding]:
    liability_clauses = [c for c in context.clauses if c.clause_type in LIABILITY_TYPES]
    if not liability_clauses:
        return []
    if any(c.signals.liability_cap for c in context.clauses):
        return []
    return [Finding(
        description="No limitation of liability cap found; liability exposure may be unlimited.",
        severity=Severity.HIGH,
        location=DOCUMENT_LOCATION,
    )]


def contradictory_liability(context: IssueContext) -> List[Finding]:
    capped = [c for c in context.clauses if c.signals.liability_cap and not c.signals.unlimited_liability]
    unlimited = [c for c in context.clauses if c.signals.unlimited_liability]
    if not capped or not unlimited:
        return []
    first_cap, first_unlimited = capped[0], unlimited[0]
    later = max(first_cap, first_unlimited, key=lambda c: c.candidate.ordinal)
    return [Finding(
        description=(
            f"Contradictory liability provisions: {first_cap.clause_id} caps liability "
            f"while {first_unlimited.clause_id} makes it unlimited."
        ),
        severity=Severity.HIGH,
        location=later.candidate.location,
    )]


def conflicting_governing_law(context: IssueContext) -> List[Finding]:
    named: List[Tuple[str, ScoredClause]] = []
    seen = set()
    for clause in context.clauses:
        for pattern in context.profile.governing_law:
            for match in pattern.finditer(clause.candidate.text):
                name = match.group(1).strip()
                key = name.lower()
                if key not in seen:
                    seen.add(key)
                    named.append((name, clause))
    if len(named) < 2:
        return []
    listing = ", ".join(f"{name} ({clause.clause_id})" for name, clause in named)
    return [Finding(
        description=f"Conflicting governing law provisions: {listing}.",
        severity=Severity.HIGH,
        location=named[1][1].candidate.location,
    )]


def ambiguous_language(context: IssueContext) -> List[Finding]:
    return [
        Finding(
            description=(
                f"Ambiguous language in {clause.clause_id}: "
                f"{', '.join(repr(term) for term in clause.signals.ambiguous_terms)}."
            ),
            severity=Severity.MEDIUM,
            location=clause.candidate.location,
        )
        for clause in context.clauses
        if len(clause.signals.ambiguous_terms) >= AMBIGUITY_THRESHOLD
    ]


def _is_defined(reference: str, section_numbers: Sequence[str]) -> bool:
    return any(
        number == reference or number.startswith(reference + ".")
        for number in section_numbers
    )


def undefined_cross_references(context: IssueContext) -> List[Finding]:
    findings = []
    reported = set()
    for clause in context.clauses:
        has_own_heading = clause.candidate.marker_type is not None
        for match in context.profile.cross_reference.finditer(clause.candidate.text):
            # A clause's own heading is not a reference
            if has_own_heading and match.start() == 0:
                continue
            reference = normalize_section_number(match.group(1))
            if reference in reported or _is_defined(reference, context.section_numbers):
                continue
            reported.add(reference)
            findings.append(Finding(
                description=(
                    f"Undefined cross-reference '{match.group(0)}' in {clause.clause_id}: "
                    f"no section {reference} exists in the document."
                ),
                severity=Severity.LOW,
                location=clause.candidate.location,
            ))
    return findings


IssueRule = Callable[[IssueContext], List[Finding]]

# Evaluated in order; issue ids follow this order
DEFAULT_RULES: Tuple[IssueRule, ...] = (
    missing_required_clauses,
    uncapped_liability,
    contradictory_liability,
    conflicting_governing_law,
    ambiguous_language,
    undefined_cross_references,
)


class IssueDetector:
    """Runs the structural rule set over a classified document."""

    def __init__(self, rules: Sequence[IssueRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def detect(
        self,
        clauses: Sequence[ScoredClause],
        profile: LanguageProfile,
        document_type: DocumentType,
        section_numbers: Sequence[str]
    ) -> List[Issue]:
        """
        Detect structural issues.

        Args:
            clauses: Classified clauses in document order
            profile: Language profile of the document
            document_type: Declared or inferred document type
            section_numbers: Section numbers defined by headings

        Returns:
            Issues with sequential ids (issue-001, ...)
        """
        context = IssueContext(
            clauses=clauses,
            profile=profile,
            document_type=document_type,
            section_numbers=section_numbers,
        )

        findings: List[Finding] = []
        for rule in self.rules:
            findings.extend(rule(context))

        issues = [
            Issue(
                id=f"issue-{index:03d}",
                description=finding.description,
                severity=finding.severity,
                location=finding.location,
            )
            for index, finding in enumerate(findings, start=1)
        ]

        logger.debug(f"Detected {len(issues)} issues for {document_type.value} document")
        return issues
