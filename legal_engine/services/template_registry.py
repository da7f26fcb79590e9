"""
Template registry.

Holds the legal document templates offered by the engine. The registry is
built once and exposed read-only, so it can be shared across concurrent
requests without locking.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterable, Iterator, List, Optional

from legal_engine.models.schemas import Template
from legal_engine.services.errors import TemplateNotFoundError
from legal_engine.services.template_compiler import placeholder_names
from legal_engine.utils.validation import normalize_language

logger = logging.getLogger(__name__)


DEFAULT_TEMPLATES = (
    Template(
        id="nda",
        name="Non-Disclosure Agreement",
        description="Mutual or one-way NDA for confidential information protection.",
        body=(
            "NON-DISCLOSURE AGREEMENT\n\n"
            "This Agreement is entered into between {{party_a}} and {{party_b}}, "
            "effective {{effective_date}}, governed by the laws of {{jurisdiction}}.\n\n"
            "All confidential information shared between the parties shall remain "
            "strictly confidential for a period of three (3) years."
        ),
        required_variables=("party_a", "party_b", "effective_date", "jurisdiction"),
        language_support=("en", "ja", "de"),
    ),
    Template(
        id="sla",
        name="Service Level Agreement",
        description="SLA defining uptime guarantees, response times, and remedies.",
        body=(
            "SERVICE LEVEL AGREEMENT\n\n"
            "{{service_provider}} agrees to provide services to {{customer}} "
            "with a minimum uptime of {{uptime_percent}}%.\n\n"
            "Incident response time shall not exceed {{response_time_hours}} hours."
        ),
        required_variables=("service_provider", "customer", "uptime_percent", "response_time_hours"),
        language_support=("en", "ja"),
    ),
    Template(
        id="dpa",
        name="Data Processing Agreement",
        description="GDPR-compliant DPA for data controller/processor relationships.",
        body=(
            "DATA PROCESSING AGREEMENT\n\n"
            "{{controller}} (Controller) and {{processor}} (Processor) enter into "
            "this DPA pursuant to GDPR Article 28.\n\n"
            "Data types processed: {{data_types}}. Retention period: {{retention_period}}."
        ),
        required_variables=("controller", "processor", "data_types", "retention_period"),
        language_support=("en", "de", "fr"),
    ),
    Template(
        id="tos",
        name="Terms of Service",
        description="User-facing terms governing use of a product or platform.",
        body=(
            "TERMS OF SERVICE\n\n"
            "{{company_name}} operates {{product_name}}. By using our service, "
            "you agree to these terms.\n\n"
            "This agreement is governed by the laws of {{governing_law}}."
        ),
        required_variables=("company_name", "product_name", "governing_law"),
        language_support=("en", "ja", "fr"),
    ),
    Template(
        id="privacy",
        name="Privacy Policy",
        description="GDPR/CCPA-compliant privacy policy for data collection disclosure.",
        body=(
            "PRIVACY POLICY\n\n"
            "{{company_name}} is committed to protecting your privacy. "
            "Contact us at {{contact_email}}.\n\n"
            "We collect the following data: {{data_collected}}."
        ),
        required_variables=("company_name", "contact_email", "data_collected"),
        language_support=("en", "ja", "de", "fr"),
    ),
    Template(
        id="employment",
        name="Employment Agreement",
        description="Standard employment contract with salary, IP assignment, and non-compete.",
        body=(
            "EMPLOYMENT AGREEMENT\n\n"
            "{{employer}} employs {{employee}} as {{position}}, commencing "
            "{{start_date}}, at an annual salary of {{salary}}."
        ),
        required_variables=("employer", "employee", "start_date", "salary", "position"),
        language_support=("en", "ja"),
    ),
    Template(
        id="license",
        name="Software License Agreement",
        description="Commercial software license with usage restrictions and royalties.",
        body=(
            "SOFTWARE LICENSE AGREEMENT\n\n"
            "{{licensor}} grants {{licensee}} a non-exclusive license to use "
            "{{software_name}} subject to payment of {{license_fee}}."
        ),
        required_variables=("licensor", "licensee", "software_name", "license_fee"),
        language_support=("en", "de"),
    ),
)


class TemplateRegistry(Mapping):
    """
    Read-only catalog of templates keyed by id, in registration order.

    Usage:
        registry = TemplateRegistry(DEFAULT_TEMPLATES)
        nda = registry.get_template("nda")
    """

    def __init__(self, templates: Iterable[Template]):
        entries = {}
        for template in templates:
            if template.id in entries:
                raise ValueError(f"Duplicate template id: {template.id}")
            self._check_placeholders(template)
            entries[template.id] = template
        self._templates = MappingProxyType(entries)

    @staticmethod
    def _check_placeholders(template: Template) -> None:
        names = placeholder_names(template.body)
        missing = [v for v in template.required_variables if v not in names]
        if missing:
            logger.warning(
                f"Template {template.id} declares required variables "
                f"not used in its body: {missing}"
            )

    def __getitem__(self, template_id: str) -> Template:
        return self._templates[template_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    def get_template(self, template_id: str) -> Template:
        """
        Look up a template by id.

        Raises:
            TemplateNotFoundError: id is not registered
        """
        try:
            return self._templates[template_id]
        except (KeyError, TypeError):
            raise TemplateNotFoundError(str(template_id))

    def list_templates(self, language: Optional[str] = None) -> List[Template]:
        """
        Templates in registration order, optionally only those offered in a language.

        Raises:
            UnsupportedLanguageError: language is not a supported code
        """
        code = normalize_language(language)
        if code is None:
            return list(self._templates.values())
        return [t for t in self._templates.values() if code in t.language_support]


def build_default_registry() -> TemplateRegistry:
    registry = TemplateRegistry(DEFAULT_TEMPLATES)
    logger.info(f"Loaded {len(registry)} templates: {', '.join(registry)}")
    return registry
