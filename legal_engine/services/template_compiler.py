"""
Template compilation.

Substitutes ``{{name}}`` placeholders in a single regex pass. Values are
inserted literally: a value that itself looks like a placeholder is never
expanded again. Placeholders without a binding stay in the output verbatim
and the missing required variables are reported instead of failing.
"""

import logging
import re
from typing import Any, Mapping, Optional, Set

from legal_engine.models.schemas import CompileResult, Template
from legal_engine.utils.validation import validate_variables

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")


def placeholder_names(body: str) -> Set[str]:
    """Distinct placeholder names used in a template body."""
    return set(PLACEHOLDER.findall(body))


class TemplateCompiler:
    """Compiles templates against variable bindings."""

    def compile(
        self,
        template: Template,
        variables: Optional[Mapping[str, Any]] = None
    ) -> CompileResult:
        """
        Compile a template.

        Args:
            template: Template to compile
            variables: Placeholder name -> literal string value

        Returns:
            CompileResult; missing variables are reported, never raised

        Raises:
            MalformedInputError: a variable key or value is not a string
        """
        bindings = validate_variables(variables)

        def substitute(match: "re.Match[str]") -> str:
            name = match.group(1)
            if name in bindings:
                return bindings[name]
            return match.group(0)

        # Function replacement keeps backslashes and group references in values literal
        compiled = PLACEHOLDER.sub(substitute, template.body)

        applied = placeholder_names(template.body) & set(bindings)
        missing = [name for name in template.required_variables if name not in bindings]

        if missing:
            logger.info(f"Compiled {template.id} with missing variables: {missing}")
        else:
            logger.debug(f"Compiled {template.id} with {len(applied)} variables")

        return CompileResult(
            template_id=template.id,
            compiled_document=compiled,
            variables_applied=len(applied),
            missing_variables=missing,
        )
