# Rule interface (abstract base class): defines the contract all rules must implement.
# Concrete rules (async_server_action, ...) subclass Rule and implement run().

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from actionscan.config import Config
    from actionscan.context import FileContext
    from actionscan.findings.models import Finding

DEFAULT_SEVERITY = "warning"

DOCS_BASE_URL = "docs/rules/"


def docs_url(rule_id: str) -> str:
    """Return the documentation path for a rule id, relative to the repository root."""
    return f"{DOCS_BASE_URL}{rule_id}.md"


class Rule(ABC):
    """
    Abstract base class for all static analysis rules.

    Subclasses must define:
    - id: str: unique rule identifier (e.g. "async-server-action")
    - name: str: human-readable rule name
    - run(context, config) -> list[Finding]: analyze one file and return findings

    Optional metadata (description, category, has_suggestions, recommended)
    is shown by the reporter. The scanner calls run() once per file; context
    holds path, source bytes, and AST. Rules keep no state between calls.
    """

    id: str
    name: str
    description: str = ""
    category: str = "Possible Errors"
    has_suggestions: bool = False
    recommended: bool = False

    @property
    def docs_url(self) -> str:
        return docs_url(self.id)

    def severity(self, config: Config | None) -> str:
        """Severity for this rule's findings: config override or DEFAULT_SEVERITY."""
        if config is None:
            return DEFAULT_SEVERITY
        return config.severity_for(self.id)

    @abstractmethod
    def run(self, context: FileContext, config: Config | None) -> list[Finding]:
        """
        Analyze one file and return any findings.

        Args:
            context: Per-file state (path, source bytes, AST tree). Use context.tree
                     to walk the AST and context.source / helpers for snippets.
            config: Scanner config (enabled rules, severity overrides). May be None,
                    in which case rule defaults apply.

        Returns:
            List of Finding objects for each issue found in this file.
            Return an empty list if no issues.
        """
        ...
