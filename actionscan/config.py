from __future__ import annotations

"""
Scanner configuration: which rules are enabled, their severity, and which
directories file discovery skips.

This module is the single place that registers implemented rules. The CLI
in main.py narrows the default config with --select / --severity.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from actionscan.rules.async_server_action import AsyncServerActionRule
from actionscan.rules.base import DEFAULT_SEVERITY, Rule
from actionscan.traversal import DEFAULT_IGNORE_DIRS

SEVERITIES = ("error", "warning", "info")


@dataclass
class Config:
    """
    Scanner configuration.

    rules: enabled rule instances, run in order on every file.
    severity: per-rule severity overrides keyed by rule id.
    ignore_dirs: directory names skipped while collecting files.
    """

    rules: Sequence[Rule] = field(default_factory=list)
    severity: Dict[str, str] = field(default_factory=dict)
    ignore_dirs: Set[str] = field(default_factory=lambda: set(DEFAULT_IGNORE_DIRS))

    def severity_for(self, rule_id: str) -> str:
        """Return the configured severity for rule_id, or DEFAULT_SEVERITY."""
        return self.severity.get(rule_id, DEFAULT_SEVERITY)


def available_rules() -> List[Rule]:
    """Return a fresh instance of every implemented rule."""
    return [
        AsyncServerActionRule(),
    ]


def get_default_config() -> Config:
    """
    Return the default configuration with all currently implemented rules.

    This is what the CLI in main.py uses unless --select narrows it.
    """
    return Config(rules=available_rules())


def get_enabled_rules(
    config: Config | None = None,
    select: Optional[Iterable[str]] = None,
) -> Sequence[Rule]:
    """
    Return the enabled rules from the given config (or default config).

    If select is given, only rules whose id is listed are returned. Unknown ids
    raise ValueError so typos on the command line do not silently disable
    every rule.
    """
    if config is None:
        config = get_default_config()
    if select is None:
        return config.rules

    wanted = list(select)
    known = {rule.id for rule in config.rules}
    unknown = [rule_id for rule_id in wanted if rule_id not in known]
    if unknown:
        raise ValueError(f"Unknown rule id(s): {', '.join(unknown)}")
    return [rule for rule in config.rules if rule.id in wanted]


def with_severity(config: Config, severity: str, rule_ids: Iterable[str] | None = None) -> Config:
    """
    Return a copy of config with severity set for rule_ids (default: every rule).

    Raises ValueError for a severity outside SEVERITIES.
    """
    severity = severity.lower()
    if severity not in SEVERITIES:
        raise ValueError(f"Unknown severity {severity!r}; expected one of {', '.join(SEVERITIES)}")
    if rule_ids is None:
        rule_ids = [rule.id for rule in config.rules]
    overrides = dict(config.severity)
    overrides.update({rule_id: severity for rule_id in rule_ids})
    return Config(rules=list(config.rules), severity=overrides, ignore_dirs=set(config.ignore_dirs))
