"""Sensitivity classifier for the environment snapshot echoed in the report.

Two namespace entries control redaction:

  SENSITIVE_ENVIRONMENTS        comma-separated key names, matched
                                case-insensitively by exact equality
  SENSITIVE_ENVIRONMENTS_REGEX  comma-separated regular expressions, searched
                                (unanchored, case-sensitive) in the raw key

Without either entry nothing is redacted.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

SENSITIVE_NAMES_KEY = "SENSITIVE_ENVIRONMENTS"
SENSITIVE_PATTERNS_KEY = "SENSITIVE_ENVIRONMENTS_REGEX"
REDACTED_PLACEHOLDER = "(value is set)"


def _split_list(raw: str | None) -> list[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(frozen=True)
class SensitivityRules:
    """Explicit (uppercased) key names plus compiled key patterns."""

    names: frozenset[str] = frozenset()
    patterns: tuple[re.Pattern[str], ...] = field(default_factory=tuple)

    @classmethod
    def from_namespace(cls, namespace: Mapping[str, str]) -> SensitivityRules:
        names = frozenset(n.upper() for n in _split_list(namespace.get(SENSITIVE_NAMES_KEY)))

        patterns: list[re.Pattern[str]] = []
        for raw in _split_list(namespace.get(SENSITIVE_PATTERNS_KEY)):
            try:
                patterns.append(re.compile(raw))
            except re.error as exc:
                logger.debug("Ignoring malformed sensitivity pattern %r: %s", raw, exc)
        return cls(names=names, patterns=tuple(patterns))

    def is_sensitive(self, key: str) -> bool:
        if key.upper() in self.names:
            return True
        return any(p.search(key) for p in self.patterns)


def redact_namespace(namespace: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of *namespace* with sensitive values replaced.

    The rules are read from *namespace* itself, so the control keys travel
    with the snapshot they apply to.
    """
    rules = SensitivityRules.from_namespace(namespace)
    return {
        key: REDACTED_PLACEHOLDER if rules.is_sensitive(key) else value
        for key, value in namespace.items()
    }
