"""Aggregate report: redacted environment snapshot plus per-kind results."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from conncheck.checks import Checker
from conncheck.extract import extract_all
from conncheck.fanout import ResultMap, run_checks
from conncheck.models import Kind
from conncheck.redaction import redact_namespace

logger = logging.getLogger(__name__)


@dataclass
class Report:
    environments: dict[str, str]
    results: dict[Kind, ResultMap] = field(default_factory=dict)

    def get(self, kind: Kind) -> ResultMap | None:
        return self.results.get(kind)

    def check_counts(self) -> dict[str, int]:
        return {kind.report_key: len(self.results.get(kind) or {}) for kind in Kind}

    def to_dict(self) -> dict[str, Any]:
        """JSON body for the info endpoint.

        Kinds without instances are omitted, never ``null``.
        """
        body: dict[str, Any] = {"environments": dict(self.environments)}
        for kind in Kind:
            result_map = self.results.get(kind)
            if result_map:
                body[kind.report_key] = {
                    identifier: result.to_dict() for identifier, result in result_map.items()
                }
        return body


async def build_report(
    namespace: Mapping[str, str],
    checkers: Mapping[Kind, Checker] | None = None,
) -> Report:
    """Redact, extract and check everything configured in *namespace*."""
    logger.info("Processing info request")
    environments = redact_namespace(namespace)
    configs = extract_all(namespace)
    results = await run_checks(configs, checkers)

    report = Report(environments=environments, results=results)
    counts = report.check_counts()
    logger.info(
        "Info request completed: %s (total %d)",
        ", ".join(f"{key}={count}" for key, count in counts.items()),
        sum(counts.values()),
    )
    return report
