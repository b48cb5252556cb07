"""Concurrent fan-out of backend checks.

For every kind with at least one configured instance, all instance checks
run concurrently and are joined before that kind's ``identifier → result``
map is produced.  The per-kind joins themselves run concurrently, so a
request takes as long as its slowest single check.  Kinds with no instances
are absent from the output rather than mapped to ``{}``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any

from conncheck.checks import Checker, default_checkers
from conncheck.extract import ExtractedConfigs
from conncheck.models import CheckResult, Kind

logger = logging.getLogger(__name__)

ResultMap = dict[str, CheckResult]


async def run_kind(checker: Checker, configs: Mapping[str, Any]) -> ResultMap | None:
    """Check every instance in *configs* concurrently.

    Returns ``None`` when *configs* is empty.
    """
    if not configs:
        return None
    identifiers = list(configs)
    results = await asyncio.gather(*(checker.check(configs[i]) for i in identifiers))
    return dict(zip(identifiers, results))


async def run_checks(
    configs: ExtractedConfigs,
    checkers: Mapping[Kind, Checker] | None = None,
) -> dict[Kind, ResultMap]:
    """Run every configured check; return only kinds that had instances.

    Args:
        configs:  Output of :func:`conncheck.extract.extract_all`.
        checkers: Override the checker per kind (tests pass stubs).
    """
    if checkers is None:
        checkers = default_checkers()

    kinds = [kind for kind in Kind if configs.get(kind)]
    maps = await asyncio.gather(
        *(run_kind(checkers[kind], configs.get(kind)) for kind in kinds)
    )

    results: dict[Kind, ResultMap] = {}
    for kind, result_map in zip(kinds, maps):
        if result_map is not None:
            results[kind] = result_map
    logger.debug("fan-out complete: %d kind(s) checked", len(results))
    return results
