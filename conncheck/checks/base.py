"""Abstract checker interface for conncheck.

Every backend kind (SQL, Redis, HTTP, S3, ...) implements this interface.
Subclasses provide :meth:`Checker.probe` and :meth:`Checker.failed`; the
base class owns logging and failure containment so the eight kinds cannot
drift apart.
"""

from __future__ import annotations

import abc
import logging
from typing import Any, ClassVar, Generic, TypeVar

from conncheck.checks.errors import CheckError
from conncheck.models import CheckResult, Kind

logger = logging.getLogger(__name__)

ConfigT = TypeVar("ConfigT")
ResultT = TypeVar("ResultT", bound=CheckResult)


class Checker(abc.ABC, Generic[ConfigT, ResultT]):
    """Probe one configured backend instance per :meth:`check` call.

    Implementations hold no per-call state: each call builds and closes its
    own client, so one instance can serve concurrent checks.
    """

    #: Backend kind handled by this checker
    kind: ClassVar[Kind]

    #: Human-readable name used in logs
    display_name: ClassVar[str] = ""

    async def check(self, config: ConfigT) -> ResultT:
        """Probe the backend described by *config* exactly once.

        Never raises: every failure is reported through the returned
        result's ``error`` field.
        """
        identifier = getattr(config, "identifier", "")
        logger.info("Checking %s: %s", self.display_name, identifier)
        try:
            result = await self.probe(config)
        except CheckError as exc:
            logger.error("%s check failed for %s: %s", self.display_name, identifier, exc.message)
            return self.failed(config, exc.message, **exc.fields)
        except Exception as exc:
            logger.exception("Unexpected error checking %s %s", self.display_name, identifier)
            return self.failed(config, f"Unexpected error: {exc}")
        logger.info("%s check succeeded for %s", self.display_name, identifier)
        return result

    @abc.abstractmethod
    async def probe(self, config: ConfigT) -> ResultT:
        """Run the kind-specific round trips and return a successful result.

        Raise a :class:`~conncheck.checks.errors.CheckError` subclass on
        failure.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def failed(self, config: ConfigT, error: str, **fields: Any) -> ResultT:
        """Build a ``success=False`` result echoing *config*'s identity."""
        raise NotImplementedError
