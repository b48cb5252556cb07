"""Failure taxonomy raised inside checker probes.

The :class:`~conncheck.checks.base.Checker` base class catches every
:class:`CheckError` and folds it into the kind's result, so none of these
ever leave a ``check()`` call.
"""

from __future__ import annotations

from typing import Any


class CheckError(Exception):
    """Base error for a failed probe.

    ``fields`` carries result fields already known when the failure happened
    (e.g. ``exists=True`` once a bucket was found); they are merged into the
    failed result.
    """

    def __init__(self, message: str, **fields: Any) -> None:
        super().__init__(message)
        self.message = message
        self.fields = fields


class UnsupportedError(CheckError):
    """Driver or method outside the supported set; raised before any I/O."""


class CheckConnectionError(CheckError):
    """Could not establish a session with the backend."""


class ProtocolError(CheckError):
    """Session established, but a later command failed."""


class NotFoundError(CheckError):
    """The backend answered, but the target resource is absent."""


class PartialFailure(CheckError):
    """An earlier step succeeded and a dependent step failed."""
