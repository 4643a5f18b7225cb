"""CaseWatch exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Malformed dataset keys are reported as tagged results, not raised.
"""

from __future__ import annotations


class CaseWatchError(Exception):
    """Base exception for all CaseWatch failures."""


class CaseWatchConfigError(CaseWatchError):
    """Raised for invalid runtime configuration."""


class CaseWatchIngestError(CaseWatchError):
    """Raised when a dataset file cannot be read or has the wrong shape."""


class CaseWatchTransformError(CaseWatchError):
    """Raised when a pipeline stage receives input violating its invariants."""


class CaseWatchReportSpecError(CaseWatchError):
    """Raised for invalid or unsupported report-spec configuration."""
