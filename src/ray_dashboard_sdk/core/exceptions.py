"""Custom exceptions for ray_dashboard_sdk.

Every error raised by the SDK derives from ``RayDashboardError`` so callers
can catch the whole family at one seam.
"""

from typing import Optional


class RayDashboardError(Exception):
    """Base exception for all SDK errors."""

    pass


class DashboardRequestError(RayDashboardError):
    """Raised when a dashboard request fails at the network level or
    returns a non-success status code."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RayDashboardValidationError(RayDashboardError, ValueError):
    """Base exception for malformed caller input."""

    pass


class InvalidPackageURIError(RayDashboardValidationError):
    """Raised when a package URI is not of the form ``<protocol>://<name>``."""

    pass


class InvalidDashboardURLError(RayDashboardValidationError):
    """Raised when the dashboard base URL cannot be used."""

    pass


class PackagingError(RayDashboardError, OSError):
    """Raised when package sources cannot be read, the archive destination
    cannot be created, or a temporary archive cannot be removed."""

    pass


class ArchiveError(RayDashboardError):
    """Raised when the zip writer rejects an entry."""

    pass


class JobTimeoutError(RayDashboardError, TimeoutError):
    """Raised when a job does not reach a terminal state in time."""

    def __init__(self, submission_id: str, max_duration: float):
        self.submission_id = submission_id
        self.max_duration = max_duration
        super().__init__(
            f"Job {submission_id} did not reach terminal state within "
            f"{max_duration:g}s"
        )
