# Load .env vars from file before everything else
from dotenv import load_dotenv

load_dotenv()

from .logger import setup_logging  # noqa: E402

setup_logging()

# TYPE_CHECKING imports provide full IDE support (autocomplete, type hints)
# while __getattr__ enables lazy loading at runtime for fast CLI startup
from typing import TYPE_CHECKING  # noqa: E402

if TYPE_CHECKING:
    from .client import RayDashboardClient
    from .core.exceptions import (
        ArchiveError,
        DashboardRequestError,
        InvalidDashboardURLError,
        InvalidPackageURIError,
        JobTimeoutError,
        PackagingError,
        RayDashboardError,
    )
    from .core.models import (
        JobDetails,
        JobStatus,
        JobSubmitRequest,
        JobType,
        RuntimeEnv,
        RuntimeEnvConfig,
    )

_EXCEPTIONS = (
    "ArchiveError",
    "DashboardRequestError",
    "InvalidDashboardURLError",
    "InvalidPackageURIError",
    "JobTimeoutError",
    "PackagingError",
    "RayDashboardError",
)

_MODELS = (
    "JobDetails",
    "JobStatus",
    "JobSubmitRequest",
    "JobType",
    "RuntimeEnv",
    "RuntimeEnvConfig",
)


def __getattr__(name):
    """Lazily import core modules only when accessed."""
    if name == "RayDashboardClient":
        from .client import RayDashboardClient

        return RayDashboardClient
    elif name in _EXCEPTIONS:
        from .core import exceptions

        return getattr(exceptions, name)
    elif name in _MODELS:
        from .core import models

        return getattr(models, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["RayDashboardClient", *_EXCEPTIONS, *_MODELS]
