"""User-Agent sent with every dashboard request.

The dashboard answers 500 to requests without a User-Agent header, so the
REST client always sends the value built here unless the caller supplies
its own.
"""

import platform
from functools import lru_cache
from importlib import metadata

from ...config import SDK_PRODUCT_NAME


def get_sdk_version() -> str:
    """Installed version of this package, or "unknown" in a source checkout."""
    try:
        return metadata.version(SDK_PRODUCT_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"


def _platform_token() -> str:
    return f"{platform.system()} {platform.release()}; {platform.machine()}"


@lru_cache(maxsize=None)
def get_sdk_user_agent() -> str:
    """Build ``python/ray-dashboard-sdk/<version> (<platform>) Language/Python <version>``.

    Computed once per process.
    """
    return (
        f"python/{SDK_PRODUCT_NAME}/{get_sdk_version()} "
        f"({_platform_token()}) Language/Python {platform.python_version()}"
    )
