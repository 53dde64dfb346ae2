"""Configuration for the Ray dashboard SDK."""

import os
from typing import Optional
from urllib.parse import urlparse

from .core.exceptions import InvalidDashboardURLError

# Package URIs
RAY_PKG_PREFIX = "_ray_pkg_"
RAY_PKG_PROTOCOL = "gcs"
WHEEL_EXTENSION = ".whl"

# HTTP client configuration
SDK_PRODUCT_NAME = "ray-dashboard-sdk"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Job polling
JOB_POLL_INTERVAL_SECONDS = 0.5

# Dashboard address
DEFAULT_DASHBOARD_HOST = "127.0.0.1"
DEFAULT_DASHBOARD_PORT = "8265"


def get_dashboard_url(base_url: Optional[str] = None) -> str:
    """Resolve the dashboard base URL.

    Resolution order: explicit argument, ``RAY_DASHBOARD_URL``, then
    ``http://{RAY_DASHBOARD_HOST}:{RAY_DASHBOARD_PORT}``.

    Raises:
        InvalidDashboardURLError: If the resolved URL is not http(s) or has no host.
    """
    url = base_url or os.environ.get("RAY_DASHBOARD_URL")
    if not url:
        host = os.environ.get("RAY_DASHBOARD_HOST", DEFAULT_DASHBOARD_HOST)
        port = os.environ.get("RAY_DASHBOARD_PORT", DEFAULT_DASHBOARD_PORT)
        url = f"http://{host}:{port}"

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidDashboardURLError(f"Invalid dashboard URL: {url}")

    return url.rstrip("/")
