"""Client for the Ray dashboard job and package APIs."""

from typing import Optional

import httpx

from .config import DEFAULT_REQUEST_TIMEOUT, JOB_POLL_INTERVAL_SECONDS
from .core.api.dashboard import DashboardRestClient
from .core.models import VersionInfo
from .jobs.client import JobSubmissionClient
from .packaging.uploader import PackageUploader


class RayDashboardClient:
    """
    Entry point for talking to a Ray dashboard.

    Example:
        async with RayDashboardClient("http://127.0.0.1:8265") as client:
            request = JobSubmitRequest(
                entrypoint="python main.py",
                runtime_env=RuntimeEnv(working_dir="./project"),
            )
            submission_id = await client.jobs.submit_job(request)
            await client.jobs.wait_for_terminal(submission_id, max_duration=600)
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        poll_interval: float = JOB_POLL_INTERVAL_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.rest = DashboardRestClient(
            base_url=base_url,
            user_agent=user_agent,
            timeout=timeout,
            transport=transport,
        )
        self.packages = PackageUploader(self.rest)
        self.jobs = JobSubmissionClient(
            self.rest, self.packages, poll_interval=poll_interval
        )

    @property
    def base_url(self) -> str:
        return self.rest.base_url

    async def ping(self) -> None:
        await self.rest.ping()

    async def get_version(self) -> VersionInfo:
        return await self.rest.get_version()

    async def close(self):
        await self.rest.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
