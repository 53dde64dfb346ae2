"""Job submission and lifecycle polling against ``/api/jobs``."""

import asyncio
import logging
import time
from typing import List, Optional

from ..config import JOB_POLL_INTERVAL_SECONDS
from ..core.api.dashboard import DashboardRestClient
from ..core.exceptions import JobTimeoutError
from ..core.models import (
    JobDeleteResponse,
    JobDetails,
    JobLogsResponse,
    JobStatus,
    JobStopResponse,
    JobSubmitRequest,
    JobSubmitResponse,
)
from ..packaging.uploader import PackageUploader
from .rewrite import (
    local_py_modules,
    local_working_dir,
    rewrite_py_modules,
    rewrite_working_dir,
    with_submission_id,
)

log = logging.getLogger(__name__)


class JobSubmissionClient:
    """Submit, inspect and wait on jobs.

    The dashboard is authoritative for job state: nothing is cached, every
    status read is a fresh request.
    """

    def __init__(
        self,
        rest: DashboardRestClient,
        packages: PackageUploader,
        poll_interval: float = JOB_POLL_INTERVAL_SECONDS,
    ):
        self.rest = rest
        self.packages = packages
        self.poll_interval = poll_interval

    async def prepare_request(self, request: JobSubmitRequest) -> JobSubmitRequest:
        """Upload local code referenced by the request and return the copy
        that will be sent, with local paths replaced by package URIs.

        The caller's request is never modified.
        """
        prepared = with_submission_id(request)

        working_dir = local_working_dir(prepared)
        if working_dir is not None:
            working_dir_uri = await self.packages.upload_directory_if_needed(working_dir)
            log.info(f"Uploaded working_dir {working_dir} as {working_dir_uri}")
            prepared = rewrite_working_dir(prepared, working_dir_uri)

        module_uris = {}
        for module, path in local_py_modules(prepared).items():
            if path.is_dir():
                module_uris[module] = await self.packages.upload_directory_if_needed(path)
            else:
                module_uris[module] = await self.packages.upload_package_file_if_needed(path)
            log.info(f"Uploaded py_module {path} as {module_uris[module]}")
        if module_uris:
            prepared = rewrite_py_modules(prepared, module_uris)

        return prepared

    async def submit_job(self, request: JobSubmitRequest) -> str:
        """Submit a job and return its submission id."""
        prepared = await self.prepare_request(request)

        data = await self.rest.request_json(
            "POST", "/api/jobs/", "Job submission", json=prepared.to_payload()
        )
        response = JobSubmitResponse.model_validate(data)

        log.info(f"Submitted job {response.submission_id}: {prepared.entrypoint}")
        return response.submission_id

    async def list_jobs(self) -> List[JobDetails]:
        data = await self.rest.request_json("GET", "/api/jobs/", "List jobs")
        return [JobDetails.model_validate(item) for item in data]

    async def get_job_info(self, submission_id: str) -> JobDetails:
        data = await self.rest.request_json(
            "GET", f"/api/jobs/{submission_id}", f"Get job {submission_id}"
        )
        return JobDetails.model_validate(data)

    async def get_job_status(self, submission_id: str) -> JobStatus:
        details = await self.get_job_info(submission_id)
        return details.status

    async def delete_job(self, submission_id: str) -> JobDeleteResponse:
        data = await self.rest.request_json(
            "DELETE", f"/api/jobs/{submission_id}", f"Delete job {submission_id}"
        )
        return JobDeleteResponse.model_validate(data)

    async def stop_job(self, submission_id: str) -> JobStopResponse:
        data = await self.rest.request_json(
            "POST", f"/api/jobs/{submission_id}/stop", f"Stop job {submission_id}"
        )
        return JobStopResponse.model_validate(data)

    async def get_job_logs(self, submission_id: str) -> JobLogsResponse:
        data = await self.rest.request_json(
            "GET", f"/api/jobs/{submission_id}/logs", f"Get logs of job {submission_id}"
        )
        return JobLogsResponse.model_validate(data)

    async def wait_for_terminal(
        self, submission_id: str, max_duration: Optional[float] = None
    ) -> JobStatus:
        """Poll a job until it reaches a terminal state.

        Args:
            submission_id: Job to wait on.
            max_duration: Upper bound in seconds. None waits indefinitely.

        Returns:
            The terminal status that was observed.

        Raises:
            JobTimeoutError: If max_duration elapsed before a terminal state.
            DashboardRequestError: If a status request fails. It is not retried.
        """
        start = time.monotonic()
        last_status: Optional[JobStatus] = None

        while True:
            status = await self.get_job_status(submission_id)

            if status != last_status:
                log.info(f"Job:{submission_id} | Status: {status.value}")
                last_status = status

            if status.is_terminal:
                return status

            if max_duration is not None and time.monotonic() - start >= max_duration:
                raise JobTimeoutError(submission_id, max_duration)

            await asyncio.sleep(self.poll_interval)
