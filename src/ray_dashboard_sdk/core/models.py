"""Request and response records exchanged with the Ray dashboard.

Field names and casing match the dashboard's JSON. Optional fields left as
None are omitted when a record is serialized.
"""

from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DashboardModel(BaseModel):
    model_config = ConfigDict(
        validate_by_name=True,
        serialize_by_alias=True,
        extra="ignore",
    )

    def to_payload(self) -> Dict[str, Any]:
        """Serialize to the JSON body sent over the wire."""
        return self.model_dump(mode="json", exclude_none=True)


class JobType(str, Enum):
    SUBMISSION = "SUBMISSION"
    DRIVER = "DRIVER"


class JobStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_JOB_STATUSES


TERMINAL_JOB_STATUSES = frozenset(
    {JobStatus.STOPPED, JobStatus.SUCCEEDED, JobStatus.FAILED}
)


class RuntimeEnvConfig(DashboardModel):
    setup_timeout_seconds: Optional[int] = None
    eager_install: Optional[bool] = None


class RuntimeEnv(DashboardModel):
    """Environment the job's entrypoint runs in.

    ``working_dir`` and ``py_modules`` entries may be local paths when the
    request is built; they are replaced by package URIs before submission.
    """

    working_dir: Optional[str] = None
    env_vars: Optional[Dict[str, str]] = None
    py_modules: Optional[List[str]] = None
    config: Optional[RuntimeEnvConfig] = None
    pip: Optional[Union[List[str], Dict[str, Any]]] = None
    uv: Optional[Union[List[str], Dict[str, Any]]] = None


class JobSubmitRequest(DashboardModel):
    entrypoint: str
    submission_id: Optional[str] = None
    runtime_env: Optional[RuntimeEnv] = None
    metadata: Optional[Dict[str, str]] = None
    entrypoint_num_cpus: Optional[float] = None
    entrypoint_num_gpus: Optional[float] = None
    entrypoint_memory: Optional[int] = None
    entrypoint_resources: Optional[Dict[str, float]] = None


class JobSubmitResponse(DashboardModel):
    submission_id: str


class JobDriverInfo(DashboardModel):
    id: str
    node_ip_address: str
    pid: str


class JobDetails(DashboardModel):
    job_type: JobType = Field(alias="type")
    entrypoint: str
    status: JobStatus
    job_id: Optional[str] = None
    submission_id: Optional[str] = None
    driver_info: Optional[JobDriverInfo] = None
    message: Optional[str] = None
    error_type: Optional[str] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    metadata: Optional[Dict[str, str]] = None
    runtime_env: Optional[RuntimeEnv] = None
    driver_agent_http_address: Optional[str] = None
    driver_node_id: Optional[str] = None
    driver_exit_code: Optional[int] = None


class JobStopResponse(DashboardModel):
    stopped: bool


class JobDeleteResponse(DashboardModel):
    deleted: bool


class JobLogsResponse(DashboardModel):
    logs: str

    def lines(self) -> Iterator[str]:
        return iter(self.logs.splitlines())


class VersionInfo(DashboardModel):
    version: str
    ray_version: str
    ray_commit: str
