"""Tests for dashboard request/response records."""

import pytest
from pydantic import ValidationError

from ray_dashboard_sdk.core.models import (
    JobDetails,
    JobLogsResponse,
    JobStatus,
    JobSubmitRequest,
    JobType,
    RuntimeEnv,
    RuntimeEnvConfig,
)


class TestJobStatus:
    """Tests for JobStatus."""

    @pytest.mark.parametrize(
        "status,terminal",
        [
            (JobStatus.PENDING, False),
            (JobStatus.RUNNING, False),
            (JobStatus.STOPPED, True),
            (JobStatus.SUCCEEDED, True),
            (JobStatus.FAILED, True),
        ],
    )
    def test_is_terminal(self, status, terminal):
        assert status.is_terminal is terminal

    def test_wire_values(self):
        assert JobStatus("RUNNING") is JobStatus.RUNNING
        assert JobType("DRIVER") is JobType.DRIVER


class TestJobSubmitRequest:
    """Tests for JobSubmitRequest serialization."""

    def test_minimal_payload_omits_unset_fields(self):
        request = JobSubmitRequest(entrypoint="python script.py")

        assert request.to_payload() == {"entrypoint": "python script.py"}

    def test_full_payload(self):
        request = JobSubmitRequest(
            entrypoint="python script.py",
            submission_id="submission_123",
            runtime_env=RuntimeEnv(
                working_dir="gcs://_ray_pkg_abc.zip",
                env_vars={"MODE": "dev"},
                pip=["requests"],
                config=RuntimeEnvConfig(setup_timeout_seconds=600),
            ),
            metadata={"environment": "dev"},
            entrypoint_num_cpus=4.0,
            entrypoint_num_gpus=2.0,
            entrypoint_memory=1024,
            entrypoint_resources={"custom": 1.0},
        )

        assert request.to_payload() == {
            "entrypoint": "python script.py",
            "submission_id": "submission_123",
            "runtime_env": {
                "working_dir": "gcs://_ray_pkg_abc.zip",
                "env_vars": {"MODE": "dev"},
                "pip": ["requests"],
                "config": {"setup_timeout_seconds": 600},
            },
            "metadata": {"environment": "dev"},
            "entrypoint_num_cpus": 4.0,
            "entrypoint_num_gpus": 2.0,
            "entrypoint_memory": 1024,
            "entrypoint_resources": {"custom": 1.0},
        }

    def test_entrypoint_required(self):
        with pytest.raises(ValidationError):
            JobSubmitRequest()


class TestJobDetails:
    """Tests for JobDetails parsing."""

    def test_parses_dashboard_payload(self):
        details = JobDetails.model_validate(
            {
                "type": "SUBMISSION",
                "job_id": "02000000",
                "submission_id": "raysubmit_abc",
                "driver_info": {
                    "id": "02000000",
                    "node_ip_address": "10.0.0.1",
                    "pid": "4242",
                },
                "status": "FAILED",
                "entrypoint": "python main.py",
                "message": "Job failed",
                "error_type": None,
                "start_time": 1700000000000,
                "end_time": 1700000005000,
                "metadata": {},
                "runtime_env": {"working_dir": "gcs://_ray_pkg_abc.zip", "_ray_commit": "x"},
                "driver_agent_http_address": "http://10.0.0.1:52365",
                "driver_node_id": "node-1",
                "driver_exit_code": 1,
            }
        )

        assert details.job_type is JobType.SUBMISSION
        assert details.status is JobStatus.FAILED
        assert details.driver_info.pid == "4242"
        assert details.runtime_env.working_dir == "gcs://_ray_pkg_abc.zip"
        assert details.driver_exit_code == 1

    def test_serializes_type_field(self):
        details = JobDetails(job_type=JobType.DRIVER, entrypoint="x", status=JobStatus.RUNNING)

        payload = details.to_payload()

        assert payload["type"] == "DRIVER"
        assert "job_type" not in payload


class TestJobLogsResponse:
    """Tests for JobLogsResponse."""

    def test_lines(self):
        logs = JobLogsResponse(logs="first\nsecond\n")

        assert list(logs.lines()) == ["first", "second"]
