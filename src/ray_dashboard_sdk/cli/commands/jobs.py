"""ray-dash jobs commands."""

from typing import List, Optional

import typer
from rich.table import Table

from ...client import RayDashboardClient
from ...core.models import JobStatus, JobSubmitRequest, RuntimeEnv
from ..utils import console, parse_env_vars, run_with_client

STATUS_COLORS = {
    JobStatus.PENDING: "yellow",
    JobStatus.RUNNING: "blue",
    JobStatus.STOPPED: "magenta",
    JobStatus.SUCCEEDED: "green",
    JobStatus.FAILED: "red",
}


def _format_status(status: JobStatus) -> str:
    color = STATUS_COLORS.get(status, "white")
    return f"[{color}]{status.value}[/{color}]"


def submit_command(
    entrypoint: str,
    working_dir: Optional[str],
    env: Optional[List[str]],
    submission_id: Optional[str],
    wait: bool,
    timeout: Optional[float],
    address: Optional[str],
):
    """Submit a job, optionally waiting for it to finish."""
    env_vars = parse_env_vars(env)
    runtime_env = None
    if working_dir or env_vars:
        runtime_env = RuntimeEnv(working_dir=working_dir, env_vars=env_vars)

    request = JobSubmitRequest(
        entrypoint=entrypoint,
        submission_id=submission_id,
        runtime_env=runtime_env,
    )

    async def _submit(client: RayDashboardClient):
        job_id = await client.jobs.submit_job(request)
        console.print(f"Submitted job [bold]{job_id}[/bold]")
        if not wait:
            return None
        return await client.jobs.wait_for_terminal(job_id, max_duration=timeout)

    status = run_with_client(address, _submit)
    if status is not None:
        console.print(f"Job finished: {_format_status(status)}")
        if status != JobStatus.SUCCEEDED:
            raise typer.Exit(1)


def list_command(address: Optional[str]):
    """Show all jobs known to the dashboard."""
    jobs = run_with_client(address, lambda client: client.jobs.list_jobs())

    if not jobs:
        console.print("No jobs found")
        return

    table = Table(title="Jobs")
    table.add_column("Submission ID", style="cyan")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Entrypoint")

    for job in jobs:
        table.add_row(
            job.submission_id or "-",
            job.job_type.value,
            _format_status(job.status),
            job.entrypoint,
        )

    console.print(table)


def status_command(submission_id: str, address: Optional[str]):
    """Print the current status of a job."""
    status = run_with_client(
        address, lambda client: client.jobs.get_job_status(submission_id)
    )
    console.print(f"{submission_id}: {_format_status(status)}")


def logs_command(submission_id: str, address: Optional[str]):
    """Print the logs of a job."""
    logs = run_with_client(address, lambda client: client.jobs.get_job_logs(submission_id))
    for line in logs.lines():
        console.print(line, markup=False, highlight=False)


def stop_command(submission_id: str, address: Optional[str]):
    """Stop a running job."""
    response = run_with_client(address, lambda client: client.jobs.stop_job(submission_id))
    if response.stopped:
        console.print(f"Stopped job [bold]{submission_id}[/bold]")
    else:
        console.print(f"[yellow]Job {submission_id} was not running[/yellow]")


def delete_command(submission_id: str, address: Optional[str]):
    """Delete a job in a terminal state."""
    response = run_with_client(
        address, lambda client: client.jobs.delete_job(submission_id)
    )
    if response.deleted:
        console.print(f"Deleted job [bold]{submission_id}[/bold]")
    else:
        console.print(f"[yellow]Job {submission_id} was not deleted[/yellow]")


def wait_command(submission_id: str, timeout: Optional[float], address: Optional[str]):
    """Block until a job reaches a terminal state."""
    status = run_with_client(
        address,
        lambda client: client.jobs.wait_for_terminal(submission_id, max_duration=timeout),
    )
    console.print(f"{submission_id}: {_format_status(status)}")
