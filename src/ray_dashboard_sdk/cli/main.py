"""Main CLI entry point for ray-dash."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from ..core.utils.user_agent import get_sdk_version


console = Console()

AddressOption = typer.Option(
    None,
    "--address",
    "-a",
    envvar="RAY_DASHBOARD_URL",
    help="Ray dashboard URL (default: http://127.0.0.1:8265)",
)

# command: ray-dash
app = typer.Typer(
    name="ray-dash",
    help="Submit and manage jobs on a Ray cluster through its dashboard",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command("version")
def version_cmd(address: Optional[str] = AddressOption):
    """Show SDK and cluster versions."""
    from .utils import run_with_client

    info = run_with_client(address, lambda client: client.get_version())
    console.print(f"ray-dashboard-sdk v{get_sdk_version()}")
    console.print(f"Ray {info.ray_version} ({info.ray_commit})")


# command: ray-dash jobs
jobs_app = typer.Typer(
    name="jobs",
    help="Job submission and lifecycle commands",
    no_args_is_help=True,
)


@jobs_app.command("submit")
def jobs_submit_cmd(
    entrypoint: str = typer.Argument(..., help="Shell command to run, e.g. 'python main.py'"),
    working_dir: Optional[str] = typer.Option(
        None, "--working-dir", "-w", help="Local directory or package URI to run in"
    ),
    env: Optional[List[str]] = typer.Option(
        None, "--env", "-e", help="Environment variable as KEY=VALUE (repeatable)"
    ),
    submission_id: Optional[str] = typer.Option(
        None, "--submission-id", help="Submission ID (generated if omitted)"
    ),
    wait: bool = typer.Option(False, "--wait", help="Wait for the job to finish"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Maximum seconds to wait with --wait"
    ),
    address: Optional[str] = AddressOption,
):
    """Submit a job."""
    from .commands.jobs import submit_command

    return submit_command(entrypoint, working_dir, env, submission_id, wait, timeout, address)


@jobs_app.command("list")
def jobs_list_cmd(address: Optional[str] = AddressOption):
    """List jobs."""
    from .commands.jobs import list_command

    return list_command(address)


@jobs_app.command("status")
def jobs_status_cmd(
    submission_id: str = typer.Argument(..., help="Submission ID"),
    address: Optional[str] = AddressOption,
):
    """Show job status."""
    from .commands.jobs import status_command

    return status_command(submission_id, address)


@jobs_app.command("logs")
def jobs_logs_cmd(
    submission_id: str = typer.Argument(..., help="Submission ID"),
    address: Optional[str] = AddressOption,
):
    """Show job logs."""
    from .commands.jobs import logs_command

    return logs_command(submission_id, address)


@jobs_app.command("stop")
def jobs_stop_cmd(
    submission_id: str = typer.Argument(..., help="Submission ID"),
    address: Optional[str] = AddressOption,
):
    """Stop a running job."""
    from .commands.jobs import stop_command

    return stop_command(submission_id, address)


@jobs_app.command("delete")
def jobs_delete_cmd(
    submission_id: str = typer.Argument(..., help="Submission ID"),
    address: Optional[str] = AddressOption,
):
    """Delete a finished job."""
    from .commands.jobs import delete_command

    return delete_command(submission_id, address)


@jobs_app.command("wait")
def jobs_wait_cmd(
    submission_id: str = typer.Argument(..., help="Submission ID"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Maximum seconds to wait"
    ),
    address: Optional[str] = AddressOption,
):
    """Wait for a job to reach a terminal state."""
    from .commands.jobs import wait_command

    return wait_command(submission_id, timeout, address)


app.add_typer(jobs_app, name="jobs")

# command: ray-dash package
package_app = typer.Typer(
    name="package",
    help="Content-addressed code packages",
    no_args_is_help=True,
)


@package_app.command("hash")
def package_hash_cmd(path: Path = typer.Argument(..., help="Directory or package file")):
    """Print the package URI for a directory or file."""
    from .commands.package import hash_command

    return hash_command(path)


@package_app.command("upload")
def package_upload_cmd(
    path: Path = typer.Argument(..., help="Directory or package file"),
    address: Optional[str] = AddressOption,
):
    """Upload a package if the cluster does not have it yet."""
    from .commands.package import upload_command

    return upload_command(path, address)


app.add_typer(package_app, name="package")


if __name__ == "__main__":
    app()
