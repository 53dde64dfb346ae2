"""ray-dash package commands."""

from pathlib import Path
from typing import Optional

import typer

from ...client import RayDashboardClient
from ...core.exceptions import RayDashboardError
from ...packaging.uri import get_uri_for_directory, get_uri_for_package
from ..utils import console, run_with_client


def _check_exists(path: Path) -> None:
    if not path.exists():
        console.print(f"[red]Error:[/red] {path} does not exist")
        raise typer.Exit(1)


def hash_command(path: Path):
    """Print the package URI a path would be uploaded under."""
    _check_exists(path)

    try:
        if path.is_dir():
            uri = get_uri_for_directory(path)
        else:
            uri = get_uri_for_package(path)
    except RayDashboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(uri, markup=False, highlight=False)


def upload_command(path: Path, address: Optional[str]):
    """Upload a directory or pre-built package unless the cluster has it."""
    _check_exists(path)

    async def _upload(client: RayDashboardClient) -> str:
        if path.is_dir():
            return await client.packages.upload_directory_if_needed(path)
        return await client.packages.upload_package_file_if_needed(path)

    uri = run_with_client(address, _upload)
    console.print(f"[green]✓[/green] {uri}")
