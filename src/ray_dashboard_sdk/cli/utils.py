"""Shared helpers for CLI commands."""

import asyncio
from typing import Awaitable, Callable, Dict, List, Optional, TypeVar

import typer
from rich.console import Console

from ..client import RayDashboardClient
from ..core.exceptions import RayDashboardError

console = Console()

T = TypeVar("T")


def run_with_client(
    address: Optional[str], operation: Callable[[RayDashboardClient], Awaitable[T]]
) -> T:
    """Run an async operation against a dashboard client.

    SDK errors are printed and turned into exit code 1.
    """

    async def _run() -> T:
        async with RayDashboardClient(address) as client:
            return await operation(client)

    try:
        return asyncio.run(_run())
    except RayDashboardError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def parse_env_vars(values: Optional[List[str]]) -> Optional[Dict[str, str]]:
    """Parse repeated KEY=VALUE options into a dict."""
    if not values:
        return None

    env_vars = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(
                f"Expected KEY=VALUE, got {item!r}", param_hint="--env"
            )
        env_vars[key] = value
    return env_vars
