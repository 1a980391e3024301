"""Shared helpers for the CLI command modules."""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import typer

from ascend.application.config import AppConfig, resolve_config
from ascend.domain.analytics.models import NoData
from ascend.domain.errors import AscendError
from ascend.domain.sessions.ports import SessionStore

T = TypeVar("T")

NO_DATA_TEXT = "n/a"


def _resolve_with_overrides(ctx: typer.Context | None = None, **kwargs: Any) -> AppConfig:
    """Resolve config from the global callback options plus command overrides."""
    overrides: dict[str, Any] = {}
    if ctx is not None and isinstance(ctx.obj, dict):
        overrides.update(ctx.obj.get("config_overrides", {}))
    overrides.update(kwargs)
    return resolve_config(overrides)


def run_with_store(config: AppConfig, fn: Callable[[SessionStore], Awaitable[T]]) -> T:
    """Build the configured store, run ``fn`` against it and always close it.

    Ascend errors are reported in red and turn into exit code 1.
    """
    from ascend.application.factory import get_session_store

    async def run() -> T:
        store = get_session_store(config)
        try:
            return await fn(store)
        finally:
            await store.close()

    try:
        return asyncio.run(run())
    except AscendError as e:
        typer.secho(f"Error: {e}", fg="red", err=True)
        raise typer.Exit(1) from e


def format_metric(value: float | NoData, percent: bool = False) -> str:
    if isinstance(value, NoData):
        return NO_DATA_TEXT
    if percent:
        return f"{value:.0%}"
    return f"{value:.2f}"
