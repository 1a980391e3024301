"""Ascend CLI — root commands and subgroup registration."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from ascend.application.config import resolve_config
from ascend.domain.grades import Discipline, GradeScale

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="ascend: climbing logbook and progress analytics.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Register subgroups
# ---------------------------------------------------------------------------

from ascend.interface.session_commands import sessions_app  # noqa: E402
from ascend.interface.stats_commands import stats_app  # noqa: E402

app.add_typer(sessions_app, name="sessions")
app.add_typer(stats_app, name="stats")

config_app = typer.Typer(help="Manage ascend configuration.")
app.add_typer(config_app, name="config")


def _log_level(verbose: int) -> int:
    if verbose <= 0:
        return logging.WARNING
    if verbose == 1:
        return logging.INFO
    return logging.DEBUG


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
    backend: Annotated[
        str | None,
        typer.Option(help="Session store: file or api."),
    ] = None,
    sessions_file: Annotated[
        Path | None, typer.Option(help="Logbook file (.json, .yaml or .yml).")
    ] = None,
    api_url: Annotated[str | None, typer.Option(help="Sessions API base URL.")] = None,
):
    """Global settings for ascend."""
    overrides = {
        "backend": backend,
        "sessions_file": sessions_file,
        "api_url": api_url,
    }
    # -v flags win over ASCEND_VERBOSE and the config file
    level = verbose + 1 if verbose else resolve_config(overrides).verbose
    logging.getLogger().setLevel(_log_level(level))
    ctx.ensure_object(dict)
    ctx.obj["config_overrides"] = overrides


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def grades(
    discipline: Annotated[
        Discipline, typer.Argument(case_sensitive=False, help="BOULDER, LEAD or TOPROPE.")
    ],
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List the grades a discipline can be logged with, easiest first."""
    scale = GradeScale()
    labels = scale.grades_for(discipline)

    if json_output:
        typer.echo(json.dumps(labels))
        return
    for label in labels:
        typer.echo(f"{label:<6} {scale.rank_of(discipline, label):g}")


@app.command()
def server(
    host: Annotated[str, typer.Option(help="Bind address.")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Port to listen on.")] = 8777,
    reload: Annotated[bool, typer.Option("--reload", help="Auto-reload on changes.")] = False,
):
    """Serve the analytics HTTP API."""
    import uvicorn

    uvicorn.run("ascend.server:app", host=host, port=port, reload=reload)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    overrides = (ctx.obj or {}).get("config_overrides", {})
    config = resolve_config(overrides)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    if d.get("api_token") is not None:
        d["api_token"] = "**********"
    typer.echo(json.dumps(d, indent=2))


if __name__ == "__main__":
    app()
