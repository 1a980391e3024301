"""Analytics commands over the configured logbook."""

import json
from typing import Annotated

import typer

from ascend.application.analytics.export import (
    breakdown_to_dict,
    overview_to_dict,
    per_discipline_to_dict,
    series_to_list,
    snapshot_to_dict,
)
from ascend.application.analytics.service import AnalyticsService
from ascend.domain.analytics.models import Bucketing, NoData
from ascend.interface._common import (
    NO_DATA_TEXT,
    _resolve_with_overrides,
    format_metric,
    run_with_store,
)

stats_app = typer.Typer(help="Progress statistics.", no_args_is_help=True)

JsonFlag = Annotated[bool, typer.Option("--json", help="Output as JSON.")]


def _dump(data) -> None:
    typer.echo(json.dumps(data, indent=2))


@stats_app.command("overview")
def overview(ctx: typer.Context, json_output: JsonFlag = False):
    """Totals across every session."""
    config = _resolve_with_overrides(ctx)
    result = run_with_store(config, lambda store: AnalyticsService(store).overview())

    if json_output:
        _dump(overview_to_dict(result))
        return
    typer.echo(f"Total sessions:     {result.total_sessions}")
    typer.echo(f"Average difficulty: {format_metric(result.average_difficulty)}")
    typer.echo(f"Sent:               {format_metric(result.sent_percentage, percent=True)}")


@stats_app.command("disciplines")
def disciplines(ctx: typer.Context, json_output: JsonFlag = False):
    """Count, average difficulty and sent rate per discipline."""
    config = _resolve_with_overrides(ctx)
    result = run_with_store(config, lambda store: AnalyticsService(store).by_discipline())

    if json_output:
        _dump(breakdown_to_dict(result))
        return
    if not result:
        typer.secho("No sessions logged yet.", fg="yellow")
        return
    for discipline, summary in result.items():
        typer.echo(
            f"{discipline.value:<8} sessions={summary.session_count} "
            f"avg={summary.average_difficulty:.2f} sent={summary.sent_percentage:.0%}"
        )


@stats_app.command("highest")
def highest(ctx: typer.Context, json_output: JsonFlag = False):
    """Hardest grade logged per discipline."""
    config = _resolve_with_overrides(ctx)
    result = run_with_store(config, lambda store: AnalyticsService(store).highest_grades())

    if json_output:
        _dump(per_discipline_to_dict(result))
        return
    for discipline, grade in result.items():
        text = NO_DATA_TEXT if isinstance(grade, NoData) else grade
        typer.echo(f"{discipline.value:<8} {text}")


@stats_app.command("average")
def average(ctx: typer.Context, json_output: JsonFlag = False):
    """Average difficulty rank per discipline."""
    config = _resolve_with_overrides(ctx)
    result = run_with_store(config, lambda store: AnalyticsService(store).average_grades())

    if json_output:
        _dump(per_discipline_to_dict(result))
        return
    for discipline, value in result.items():
        typer.echo(f"{discipline.value:<8} {format_metric(value)}")


@stats_app.command("progress")
def progress(
    ctx: typer.Context,
    by: Annotated[
        Bucketing, typer.Option("--by", case_sensitive=False, help="Bucket by week or month.")
    ] = Bucketing.WEEK,
    json_output: JsonFlag = False,
):
    """Sessions bucketed by ISO week or calendar month.

    The average pools boulder and roped grades into one trend line, so it
    is only a rough indicator when disciplines are mixed.
    """
    config = _resolve_with_overrides(ctx)
    series = run_with_store(config, lambda store: AnalyticsService(store).progress(by))

    if json_output:
        _dump(series_to_list(series))
        return
    if not series:
        typer.secho("No sessions logged yet.", fg="yellow")
        return
    for bucket in series:
        typer.echo(
            f"{bucket.key:<9} sessions={bucket.session_count} "
            f"avg={bucket.average_difficulty:.2f} sent={bucket.sent_percentage:.0%}"
        )


@stats_app.command("snapshot")
def snapshot(ctx: typer.Context):
    """Every analytics view as one JSON document."""
    config = _resolve_with_overrides(ctx)
    result = run_with_store(config, lambda store: AnalyticsService(store).snapshot())
    _dump(snapshot_to_dict(result))
