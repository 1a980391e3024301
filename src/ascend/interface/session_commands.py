"""Logbook commands: list, add, update and delete sessions."""

import json
from datetime import date
from typing import Annotated, Any

import typer

from ascend.application.sessions.payloads import record_to_payload
from ascend.application.sessions.service import SessionService
from ascend.domain.grades import Discipline
from ascend.domain.sessions.models import SessionRecord
from ascend.interface._common import _resolve_with_overrides, run_with_store

sessions_app = typer.Typer(help="Browse and edit logged sessions.", no_args_is_help=True)


def _format_record(record: SessionRecord) -> str:
    status = "sent" if record.sent else "attempt"
    line = f"{record.id}  {record.date}  {record.discipline.value:<8} {record.grade:<6} {status}"
    if record.notes:
        line += f"  {record.notes}"
    return line


def _echo_record(record: SessionRecord, json_output: bool) -> None:
    if json_output:
        typer.echo(json.dumps(record_to_payload(record), indent=2))
    else:
        typer.echo(_format_record(record))


@sessions_app.command("list")
def list_sessions(
    ctx: typer.Context,
    discipline: Annotated[
        Discipline | None, typer.Option(case_sensitive=False, help="Only this discipline.")
    ] = None,
    on: Annotated[str | None, typer.Option("--date", help="Only sessions on YYYY-MM-DD.")] = None,
    search: Annotated[
        str | None, typer.Option("--search", "-s", help="Match grade or notes text.")
    ] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """List logged sessions."""
    config = _resolve_with_overrides(ctx)

    records = run_with_store(
        config,
        lambda store: SessionService(store).list_sessions(
            discipline=discipline, on=on, query=search
        ),
    )

    if json_output:
        typer.echo(json.dumps([record_to_payload(r) for r in records], indent=2))
        return
    if not records:
        typer.secho("No sessions found.", fg="yellow")
        return
    for record in records:
        typer.echo(_format_record(record))


@sessions_app.command("add")
def add_session(
    ctx: typer.Context,
    discipline: Annotated[Discipline, typer.Option(case_sensitive=False, help="Discipline.")],
    grade: Annotated[str, typer.Option(help="Grade label, e.g. V5 or 5.11a.")],
    on: Annotated[
        str | None, typer.Option("--date", help="Date climbed (YYYY-MM-DD). Defaults to today.")
    ] = None,
    sent: Annotated[
        bool, typer.Option("--sent/--no-sent", help="Completed without falling.")
    ] = False,
    notes: Annotated[str | None, typer.Option(help="Free-text notes.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """[bold green]Log[/bold green] a new climbing session."""
    config = _resolve_with_overrides(ctx)
    day = on if on is not None else date.today()

    record = run_with_store(
        config,
        lambda store: SessionService(store).add_session(
            discipline=discipline, grade=grade, date=day, sent=sent, notes=notes
        ),
    )
    if not json_output:
        typer.secho("Session logged.", fg="green")
    _echo_record(record, json_output)


@sessions_app.command("update")
def update_session(
    ctx: typer.Context,
    session_id: Annotated[str, typer.Argument(help="Session id.")],
    discipline: Annotated[
        Discipline | None, typer.Option(case_sensitive=False, help="New discipline.")
    ] = None,
    grade: Annotated[str | None, typer.Option(help="New grade label.")] = None,
    on: Annotated[str | None, typer.Option("--date", help="New date (YYYY-MM-DD).")] = None,
    sent: Annotated[
        bool | None, typer.Option("--sent/--no-sent", help="New sent status.")
    ] = None,
    notes: Annotated[str | None, typer.Option(help="Replace notes.")] = None,
    clear_notes: Annotated[bool, typer.Option("--clear-notes", help="Remove notes.")] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON.")] = False,
):
    """Change fields of a logged session."""
    changes: dict[str, Any] = {
        k: v
        for k, v in {
            "discipline": discipline,
            "grade": grade,
            "date": on,
            "sent": sent,
            "notes": notes,
        }.items()
        if v is not None
    }
    if clear_notes:
        changes["notes"] = None
    if not changes:
        typer.secho("Nothing to update.", fg="yellow")
        raise typer.Exit(2)

    config = _resolve_with_overrides(ctx)
    record = run_with_store(
        config, lambda store: SessionService(store).update_session(session_id, changes)
    )
    if not json_output:
        typer.secho("Session updated.", fg="green")
    _echo_record(record, json_output)


@sessions_app.command("delete")
def delete_session(
    ctx: typer.Context,
    session_id: Annotated[str, typer.Argument(help="Session id.")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Delete a logged session."""
    if not force:
        typer.confirm(f"Delete session {session_id}?", abort=True)

    config = _resolve_with_overrides(ctx)
    run_with_store(config, lambda store: SessionService(store).delete_session(session_id))
    typer.secho(f"Deleted {session_id}.", fg="green")
