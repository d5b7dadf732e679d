"""Command line interface for saving and publishing assignments."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError as PydanticValidationError

from assignflow.config import load_config
from assignflow.contracts import AssignmentPayload
from assignflow.errors import DomainError
from assignflow.form_validation import FormCheck, validate_for_draft, validate_for_publish
from assignflow.gate import DismissReason, PublishConfirmationGate
from assignflow.orchestrator import AssignmentActions
from assignflow.remotes import AssignmentRemote, get_remote
from assignflow.session import resume_session

app = typer.Typer(help="CLI for the assignment draft/publish workflow")


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, help="Path to a YAML config file"),
    backend: Optional[str] = typer.Option(None, help="Remote backend: http or inmemory"),
    log_level: Optional[str] = typer.Option(None, help="Logging level"),
) -> None:
    """Assignflow CLI entry point."""
    settings = load_config(str(config) if config else None)
    logging.basicConfig(
        level=(log_level or settings.logging.level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"config": settings, "backend": backend}


def _remote(ctx: typer.Context) -> AssignmentRemote:
    return get_remote(ctx.obj["backend"], ctx.obj["config"])


def _load_payload(path: Path) -> AssignmentPayload:
    if not path.exists():
        typer.secho(f"Payload file not found: {path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    try:
        data = yaml.safe_load(path.read_text()) or {}
        return AssignmentPayload.model_validate(data)
    except (yaml.YAMLError, PydanticValidationError) as exc:
        typer.secho(f"Invalid payload in {path}:\n{exc}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _require_valid(check: FormCheck, heading: str) -> None:
    if check.is_valid:
        return
    typer.secho(heading, fg=typer.colors.RED)
    for field, message in check.errors.items():
        typer.echo(f"  - {field}: {message}")
    raise typer.Exit(code=1)


def _report_errors(actions: AssignmentActions) -> None:
    typer.secho(f"Error: {actions.state.error}", fg=typer.colors.RED)
    for field, message in actions.field_errors().items():
        typer.echo(f"  - {field}: {message}")
    for question_id, message in actions.question_errors().items():
        typer.echo(f"  - question {question_id}: {message}")


async def _run_save(actions: AssignmentActions, payload: AssignmentPayload):
    try:
        return await actions.save_draft(payload)
    finally:
        await actions.remote.disconnect()


async def _run_publish(gate: PublishConfirmationGate, payload: AssignmentPayload):
    try:
        return await gate.confirm(payload)
    finally:
        gate.detach()
        await gate.actions.remote.disconnect()


@app.command("save")
def save(
    ctx: typer.Context,
    payload_file: Path,
    assignment_id: Optional[str] = typer.Option(None, "--id", help="Existing assignment id"),
) -> None:
    """
    Save an assignment as draft.

    Creates the assignment when no id is given, otherwise saves the draft of
    the existing assignment.

    Example:
        assignflow save ./assignment.yaml
        assignflow save ./assignment.yaml --id a123
    """
    payload = _load_payload(payload_file)
    _require_valid(validate_for_draft(payload), "Assignment cannot be saved as draft:")
    actions = AssignmentActions(_remote(ctx), assignment_id=assignment_id)
    response = asyncio.run(_run_save(actions, payload))
    if response is None:
        _report_errors(actions)
        raise typer.Exit(code=1)
    typer.echo(f"Draft saved: {response.assignment_id}")
    typer.echo(f"Status: {response.status.value}")
    typer.echo(f"Updated at: {response.updated_at}")


@app.command("publish")
def publish(
    ctx: typer.Context,
    payload_file: Path,
    assignment_id: Optional[str] = typer.Option(None, "--id", help="Existing assignment id"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
) -> None:
    """
    Publish an assignment.

    Publishing cannot be undone: students will be able to see and complete
    the assignment. Asks for confirmation unless --yes is given.

    Example:
        assignflow publish ./assignment.yaml --id a123
    """
    payload = _load_payload(payload_file)
    check = validate_for_publish(payload)
    _require_valid(check, "Assignment is not ready to publish:")

    settings = ctx.obj["config"]
    actions = AssignmentActions(_remote(ctx), assignment_id=assignment_id)
    gate = PublishConfirmationGate(
        actions,
        grace_delay=settings.gate.grace_delay,
        close_on_failure=settings.gate.close_on_failure,
    )
    gate.request_open(check.is_valid)

    title = payload.title or "this assignment"
    if not yes and not typer.confirm(
        f'Publish "{title}"? This action cannot be undone'
    ):
        gate.dismiss(DismissReason.CANCEL)
        typer.echo("Publish cancelled")
        return

    response = asyncio.run(_run_publish(gate, payload))
    if response is None:
        _report_errors(actions)
        raise typer.Exit(code=1)
    typer.echo(f"Published: {response.assignment_id}")
    typer.echo(f"Published at: {response.published_at}")


@app.command("show")
def show(ctx: typer.Context, assignment_id: str) -> None:
    """Show an assignment and its workflow status."""
    remote = _remote(ctx)

    async def _load():
        try:
            return await resume_session(remote, assignment_id)
        finally:
            await remote.disconnect()

    try:
        actions, snapshot = asyncio.run(_load())
    except DomainError as exc:
        typer.secho(f"Error: {exc.message}", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    typer.echo(f"Assignment {snapshot.assignment_id}: {snapshot.status.value}")
    typer.echo(f"Title: {snapshot.title}")
    typer.echo(f"Questions: {len(snapshot.questions)}")
    typer.echo(f"Updated at: {snapshot.updated_at}")
    if snapshot.published_at:
        typer.echo(f"Published at: {snapshot.published_at}")
    typer.echo(f"Editable: {'yes' if actions.can_edit else 'no'}")


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()
