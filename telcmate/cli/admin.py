"""Admin CLI for managing Telc Mate exercises, users and settings."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, TypeVar

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from telcmate import __version__
from telcmate.application_services.exercises.form_models import (
    CreateExerciseRequest,
    DeleteExerciseRequest,
    EditExerciseRequest,
    FormResult,
    LoadExerciseRequest,
)
from telcmate.core.settings import get_settings, has_firestore_config
from telcmate.domain.exercises.models import Exercise
from telcmate.domain.shared.models import ExercisePart, ExerciseType
from telcmate.domain.users.models import SettingsPatch
from telcmate.infrastructure.containers.admin_container import AdminContainer

logger = logging.getLogger(__name__)
console = Console()

T = TypeVar("T")

PART_LABELS = {"part1": "Teil 1", "part2": "Teil 2", "part3": "Teil 3"}


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=Console(stderr=True))],
    )


def _container(ctx: click.Context) -> AdminContainer:
    """Get the container, building it on first use."""
    root = ctx.find_root()
    if root.obj is None:
        settings = get_settings()
        if settings.store_backend.lower() == "firestore" and not has_firestore_config(settings):
            logger.error("❌ Firestore not configured")
            logger.error("Please set FIREBASE_PROJECT_ID and either")
            logger.error("  - GOOGLE_APPLICATION_CREDENTIALS for a service account, or")
            logger.error("  - FIRESTORE_EMULATOR_HOST for the local emulator")
            sys.exit(1)
        root.obj = AdminContainer(settings=settings)
    return root.obj


def _run(
    ctx: click.Context,
    operation: Callable[[AdminContainer], Awaitable[T]],
    initialize: bool = True,
) -> T:
    """Seed defaults if needed, then run one async operation."""
    container = _container(ctx)

    async def runner() -> T:
        if initialize:
            await container.get_data_initializer().initialize()
        return await operation(container)

    return asyncio.run(runner())


def _resolve_code(code: str | None) -> str:
    code = code or get_settings().admin_code
    if not code:
        raise click.UsageError("Pass --code or set TELCMATE_ADMIN_CODE")
    return code


def _parse_value(raw: str) -> Any:
    """Interpret a command line value as JSON, falling back to plain text."""
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _report(result: FormResult) -> None:
    """Print a form result and exit non-zero on failure."""
    if result.success:
        console.print(f"[green]✅ {result.title}: {result.message}[/green]")
        return
    console.print(f"[red]❌ {result.title}: {result.message}[/red]")
    sys.exit(1)


def _print_exercise(exercise: Exercise) -> None:
    console.print_json(data={"id": exercise.id, **exercise.to_document()})


code_option = click.option(
    "--code",
    default=None,
    help="Access code of the admin performing the change (default: TELCMATE_ADMIN_CODE)",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__, prog_name="telcmate-admin")
def cli(verbose: bool) -> None:
    """Manage Telc Mate exercises, users and settings."""
    setup_logging(verbose)


@cli.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Seed the default users and settings if they are missing."""
    result = _run(ctx, lambda c: c.get_data_initializer().initialize(), initialize=False)
    for name, seeded in (("users", result.users_seeded), ("settings", result.settings_seeded)):
        if seeded:
            console.print(f"[green]✅ Seeded default {name}[/green]")
        else:
            console.print(f"[blue]{name.capitalize()} already present[/blue]")


@cli.command(name="list")
@click.option(
    "--type",
    "exercise_type",
    type=click.Choice([t.value for t in ExerciseType]),
    default=None,
    help="Only list exercises of this type",
)
@click.option(
    "--part",
    type=click.Choice([p.value for p in ExercisePart]),
    default=None,
    help="Only list exercises of this part (requires --type)",
)
@click.pass_context
def list_exercises(ctx: click.Context, exercise_type: str | None, part: str | None) -> None:
    """List exercises."""
    if part and not exercise_type:
        raise click.UsageError("--part requires --type")

    async def operation(container: AdminContainer) -> list[Exercise]:
        repository = container.get_exercise_repository()
        if exercise_type and part:
            return await repository.list_by_type_and_part(exercise_type, part)
        if exercise_type:
            return await repository.list_by_type(exercise_type)
        return await repository.list_all()

    exercises = _run(ctx, operation)
    if not exercises:
        console.print("[yellow]No exercises found[/yellow]")
        return

    table = Table(title="Exercises")
    table.add_column("ID", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Part")
    table.add_column("Title", style="green")
    table.add_column("Minutes", justify="right")

    for exercise in exercises:
        table.add_row(
            exercise.id,
            exercise.type.capitalize(),
            PART_LABELS[exercise.part],
            exercise.title,
            str(exercise.time_limit),
        )
    console.print(table)


@cli.command()
@click.argument("exercise_id")
@code_option
@click.pass_context
def show(ctx: click.Context, exercise_id: str, code: str | None) -> None:
    """Show one exercise as stored."""
    request = LoadExerciseRequest(caller_code=_resolve_code(code), exercise_id=exercise_id)
    result = _run(ctx, lambda c: c.get_load_exercise_service().call(request))
    if result.success and result.exercise is not None:
        _print_exercise(result.exercise)
        return
    _report(result)


@cli.command()
@click.argument("payload_file", type=click.Path(exists=True, path_type=Path))
@code_option
@click.pass_context
def create(ctx: click.Context, payload_file: Path, code: str | None) -> None:
    """Create an exercise from a JSON file."""
    with open(payload_file, encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise click.BadParameter("Exercise file must contain a JSON object")

    request = CreateExerciseRequest(caller_code=_resolve_code(code), payload=payload)
    result = _run(ctx, lambda c: c.get_create_exercise_service().call(request))
    _report(result)
    if result.exercise is not None:
        console.print(f"ID: [cyan]{result.exercise.id}[/cyan]")


@cli.command()
@click.argument("exercise_id")
@click.option("--title", default=None, help="New title")
@click.option("--description", default=None, help="New description")
@click.option("--time-limit", type=int, default=None, help="New time limit in minutes")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Set any other field; VALUE is parsed as JSON when possible",
)
@code_option
@click.pass_context
def edit(
    ctx: click.Context,
    exercise_id: str,
    title: str | None,
    description: str | None,
    time_limit: int | None,
    assignments: tuple[str, ...],
    code: str | None,
) -> None:
    """Change fields of an existing exercise."""
    changes: dict[str, Any] = {}
    for assignment in assignments:
        name, sep, raw = assignment.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"Expected FIELD=VALUE, got {assignment!r}")
        changes[name] = _parse_value(raw)
    if title is not None:
        changes["title"] = title
    if description is not None:
        changes["description"] = description
    if time_limit is not None:
        changes["timeLimit"] = time_limit

    if not changes:
        raise click.UsageError("Nothing to change")

    request = EditExerciseRequest(
        caller_code=_resolve_code(code), exercise_id=exercise_id, changes=changes
    )
    _report(_run(ctx, lambda c: c.get_edit_exercise_service().call(request)))


@cli.command()
@click.argument("exercise_id")
@click.option("--yes", is_flag=True, help="Delete without asking for confirmation")
@code_option
@click.pass_context
def delete(ctx: click.Context, exercise_id: str, yes: bool, code: str | None) -> None:
    """Delete an exercise."""
    caller_code = _resolve_code(code)

    # Load, confirm and delete inside one event loop; async store clients
    # are bound to the loop that created them.
    async def operation(container: AdminContainer) -> FormResult | None:
        if not yes:
            loaded = await container.get_load_exercise_service().call(
                LoadExerciseRequest(caller_code=caller_code, exercise_id=exercise_id)
            )
            if not loaded.success or loaded.exercise is None:
                return loaded

            exercise = loaded.exercise
            console.print(f"[bold]Title:[/bold] {exercise.title}")
            console.print(
                f"[bold]Type:[/bold] {exercise.type.capitalize()} - {PART_LABELS[exercise.part]}"
            )
            console.print(f"[bold]Description:[/bold] {exercise.description}")
            if not click.confirm(
                "Are you sure you want to delete this exercise? This action cannot be undone."
            ):
                return None

        return await container.get_delete_exercise_service().call(
            DeleteExerciseRequest(caller_code=caller_code, exercise_id=exercise_id)
        )

    result = _run(ctx, operation)
    if result is None:
        console.print("[yellow]Deletion cancelled[/yellow]")
        return
    _report(result)


@cli.group()
def settings() -> None:
    """Show or change the site-wide settings."""
    pass


@settings.command(name="show")
@click.pass_context
def show_settings(ctx: click.Context) -> None:
    """Show the current system settings."""
    current = _run(ctx, lambda c: c.get_settings_repository().get_system_settings())
    if current is None:
        console.print("[yellow]System settings are not configured[/yellow]")
        return
    console.print_json(data=current.to_document())


@settings.command(name="set")
@click.argument("key")
@click.argument("value")
@code_option
@click.pass_context
def set_setting(ctx: click.Context, key: str, value: str, code: str | None) -> None:
    """Change one setting, e.g. ``settings set maintenanceMode true``."""
    caller_code = _resolve_code(code)
    try:
        patch = SettingsPatch.model_validate({key: _parse_value(value)})
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    async def operation(container: AdminContainer) -> bool:
        if not await container.get_admin_check().is_admin(caller_code):
            return False
        await container.get_settings_repository().update_system_settings(patch)
        return True

    if not _run(ctx, operation):
        _report(FormResult.denied())
        return
    console.print(f"[green]✅ Updated {key}[/green]")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
