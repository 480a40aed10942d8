"""Repair desk management CLI."""

import asyncio
import os
import subprocess
import sys
from pathlib import Path

import click

from repairdesk.base.db import async_session, engine
from repairdesk.errors import ImportFailedError
from repairdesk.persistence.document_store import SqlDocumentStore, create_schema
from repairdesk.service import RepairDeskService


def _run(args: list[str], *, replace: bool = False) -> None:
    click.echo(
        f"  {click.style('>', dim=True)} {click.style(' '.join(args), dim=True)}\n"
    )
    if replace:
        os.execvp(args[0], args)
    result = subprocess.run(args)
    if result.returncode != 0:
        click.echo(
            f"  {click.style('✗', fg='red')} exited with code {result.returncode}"
        )
        sys.exit(result.returncode)


def _ok(text: str) -> None:
    click.echo(f"  {click.style('✓', fg='green')} {text}")


def _header(text: str) -> None:
    click.echo(f"\n  {click.style(text, fg='cyan', bold=True)}\n")


async def _open_service() -> RepairDeskService:
    # Export and import never generate text, so no generator is needed.
    await create_schema(engine)
    return await RepairDeskService.open(SqlDocumentStore(async_session))


@click.group()
def cli() -> None:
    """Repair desk management CLI."""


@cli.command()
@click.argument("uvicorn_args", nargs=-1)
def app(uvicorn_args: tuple[str, ...]) -> None:
    """Start uvicorn with --reload."""
    _header("Starting repair desk")
    _run(
        ["uv", "run", "uvicorn", "repairdesk.app:app", "--reload", *uvicorn_args],
        replace=True,
    )


@cli.command()
@click.argument("pytest_args", nargs=-1)
def test(pytest_args: tuple[str, ...]) -> None:
    """Run pytest."""
    _header("Running tests")
    _run(["uv", "run", "pytest", "tests/", "-v", *pytest_args], replace=True)


@cli.command()
def lint() -> None:
    """Run mypy."""
    _header("Running mypy")
    _run(["uv", "run", "mypy", "repairdesk"])
    _ok("Type check passed")


@cli.group()
def records() -> None:
    """Spreadsheet export and import of repair records."""


@records.command("export")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
def export_records(path: Path) -> None:
    """Write every record to an .xlsx file."""

    async def _export() -> int:
        try:
            service = await _open_service()
            path.write_bytes(service.export_file())
            return len(service.records)
        finally:
            await engine.dispose()

    _header("Exporting records")
    count = asyncio.run(_export())
    _ok(f"{count} records written to {path}")


@records.command("import")
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
def import_records(path: Path) -> None:
    """Add the records of an .xlsx file whose ids are not stored yet."""

    async def _import() -> str:
        try:
            service = await _open_service()
            outcome = await service.import_file(path.read_bytes())
            return outcome.message
        finally:
            await engine.dispose()

    _header("Importing records")
    try:
        message = asyncio.run(_import())
    except ImportFailedError as exc:
        raise click.ClickException(str(exc)) from exc
    _ok(message)


if __name__ == "__main__":
    cli()
