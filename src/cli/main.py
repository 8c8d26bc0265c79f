"""collabkit CLI.

One sub-command per command class. Wiring only: parameters are handed to the
command as-is, the session comes from `open_session`, results are rendered
with Rich or dumped as JSON.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.connection import Session, open_session
from adapters.json_exporter import dumps_results, export_results_json
from cli import doctor
from cli.ui_components import render_results
from core.config import AppSettings
from core.domain.errors import CollabError
from core.interfaces.command import Command
from core.interfaces.writer import ListWriter
from core.logging_setup import setup_logging
from core.services.group_commands import GetUnifiedGroup, GetUnifiedGroupMembers, GetUnifiedGroupOwners
from core.services.taxonomy_commands import GetTerm, GetTermGroup, GetTermSet

app = typer.Typer(no_args_is_help=True, help="Commands over groups and taxonomy of a collaboration platform.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

JsonOption = typer.Option(False, "--json", help="Print results as JSON instead of tables.")
OutputOption = typer.Option(None, "--output", "-o", help="Also write results to this JSON file.")
TermStoreOption = typer.Option(None, "--term-store", help="Term store id or name (default store if omitted).")


@app.callback()
def main(
    verbose: int = typer.Option(0, "--verbose", "-v", count=True, help="More logging (-v for DEBUG)."),
    quiet: int = typer.Option(0, "--quiet", "-q", count=True, help="Less logging (errors only)."),
) -> None:
    setup_logging(verbose, quiet)


def _split_fields(fields: list[str] | None) -> list[str] | None:
    if not fields:
        return None
    out = [part.strip() for value in fields for part in value.split(",") if part.strip()]
    return out or None


def _run(factory: Callable[[Session], Command], *, json_output: bool, output: Path | None) -> None:
    writer = ListWriter()
    try:
        with open_session(AppSettings()) as session:
            factory(session).execute(writer)
    except CollabError as exc:
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    if json_output:
        typer.echo(dumps_results(writer.results))
    else:
        render_results(_console, writer.results)

    if output is not None:
        path = export_results_json(results=writer.results, output_path=output)
        _err_console.print(f"[green]Saved:[/green] {path}")


@app.command(name="get-unified-group")
def get_unified_group(
    identity: Optional[str] = typer.Argument(None, help="Group id or display name; all groups if omitted."),
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get one unified group, or all of them."""

    _run(lambda s: GetUnifiedGroup(s, identity), json_output=json_output, output=output)


@app.command(name="get-unified-group-owners")
def get_unified_group_owners(
    identity: str = typer.Argument(..., help="Group id or display name."),
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get the owners of a unified group."""

    _run(lambda s: GetUnifiedGroupOwners(s, identity), json_output=json_output, output=output)


@app.command(name="get-unified-group-members")
def get_unified_group_members(
    identity: str = typer.Argument(..., help="Group id or display name."),
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get the members of a unified group."""

    _run(lambda s: GetUnifiedGroupMembers(s, identity), json_output=json_output, output=output)


@app.command(name="get-term-group")
def get_term_group(
    identity: Optional[str] = typer.Argument(None, help="Term group id or name; all groups if omitted."),
    term_store: Optional[str] = TermStoreOption,
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get a term group of a term store."""

    _run(
        lambda s: GetTermGroup(s, identity=identity, term_store=term_store),
        json_output=json_output,
        output=output,
    )


@app.command(name="get-term-set")
def get_term_set(
    identity: Optional[str] = typer.Argument(None, help="Term set id or name; all sets if omitted."),
    term_group: str = typer.Option(..., "--term-group", help="Term group id or name."),
    term_store: Optional[str] = TermStoreOption,
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get a term set of a term group."""

    _run(
        lambda s: GetTermSet(s, term_group=term_group, identity=identity, term_store=term_store),
        json_output=json_output,
        output=output,
    )


@app.command(name="get-term")
def get_term(
    identity: Optional[str] = typer.Argument(None, help="Term id or name; all top-level terms if omitted."),
    term_set: str = typer.Option(..., "--term-set", help="Term set id or name."),
    term_group: str = typer.Option(..., "--term-group", help="Term group id or name."),
    term_store: Optional[str] = TermStoreOption,
    recursive: bool = typer.Option(False, "--recursive", help="Find the first term matching the label anywhere in the set."),
    fields: Optional[list[str]] = typer.Option(
        None,
        "--fields",
        "-f",
        help="Fields to load (comma separated or repeated). Default: Name,Id.",
    ),
    json_output: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Get a taxonomy term."""

    _run(
        lambda s: GetTerm(
            s,
            term_set=term_set,
            term_group=term_group,
            identity=identity,
            term_store=term_store,
            recursive=recursive,
            fields=_split_fields(fields),
        ),
        json_output=json_output,
        output=output,
    )


def run() -> None:
    app()
