"""CLI UI components (Rich).

Why separate components:
- Keeps command wiring apart from visual details.
- Tables are chosen by result type, so every command renders the same way.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.console import Console
from rich.table import Table

from core.domain.models import GroupUser, Term, TermGroup, TermSet, UnifiedGroup


def build_groups_table(groups: Sequence[UnifiedGroup]) -> Table:
    table = Table(title="Unified Groups")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("Mail", style="magenta")
    table.add_column("Visibility", style="dim")
    for group in groups:
        table.add_row(group.id, group.display_name or "", group.mail or "", group.visibility or "")
    return table


def build_users_table(users: Sequence[GroupUser]) -> Table:
    table = Table(title="Users")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Display name", style="white")
    table.add_column("UPN", style="magenta")
    table.add_column("Job title", style="dim")
    for user in users:
        table.add_row(user.id, user.display_name or "", user.user_principal_name or "", user.job_title or "")
    return table


def build_taxonomy_table(items: Sequence[TermGroup | TermSet], title: str) -> Table:
    table = Table(title=title)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Description", style="dim")
    for item in items:
        table.add_row(item.id, item.name or "", item.description or "")
    return table


def build_terms_table(terms: Sequence[Term]) -> Table:
    """Columns follow what was materialized: Id always, Name when labels were loaded."""

    table = Table(title="Terms")
    table.add_column("Id", style="cyan", no_wrap=True)
    show_name = any("labels" in term.model_fields_set for term in terms)
    if show_name:
        table.add_column("Name", style="white")
    for term in terms:
        row = [term.id]
        if show_name:
            row.append(term.name or "")
        table.add_row(*row)
    return table


def render_results(console: Console, results: Sequence[Any]) -> None:
    """Print results as a table per result type, in first-seen order."""

    if not results:
        console.print("[dim]No results.[/dim]")
        return

    buckets: dict[type, list[Any]] = {}
    for item in results:
        buckets.setdefault(type(item), []).append(item)

    for kind, items in buckets.items():
        if kind is UnifiedGroup:
            console.print(build_groups_table(items))
        elif kind is GroupUser:
            console.print(build_users_table(items))
        elif kind is TermGroup:
            console.print(build_taxonomy_table(items, "Term Groups"))
        elif kind is TermSet:
            console.print(build_taxonomy_table(items, "Term Sets"))
        elif kind is Term:
            console.print(build_terms_table(items))
        else:
            for item in items:
                console.print(item)
