"""Taxonomy commands.

The term chain is store -> group -> set -> (term). Each level is resolved by
its binding inside its parent. A level that cannot be resolved raises
`NotFoundError` naming that level, so no missing parent ever reaches the next
lookup.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from adapters.connection import Session
from adapters.taxonomy_api import (
    default_store_path,
    find_first_label_match,
    find_term_group_by_name,
    find_term_set_by_name,
    find_term_store_by_name,
    get_term_group,
    get_term_payload,
    get_term_set,
    get_term_store,
    iter_top_level_terms,
    list_term_groups,
    list_term_sets,
    set_path_for,
    store_path_for,
)
from core.domain.bindings import Binding, resolve_binding
from core.domain.errors import NotFoundError
from core.domain.models import Term, TermGroup, TermSet, TermStore
from core.domain.taxonomy import (
    label_matches,
    normalize_term_name,
    project,
    resolve_term_properties,
)
from core.interfaces.writer import ResultWriter

logger = logging.getLogger(__name__)


@dataclass
class ResolvedStore:
    store: TermStore
    path: str


def _required(value: Any, entity: str, binding: Binding[Any] | str) -> Any:
    if value is None:
        raise NotFoundError(entity, binding)
    return value


def _parse_optional(value: Any, expected: type) -> Binding[Any] | None:
    return None if value is None else Binding.parse(value, expected=expected)


def resolve_term_store(session: Session, binding: Binding[TermStore] | None) -> ResolvedStore:
    """Resolve the term store; without a binding, the site's default store."""

    client = session.client
    site_id = session.site_id

    if binding is None:
        path = default_store_path(site_id)
        store = _required(get_term_store(client, path), "Term store", f"default store of site {site_id}")
        return ResolvedStore(store=store, path=path)

    def by_id(store_id: str) -> ResolvedStore:
        path = store_path_for(site_id, store_id)
        return ResolvedStore(store=_required(get_term_store(client, path), "Term store", binding), path=path)

    def by_name(name: str) -> ResolvedStore:
        store = _required(find_term_store_by_name(client, site_id, name), "Term store", binding)
        return ResolvedStore(store=store, path=store_path_for(site_id, store.id))

    return resolve_binding(
        binding,
        by_handle=lambda store: ResolvedStore(store=store, path=store_path_for(site_id, store.id)),
        by_id=by_id,
        by_name=by_name,
    )


def resolve_term_group(session: Session, store: ResolvedStore, binding: Binding[TermGroup]) -> TermGroup:
    client = session.client
    group = resolve_binding(
        binding,
        by_handle=lambda handle: handle,
        by_id=lambda group_id: get_term_group(client, store.path, group_id),
        by_name=lambda name: find_term_group_by_name(client, store.path, name),
    )
    return _required(group, "Term group", binding)


def resolve_term_set(
    session: Session,
    store: ResolvedStore,
    group: TermGroup,
    binding: Binding[TermSet],
) -> TermSet:
    client = session.client
    term_set = resolve_binding(
        binding,
        by_handle=lambda handle: handle,
        by_id=lambda set_id: get_term_set(client, store.path, group.id, set_id),
        by_name=lambda name: find_term_set_by_name(client, store.path, group.id, name),
    )
    return _required(term_set, "Term set", binding)


@dataclass
class GetTermGroup:
    """Returns a term group, or every group of the store."""

    session: Session
    identity: Binding[TermGroup] | TermGroup | str | None = None
    term_store: Binding[TermStore] | TermStore | str | None = None

    def __post_init__(self) -> None:
        self.identity = _parse_optional(self.identity, TermGroup)
        self.term_store = _parse_optional(self.term_store, TermStore)

    def execute(self, writer: ResultWriter) -> None:
        store = resolve_term_store(self.session, self.term_store)  # type: ignore[arg-type]
        if self.identity is None:
            writer.write(list_term_groups(self.session.client, store.path), enumerate=True)
            return
        writer.write(resolve_term_group(self.session, store, self.identity))  # type: ignore[arg-type]


@dataclass
class GetTermSet:
    """Returns a term set of a group, or every set of the group."""

    session: Session
    term_group: Binding[TermGroup] | TermGroup | str
    identity: Binding[TermSet] | TermSet | str | None = None
    term_store: Binding[TermStore] | TermStore | str | None = None

    def __post_init__(self) -> None:
        self.term_group = Binding.parse(self.term_group, expected=TermGroup)
        self.identity = _parse_optional(self.identity, TermSet)
        self.term_store = _parse_optional(self.term_store, TermStore)

    def execute(self, writer: ResultWriter) -> None:
        store = resolve_term_store(self.session, self.term_store)  # type: ignore[arg-type]
        group = resolve_term_group(self.session, store, self.term_group)  # type: ignore[arg-type]
        if self.identity is None:
            writer.write(list_term_sets(self.session.client, store.path, group.id), enumerate=True)
            return
        writer.write(resolve_term_set(self.session, store, group, self.identity))  # type: ignore[arg-type]


@dataclass
class GetTerm:
    """Returns a taxonomy term, or every top-level term of a term set.

    - identity by id: fetched by id inside the set
    - identity by name: exact (normalized) label among the top-level terms
    - identity by name + recursive: first label match in the whole subtree,
      in the order the service returns terms; unavailable terms are trimmed
    - no identity: all top-level terms

    `fields` selects what is materialized; defaults to Name and Id.
    """

    session: Session
    term_set: Binding[TermSet] | TermSet | str
    term_group: Binding[TermGroup] | TermGroup | str
    identity: Binding[Term] | Term | str | None = None
    term_store: Binding[TermStore] | TermStore | str | None = None
    recursive: bool = False
    fields: Sequence[str] | None = None
    _properties: list[str] = field(init=False, repr=False, default_factory=list)

    def __post_init__(self) -> None:
        self.term_set = Binding.parse(self.term_set, expected=TermSet)
        self.term_group = Binding.parse(self.term_group, expected=TermGroup)
        self.identity = _parse_optional(self.identity, Term)
        self.term_store = _parse_optional(self.term_store, TermStore)
        self._properties = resolve_term_properties(self.fields)

    def _materialize(self, payload: dict[str, Any]) -> Term:
        return Term.model_validate(project(payload, self._properties))

    def _find_by_name(self, set_path: str, name: str) -> dict[str, Any] | None:
        client = self.session.client
        normalized = normalize_term_name(name)

        if self.recursive:
            match = find_first_label_match(client, set_path, normalized, trim_unavailable=True)
            if match is None:
                return None
            # The walk loads full payloads; load the hit again with the selected fields.
            return get_term_payload(client, set_path, match["id"], properties=self._properties)

        properties = list(self._properties)
        if "labels" not in properties:
            properties.append("labels")
        for payload in iter_top_level_terms(client, set_path, properties=properties):
            if label_matches(payload, normalized):
                return payload
        return None

    def execute(self, writer: ResultWriter) -> None:
        client = self.session.client
        store = resolve_term_store(self.session, self.term_store)  # type: ignore[arg-type]
        group = resolve_term_group(self.session, store, self.term_group)  # type: ignore[arg-type]
        term_set = resolve_term_set(self.session, store, group, self.term_set)  # type: ignore[arg-type]
        set_path = set_path_for(store.path, group.id, term_set.id)

        if self.identity is None:
            terms = [
                self._materialize(payload)
                for payload in iter_top_level_terms(client, set_path, properties=self._properties)
            ]
            logger.debug("%d terms in set %s", len(terms), term_set.id)
            writer.write(terms, enumerate=True)
            return

        payload = resolve_binding(
            self.identity,  # type: ignore[arg-type]
            by_handle=lambda term: get_term_payload(client, set_path, term.id, properties=self._properties),
            by_id=lambda term_id: get_term_payload(client, set_path, term_id, properties=self._properties),
            by_name=lambda name: self._find_by_name(set_path, name),
        )
        if payload is None:
            raise NotFoundError("Term", self.identity)
        writer.write(self._materialize(payload))
