"""Term store endpoints.

Paths are built hierarchically (store -> group -> set -> term) so a lookup
always happens inside its parent. The service has no get-by-name endpoint for
taxonomy nodes, so name lookups list the parent collection and match here.
"""

from __future__ import annotations

from typing import Any, Iterator, Sequence

from adapters.graph_client import GraphClient
from core.domain.models import TermGroup, TermSet, TermStore
from core.domain.taxonomy import is_available, label_matches


def default_store_path(site_id: str) -> str:
    return f"sites/{site_id}/termStore"


def store_path_for(site_id: str, store_id: str) -> str:
    return f"sites/{site_id}/termStores/{store_id}"


def set_path_for(store_path: str, group_id: str, set_id: str) -> str:
    return f"{store_path}/groups/{group_id}/sets/{set_id}"


def _select(properties: Sequence[str] | None) -> dict[str, Any] | None:
    if not properties:
        return None
    return {"$select": ",".join(properties)}


def _same_name(candidate: str | None, wanted: str) -> bool:
    return candidate is not None and candidate.strip().casefold() == wanted.strip().casefold()


# Term stores


def get_term_store(client: GraphClient, store_path: str) -> TermStore | None:
    data = client.get_json_or_none(store_path)
    if data is None:
        return None
    return TermStore.model_validate(data)


def list_term_stores(client: GraphClient, site_id: str) -> list[TermStore]:
    return [TermStore.model_validate(item) for item in client.iter_collection(f"sites/{site_id}/termStores")]


def find_term_store_by_name(client: GraphClient, site_id: str, name: str) -> TermStore | None:
    for store in list_term_stores(client, site_id):
        if _same_name(store.name, name):
            return store
    return None


# Term groups


def get_term_group(client: GraphClient, store_path: str, group_id: str) -> TermGroup | None:
    data = client.get_json_or_none(f"{store_path}/groups/{group_id}")
    if data is None:
        return None
    return TermGroup.model_validate(data)


def list_term_groups(client: GraphClient, store_path: str) -> list[TermGroup]:
    return [TermGroup.model_validate(item) for item in client.iter_collection(f"{store_path}/groups")]


def find_term_group_by_name(client: GraphClient, store_path: str, name: str) -> TermGroup | None:
    for group in list_term_groups(client, store_path):
        if _same_name(group.display_name, name):
            return group
    return None


# Term sets


def get_term_set(client: GraphClient, store_path: str, group_id: str, set_id: str) -> TermSet | None:
    data = client.get_json_or_none(set_path_for(store_path, group_id, set_id))
    if data is None:
        return None
    return TermSet.model_validate(data)


def list_term_sets(client: GraphClient, store_path: str, group_id: str) -> list[TermSet]:
    return [
        TermSet.model_validate(item)
        for item in client.iter_collection(f"{store_path}/groups/{group_id}/sets")
    ]


def find_term_set_by_name(client: GraphClient, store_path: str, group_id: str, name: str) -> TermSet | None:
    for term_set in list_term_sets(client, store_path, group_id):
        if any(_same_name(n.name, name) for n in term_set.localized_names):
            return term_set
    return None


# Terms (raw payloads: projection is the caller's job)


def get_term_payload(
    client: GraphClient,
    set_path: str,
    term_id: str,
    *,
    properties: Sequence[str] | None = None,
) -> dict[str, Any] | None:
    return client.get_json_or_none(f"{set_path}/terms/{term_id}", params=_select(properties))


def iter_top_level_terms(
    client: GraphClient,
    set_path: str,
    *,
    properties: Sequence[str] | None = None,
) -> Iterator[dict[str, Any]]:
    return client.iter_collection(f"{set_path}/children", params=_select(properties))


def iter_child_terms(
    client: GraphClient,
    set_path: str,
    term_id: str,
    *,
    properties: Sequence[str] | None = None,
) -> Iterator[dict[str, Any]]:
    return client.iter_collection(f"{set_path}/terms/{term_id}/children", params=_select(properties))


def walk_terms(client: GraphClient, set_path: str) -> Iterator[dict[str, Any]]:
    """Pre-order walk of every term in the set, in service order.

    Children are only requested for terms that report `childrenCount > 0`, or
    when the count is not reported.
    """

    stack: list[Iterator[dict[str, Any]]] = [iter_top_level_terms(client, set_path)]
    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
            continue
        yield item
        children_count = item.get("childrenCount")
        if children_count is None or children_count > 0:
            stack.append(iter_child_terms(client, set_path, item["id"]))


def find_first_label_match(
    client: GraphClient,
    set_path: str,
    normalized_name: str,
    *,
    trim_unavailable: bool = True,
) -> dict[str, Any] | None:
    """First term in the set's subtree with a label equal to `normalized_name`."""

    for item in walk_terms(client, set_path):
        if trim_unavailable and not is_available(item):
            continue
        if label_matches(item, normalized_name):
            return item
    return None
