"""Unified group endpoints.

Pure I/O over `GraphClient`: every function maps one remote call (plus
paging) to domain models. Resolution rules live in the commands.
"""

from __future__ import annotations

from adapters.graph_client import GraphClient
from core.domain.models import GroupUser, UnifiedGroup

GROUP_SELECT = "id,displayName,description,mail,mailNickname,visibility,createdDateTime"
USER_SELECT = "id,displayName,userPrincipalName,mail,jobTitle"
UNIFIED_FILTER = "groupTypes/any(c:c eq 'Unified')"


def _odata_quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def get_unified_group(client: GraphClient, group_id: str) -> UnifiedGroup | None:
    """Fetch one group by id; None when the service answers 404."""

    data = client.get_json_or_none(f"groups/{group_id}", params={"$select": GROUP_SELECT})
    if data is None:
        return None
    return UnifiedGroup.model_validate(data)


def find_unified_groups_by_name(client: GraphClient, name: str) -> list[UnifiedGroup]:
    params = {
        "$filter": f"{UNIFIED_FILTER} and displayName eq {_odata_quote(name)}",
        "$select": GROUP_SELECT,
    }
    return [UnifiedGroup.model_validate(item) for item in client.iter_collection("groups", params=params)]


def list_unified_groups(client: GraphClient, *, page_size: int = 100) -> list[UnifiedGroup]:
    params = {
        "$filter": UNIFIED_FILTER,
        "$select": GROUP_SELECT,
        "$top": page_size,
    }
    return [UnifiedGroup.model_validate(item) for item in client.iter_collection("groups", params=params)]


def _list_group_users(client: GraphClient, group_id: str, relation: str, page_size: int) -> list[GroupUser]:
    params = {"$select": USER_SELECT, "$top": page_size}
    return [
        GroupUser.model_validate(item)
        for item in client.iter_collection(f"groups/{group_id}/{relation}", params=params)
    ]


def get_unified_group_owners(client: GraphClient, group_id: str, *, page_size: int = 100) -> list[GroupUser]:
    return _list_group_users(client, group_id, "owners", page_size)


def get_unified_group_members(client: GraphClient, group_id: str, *, page_size: int = 100) -> list[GroupUser]:
    return _list_group_users(client, group_id, "members", page_size)
