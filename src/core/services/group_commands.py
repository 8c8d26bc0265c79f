"""Unified group commands.

Every command follows the same shape: resolve the group binding, fetch,
write. A group that does not resolve is a silent no-result (logged at INFO),
never an error.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from adapters.connection import Session
from adapters.graph_client import GraphClient
from adapters.groups_api import (
    find_unified_groups_by_name,
    get_unified_group,
    get_unified_group_members,
    get_unified_group_owners,
    list_unified_groups,
)
from core.domain.bindings import Binding, resolve_binding
from core.domain.models import GroupUser, UnifiedGroup
from core.interfaces.writer import ResultWriter

logger = logging.getLogger(__name__)

GroupIdentity = Binding[UnifiedGroup] | UnifiedGroup | str


def resolve_unified_group(client: GraphClient, binding: Binding[UnifiedGroup]) -> UnifiedGroup | None:
    """Resolve a group binding.

    - handle: returned as-is, no remote call
    - id: exactly one fetch by id
    - name: one filtered query, first match
    """

    def by_name(name: str) -> UnifiedGroup | None:
        matches = find_unified_groups_by_name(client, name)
        if len(matches) > 1:
            logger.warning("%d groups named %r; using %s", len(matches), name, matches[0].id)
        return matches[0] if matches else None

    return resolve_binding(
        binding,
        by_handle=lambda group: group,
        by_id=lambda group_id: get_unified_group(client, group_id),
        by_name=by_name,
    )


@dataclass
class GetUnifiedGroup:
    """Returns one unified group, or all of them when no identity is given."""

    session: Session
    identity: GroupIdentity | None = None

    def __post_init__(self) -> None:
        if self.identity is not None:
            self.identity = Binding.parse(self.identity, expected=UnifiedGroup)

    def execute(self, writer: ResultWriter) -> None:
        client = self.session.client
        if self.identity is None:
            groups = list_unified_groups(client, page_size=self.session.settings.page_size)
            writer.write(groups, enumerate=True)
            return

        group = resolve_unified_group(client, self.identity)  # type: ignore[arg-type]
        if group is None:
            logger.info("No unified group matches %s", self.identity)
            return
        writer.write(group)


@dataclass
class _GroupUsersCommand(ABC):
    session: Session
    identity: GroupIdentity

    def __post_init__(self) -> None:
        self.identity = Binding.parse(self.identity, expected=UnifiedGroup)

    @abstractmethod
    def _fetch_users(self, client: GraphClient, group_id: str, page_size: int) -> list[GroupUser]:
        ...

    def execute(self, writer: ResultWriter) -> None:
        client = self.session.client
        group = resolve_unified_group(client, self.identity)  # type: ignore[arg-type]
        if group is None:
            logger.info("No unified group matches %s", self.identity)
            return

        users = self._fetch_users(client, group.id, self.session.settings.page_size)
        writer.write(users, enumerate=True)


class GetUnifiedGroupOwners(_GroupUsersCommand):
    """Returns the owners of a unified group."""

    def _fetch_users(self, client: GraphClient, group_id: str, page_size: int) -> list[GroupUser]:
        return get_unified_group_owners(client, group_id, page_size=page_size)


class GetUnifiedGroupMembers(_GroupUsersCommand):
    """Returns the members of a unified group."""

    def _fetch_users(self, client: GraphClient, group_id: str, page_size: int) -> list[GroupUser]:
        return get_unified_group_members(client, group_id, page_size=page_size)

