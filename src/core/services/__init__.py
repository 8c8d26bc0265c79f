"""Command services.

Each command resolves its bindings, fetches through the adapters and writes
results; nothing here talks HTTP directly.
"""

from core.services.group_commands import GetUnifiedGroup, GetUnifiedGroupMembers, GetUnifiedGroupOwners
from core.services.taxonomy_commands import GetTerm, GetTermGroup, GetTermSet

__all__ = [
    "GetTerm",
    "GetTermGroup",
    "GetTermSet",
    "GetUnifiedGroup",
    "GetUnifiedGroupMembers",
    "GetUnifiedGroupOwners",
]
