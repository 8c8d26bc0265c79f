"""Domain errors.

The CLI maps every `CollabError` to a readable message and exit code 1; anything
else is a bug and is allowed to propagate.
"""

from __future__ import annotations


class CollabError(Exception):
    """Base error for collabkit."""


class ConfigurationError(CollabError):
    """Missing or invalid settings (e.g. no access token)."""


class BindingError(CollabError, ValueError):
    """A binding could not be built from the caller's value."""


class NotFoundError(CollabError):
    """A remote entity required by the command does not exist."""

    def __init__(self, entity: str, identity: object) -> None:
        self.entity = entity
        self.identity = identity
        super().__init__(f"{entity} not found: {identity}")


class RemoteServiceError(CollabError):
    """The remote API answered with an error after the retry budget was spent."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        code: str | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.url = url
        detail = message
        if status_code is not None:
            detail = f"HTTP {status_code}: {detail}"
        if code:
            detail = f"{detail} ({code})"
        super().__init__(detail)
