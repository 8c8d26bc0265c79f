"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation plus self-documenting fields (Field) without coupling the
  core to I/O libraries.
- Remote payloads use camelCase; aliases keep the Python side snake_case while
  `model_dump(by_alias=True)` round-trips the remote names.

Note:
- These models are read-only handles on entities owned by the remote service.
  A command never creates or mutates them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class UnifiedGroup(BaseModel):
    """An Office 365 (unified) group."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(
        ...,
        min_length=1,
        description="Object id of the group.",
    )
    display_name: str | None = Field(
        default=None,
        alias="displayName",
        description="Display name of the group.",
    )
    description: str | None = Field(
        default=None,
        description="Free-text description.",
    )
    mail: str | None = Field(
        default=None,
        description="Primary SMTP address.",
    )
    mail_nickname: str | None = Field(
        default=None,
        alias="mailNickname",
    )
    visibility: str | None = Field(
        default=None,
        description="Public, Private or HiddenMembership.",
    )
    created_date_time: datetime | None = Field(
        default=None,
        alias="createdDateTime",
    )


class GroupUser(BaseModel):
    """An owner or member of a unified group."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    display_name: str | None = Field(default=None, alias="displayName")
    user_principal_name: str | None = Field(default=None, alias="userPrincipalName")
    mail: str | None = None
    job_title: str | None = Field(default=None, alias="jobTitle")


class LocalizedName(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    language_tag: str | None = Field(default=None, alias="languageTag")


class TermLabel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    language_tag: str | None = Field(default=None, alias="languageTag")
    is_default: bool = Field(default=False, alias="isDefault")


class LocalizedDescription(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: str
    language_tag: str | None = Field(default=None, alias="languageTag")


class KeyValue(BaseModel):
    key: str
    value: str | None = None


class TermStore(BaseModel):
    """Term store backing a site's taxonomy."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str | None = Field(
        default=None,
        description="Store name, when the service exposes one.",
    )
    default_language_tag: str | None = Field(default=None, alias="defaultLanguageTag")
    language_tags: list[str] = Field(default_factory=list, alias="languageTags")


class TermGroup(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    display_name: str | None = Field(default=None, alias="displayName")
    description: str | None = None
    scope: str | None = Field(
        default=None,
        description="global, system or siteCollection.",
    )
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")

    @property
    def name(self) -> str | None:
        return self.display_name


class TermSet(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., min_length=1)
    localized_names: list[LocalizedName] = Field(default_factory=list, alias="localizedNames")
    description: str | None = None
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")

    @property
    def name(self) -> str | None:
        return self.localized_names[0].name if self.localized_names else None


class Term(BaseModel):
    """A taxonomy term.

    Only the properties the caller selected are present; `extra="allow"` keeps
    pass-through properties the model does not know about, and
    `model_dump(exclude_unset=True)` emits exactly what was materialized.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., min_length=1)
    labels: list[TermLabel] = Field(default_factory=list)
    descriptions: list[LocalizedDescription] = Field(default_factory=list)
    created_date_time: datetime | None = Field(default=None, alias="createdDateTime")
    last_modified_date_time: datetime | None = Field(default=None, alias="lastModifiedDateTime")
    properties: list[KeyValue] = Field(default_factory=list)
    is_available_for_tagging: bool | None = Field(default=None, alias="isAvailableForTagging")

    @property
    def name(self) -> str | None:
        """Default label, falling back to the first label."""

        for label in self.labels:
            if label.is_default:
                return label.name
        return self.labels[0].name if self.labels else None
