"""
Mixin configuration — the ``helm3`` section of a bundle manifest.

    mixins:
      - helm3:
          clientVersion: v3.8.2
          clientPlatform: linux
          clientArchitecture: amd64 | arm64 | arm | i386
          repositories:
            stable:
              url: "https://charts.helm.sh/stable"

Every field is optional; an absent or empty value falls back to the
built-in default when settings are resolved.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class Repository(BaseModel):
    """A named chart repository to register with helm3."""

    model_config = ConfigDict(extra="ignore")

    url: str | None = None


class MixinConfig(BaseModel):
    """Configuration that can be set on the helm3 mixin."""

    model_config = ConfigDict(extra="ignore")

    client_version: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clientVersion", "client_version"),
        serialization_alias="clientVersion",
    )
    # ``clientPlatfrom`` is accepted for manifests written against older releases.
    client_platform: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clientPlatform", "clientPlatfrom", "client_platform"),
        serialization_alias="clientPlatform",
    )
    client_architecture: str | None = Field(
        default=None,
        validation_alias=AliasChoices("clientArchitecture", "client_architecture"),
        serialization_alias="clientArchitecture",
    )
    repositories: dict[str, Repository] = Field(default_factory=dict)

    @field_validator("repositories", mode="before")
    @classmethod
    def _empty_repositories(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {
                str(name): ({} if repo is None else repo) for name, repo in value.items()
            }
        return value

    def sorted_repository_names(self) -> list[str]:
        """Repository names in ascending order (mapping order is never used)."""
        return sorted(self.repositories)


class BuildInput(BaseModel):
    """Document handed to the mixin for the build command."""

    model_config = ConfigDict(extra="ignore")

    config: MixinConfig = Field(default_factory=MixinConfig)

    @field_validator("config", mode="before")
    @classmethod
    def _empty_config(cls, value: Any) -> Any:
        return {} if value is None else value
