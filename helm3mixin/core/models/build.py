"""
Build models — resolved settings and the result of assembling instructions.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EffectiveSettings(BaseModel):
    """Client version/platform/architecture after applying overrides."""

    model_config = ConfigDict(frozen=True)

    version: str
    platform: str
    architecture: str

    @property
    def archive_url(self) -> str:
        return (
            f"https://get.helm.sh/helm-{self.version}-"
            f"{self.platform}-{self.architecture}.tar.gz"
        )


class Diagnostic(BaseModel):
    """A recoverable failure recorded while assembling instructions."""

    model_config = ConfigDict(frozen=True)

    repository: str
    message: str

    def render(self) -> str:
        return f"DEBUG: addition of repository failed: {self.message}"


class BuildResult(BaseModel):
    """Ordered Dockerfile instructions plus any diagnostics.

    Attributes:
        settings:     The resolved client settings used for the preamble.
        instructions: Dockerfile instructions, in emission order.
        diagnostics:  Skipped repositories, in name order.
        debug:        Whether diagnostics should be shown to the user.
    """

    settings: EffectiveSettings
    instructions: list[str] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)
    debug: bool = False

    def render(self) -> str:
        """Instructions as Dockerfile text, one per line."""
        if not self.instructions:
            return ""
        return "\n".join(self.instructions) + "\n"

    def render_diagnostics(self) -> str:
        """Diagnostic text for the error stream; empty unless debug is on."""
        if not self.debug:
            return ""
        return "".join(f"{d.render()}\n" for d in self.diagnostics)

    def to_dict(self) -> dict:
        # Diagnostics only leave the result when debug is on
        return {
            "settings": self.settings.model_dump(),
            "instructions": list(self.instructions),
            "debug": self.debug,
            "diagnostics": [d.model_dump() for d in self.diagnostics] if self.debug else [],
        }
