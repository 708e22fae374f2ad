"""
Config check use case — validate a build input document and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from helm3mixin.core.config.loader import ConfigError, load_build_input
from helm3mixin.core.errors import VersionConstraintError
from helm3mixin.core.models.build import EffectiveSettings
from helm3mixin.core.models.config import MixinConfig
from helm3mixin.core.services.generators.helm3 import resolve_settings


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: MixinConfig | None = None
    settings: EffectiveSettings | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.model_dump() if self.settings else None,
            "repository_count": len(self.config.repositories) if self.config else 0,
        }


def check_config(text: str, source: str = "<stdin>") -> ConfigCheckResult:
    """Validate a build input document without generating instructions.

    Args:
        text:   Raw YAML content.
        source: Where the content came from, for error messages.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    try:
        config = load_build_input(text, source=source).config
    except ConfigError as e:
        result.errors.append(str(e))
        return result
    result.config = config

    try:
        result.settings = resolve_settings(config)
    except VersionConstraintError as e:
        result.errors.append(str(e))
        return result

    for name in config.sorted_repository_names():
        if not name:
            result.warnings.append("Repository with an empty name.")
        if not config.repositories[name].url:
            result.warnings.append(f"Repository '{name}' has no url and will be skipped.")

    result.valid = True
    return result
