"""
Domain models — Pydantic types for the helm3 mixin.

All models are re-exported here for convenient access:

    from helm3mixin.core.models import MixinConfig, Repository, BuildResult
"""

from helm3mixin.core.models.build import BuildResult, Diagnostic, EffectiveSettings
from helm3mixin.core.models.config import BuildInput, MixinConfig, Repository
from helm3mixin.core.models.template import GeneratedFile

__all__ = [
    # build.py
    "BuildResult",
    "Diagnostic",
    "EffectiveSettings",
    # config.py
    "BuildInput",
    "MixinConfig",
    "Repository",
    # template.py
    "GeneratedFile",
]
