"""
Configuration loader — reads the build input document into domain models.

The host hands the mixin a YAML document either wrapped under a
``config:`` key or as the bare ``helm3`` section.  This reads YAML,
validates against Pydantic schemas, and returns typed domain objects.
"""

from __future__ import annotations

import logging

import yaml
from pydantic import ValidationError

from helm3mixin.core.models.config import BuildInput

logger = logging.getLogger(__name__)


class _TextScalarLoader(yaml.SafeLoader):
    """SafeLoader that keeps numeric scalars as their source text.

    Every mixin field is a string; `clientVersion: 3.10` must stay
    "3.10" rather than become the float 3.1.
    """


def _construct_text(loader: yaml.SafeLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


_TextScalarLoader.add_constructor("tag:yaml.org,2002:int", _construct_text)
_TextScalarLoader.add_constructor("tag:yaml.org,2002:float", _construct_text)


class ConfigError(Exception):
    """Raised when the build input document is invalid or missing."""


def load_build_input(text: str, source: str = "<stdin>") -> BuildInput:
    """Parse and validate a build input document.

    Args:
        text:   Raw YAML content.
        source: Where the content came from, for error messages.

    Returns:
        Validated BuildInput model.

    Raises:
        ConfigError: If the content is not valid YAML or not a valid config.
    """
    try:
        data = yaml.load(text, Loader=_TextScalarLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {source}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {source}, got {type(data).__name__}")

    # Flat documents are the mixin section itself
    if "config" not in data:
        data = {"config": data}

    try:
        build_input = BuildInput.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid mixin configuration in {source}: {e}") from e

    logger.debug(
        "Loaded build input from %s with %d repositories",
        source, len(build_input.config.repositories),
    )
    return build_input

