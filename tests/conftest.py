"""
Shared test fixtures and configuration.
"""

import logging
import textwrap

import pytest

from helm3mixin.core.models.config import MixinConfig, Repository


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """CLI invocations reconfigure the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def two_repo_config() -> MixinConfig:
    """Config with two repositories declared out of name order."""
    return MixinConfig(
        client_version="3.8.2",
        repositories={
            "stable": Repository(url="https://charts.helm.sh/stable"),
            "bitnami": Repository(url="https://charts.bitnami.com/bitnami"),
        },
    )


@pytest.fixture
def build_input_yaml() -> str:
    """Wrapped build input document as a host process would send it."""
    return textwrap.dedent("""\
        config:
          clientVersion: 3.8.2
          repositories:
            stable:
              url: https://charts.helm.sh/stable
            bitnami:
              url: https://charts.bitnami.com/bitnami
    """)
