"""
Mixin errors — raised by the core services.

Fatal errors abort a build before any instruction is produced.
``RepositoryURLError`` is recoverable: the assembler turns it into
a diagnostic and moves on to the next repository.
"""

from __future__ import annotations


class MixinError(Exception):
    """Base class for all helm3mixin errors."""


class VersionConstraintError(MixinError):
    """The supplied client version does not satisfy the supported range."""

    def __init__(self, version: str, constraint: str, reason: str = "") -> None:
        self.version = version
        self.constraint = constraint
        message = (
            f"supplied clientVersion {version!r} does not meet "
            f"semver constraint {constraint!r}"
        )
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RepositoryURLError(MixinError):
    """A repository entry has no URL."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__("repository url must be supplied")
