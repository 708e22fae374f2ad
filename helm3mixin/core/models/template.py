"""
Generated file model — output of the Dockerfile generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A Dockerfile fragment produced by a generator.

    Attributes:
        path:      Relative path the fragment would be written to.
        content:   Full fragment content.
        overwrite: Whether to overwrite if already exists.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""
