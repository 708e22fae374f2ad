"""
Helm 3 Dockerfile generator — produce the build steps for the mixin.

Resolves the client version/platform/architecture, emits the fixed
install preamble and, when chart repositories are configured, the
steps that register them.  Repository names are always sorted so the
output is stable regardless of mapping order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from helm3mixin.core.errors import RepositoryURLError, VersionConstraintError
from helm3mixin.core.models.build import BuildResult, Diagnostic, EffectiveSettings
from helm3mixin.core.models.config import MixinConfig
from helm3mixin.core.models.template import GeneratedFile
from helm3mixin.core.services.version_constraint import (
    CLIENT_VERSION_CONSTRAINT,
    SemverParseError,
    validate,
)

logger = logging.getLogger(__name__)


# ── Defaults ────────────────────────────────────────────────────

DEFAULT_CLIENT_VERSION = "v3.8.2"
DEFAULT_CLIENT_PLATFORM = "linux"
DEFAULT_CLIENT_ARCHITECTURE = "amd64"

KUBECTL_VERSION = "v1.22.1"

# Execution identity the bundle runs as; expanded by the image build.
BUNDLE_USER = "${BUNDLE_USER}"

DOCKERFILE_FRAGMENT = "Dockerfile.helm3"


# ── Settings ────────────────────────────────────────────────────


def resolve_settings(config: MixinConfig) -> EffectiveSettings:
    """Apply config overrides onto the built-in defaults.

    An explicit ``clientVersion`` must satisfy ``CLIENT_VERSION_CONSTRAINT``.

    Raises:
        VersionConstraintError: If the supplied version is unparsable
            or outside the supported range.
    """
    version = DEFAULT_CLIENT_VERSION
    supplied = (config.client_version or "").strip()
    if supplied:
        try:
            ok = validate(supplied, CLIENT_VERSION_CONSTRAINT)
        except SemverParseError as e:
            raise VersionConstraintError(supplied, CLIENT_VERSION_CONSTRAINT, str(e)) from e
        if not ok:
            raise VersionConstraintError(supplied, CLIENT_VERSION_CONSTRAINT)
        version = supplied

    settings = EffectiveSettings(
        version=version,
        platform=(config.client_platform or "").strip() or DEFAULT_CLIENT_PLATFORM,
        architecture=(config.client_architecture or "").strip() or DEFAULT_CLIENT_ARCHITECTURE,
    )
    logger.debug(
        "Resolved helm client %s (%s/%s)",
        settings.version, settings.platform, settings.architecture,
    )
    return settings


# ── Instructions ────────────────────────────────────────────────


def preamble(settings: EffectiveSettings) -> list[str]:
    """Fixed steps that install helm3 and kubectl."""
    return [
        "ENV HELM_EXPERIMENTAL_OCI=1",
        "RUN apt-get update && apt-get install -y curl",
        f"RUN curl {settings.archive_url} --output helm3.tar.gz",
        "RUN tar -xvf helm3.tar.gz && rm helm3.tar.gz",
        "RUN mv linux-amd64/helm /usr/local/bin/helm3",
        (
            "RUN curl -o kubectl https://storage.googleapis.com/kubernetes-release/"
            f"release/{KUBECTL_VERSION}/bin/linux/amd64/kubectl &&\\\n"
            "    mv kubectl /usr/local/bin && chmod a+x /usr/local/bin/kubectl"
        ),
    ]


def repository_command(name: str, url: str | None) -> list[str]:
    """Tokens of the ``helm3 repo add`` step for one repository.

    The name is passed through unchecked.

    Raises:
        RepositoryURLError: If ``url`` is empty.
    """
    if not url:
        raise RepositoryURLError(name)
    return ["RUN", "helm3", "repo", "add", name, url]


def assemble(config: MixinConfig, debug: bool = False) -> BuildResult:
    """Build the ordered Dockerfile instructions for ``config``.

    Repositories without a URL are skipped and recorded as diagnostics;
    only a bad client version aborts the build.

    Args:
        config: Decoded mixin configuration.
        debug:  Whether diagnostics are shown to the user.

    Returns:
        BuildResult with instructions and diagnostics.

    Raises:
        VersionConstraintError: If the supplied client version is rejected.
    """
    settings = resolve_settings(config)
    result = BuildResult(settings=settings, debug=debug)
    result.instructions.extend(preamble(settings))

    if not config.repositories:
        return result

    # helm is configured for the user the container will execute as
    result.instructions.append(f"USER {BUNDLE_USER}")

    for name in config.sorted_repository_names():
        url = config.repositories[name].url
        try:
            command = repository_command(name, url)
        except RepositoryURLError as e:
            logger.debug("Skipping repository %r: %s", name, e)
            result.diagnostics.append(Diagnostic(repository=name, message=str(e)))
            continue
        result.instructions.append(" ".join(command))

    result.instructions.append("RUN helm3 repo update")

    # Back to root so subsequent mixins can install things
    result.instructions.append("USER root")

    logger.info(
        "Assembled %d instructions (%d repositories skipped)",
        len(result.instructions), len(result.diagnostics),
    )
    return result


def generate_dockerfile_lines(result: BuildResult, overwrite: bool = False) -> GeneratedFile:
    """Wrap assembled instructions as a Dockerfile fragment."""
    added = sum(1 for i in result.instructions if i.startswith("RUN helm3 repo add "))
    return GeneratedFile(
        path=DOCKERFILE_FRAGMENT,
        content=result.render(),
        overwrite=overwrite,
        reason=f"helm3 {result.settings.version} with {added} chart repositories",
    )


def write_generated_file(root: Path, generated: GeneratedFile) -> Path:
    """Write ``generated`` under ``root``.

    Raises:
        FileExistsError: If the target exists and ``overwrite`` is not set.
    """
    dest = root / generated.path
    if dest.exists() and not generated.overwrite:
        raise FileExistsError(f"{dest} already exists. Use --force to replace it.")
    dest.parent.mkdir(parents=True, exist_ok=True)
    dest.write_text(generated.content, encoding="utf-8")
    logger.info("Wrote %s (%s)", dest, generated.reason)
    return dest
