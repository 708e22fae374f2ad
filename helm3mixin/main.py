"""
helm3mixin — CLI entrypoint.

Usage:
    python -m helm3mixin.main --help
    python -m helm3mixin.main build < input.yaml
    python -m helm3mixin.main --debug build --file input.yaml
    python -m helm3mixin.main -vv build --output-dir build/
    python -m helm3mixin.main config check --file input.yaml
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from helm3mixin import __version__
from helm3mixin.core.observability.logging_config import resolve_level, setup_logging

MIXIN_NAME = "helm3"


def _read_input(file_path: Path | None) -> tuple[str, str]:
    """Return (content, source) from ``--file`` or stdin."""
    if file_path is not None:
        from helm3mixin.core.config.loader import ConfigError

        try:
            return file_path.read_text(encoding="utf-8"), str(file_path)
        except OSError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}") from e
    return sys.stdin.read(), "<stdin>"


@click.group()
@click.version_option(version=__version__, prog_name="helm3mixin")
@click.option("--verbose", "-v", count=True, help="Log progress (-v) or everything (-vv).")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Report skipped repositories on stderr.")
@click.pass_context
def cli(ctx: click.Context, verbose: int, quiet: bool, debug: bool) -> None:
    """helm3mixin — generate Dockerfile steps that install Helm 3."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    setup_logging(
        level=resolve_level(verbose, quiet, os.environ.get("HELM3MIXIN_LOG_LEVEL")),
        log_file=os.environ.get("HELM3MIXIN_LOG_FILE"),
        log_file_level=os.environ.get("HELM3MIXIN_LOG_FILE_LEVEL"),
    )


@cli.command()
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Build input document (default: stdin).",
)
@click.option(
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write Dockerfile.helm3 into this directory instead of stdout.",
)
@click.option("--force", is_flag=True, help="Replace an existing Dockerfile.helm3.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build(
    ctx: click.Context,
    file_path: Path | None,
    output_dir: Path | None,
    force: bool,
    as_json: bool,
) -> None:
    """Write the Dockerfile lines that install helm3 and add repositories."""
    from helm3mixin.core.config.loader import ConfigError, load_build_input
    from helm3mixin.core.errors import MixinError
    from helm3mixin.core.services.generators.helm3 import (
        assemble,
        generate_dockerfile_lines,
        write_generated_file,
    )

    debug = ctx.obj.get("debug", False)
    try:
        text, source = _read_input(file_path)
        build_input = load_build_input(text, source=source)
        result = assemble(build_input.config, debug=debug)
    except (ConfigError, MixinError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if output_dir is not None:
        generated = generate_dockerfile_lines(result, overwrite=force)
        try:
            dest = write_generated_file(output_dir, generated)
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        click.echo(f"Wrote {dest}")
    else:
        click.echo(result.render(), nl=False)

    diagnostics = result.render_diagnostics()
    if diagnostics:
        click.echo(diagnostics, nl=False, err=True)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Choice(["plaintext", "json"]),
    default="plaintext",
    help="Output format.",
)
def version(output: str) -> None:
    """Print the mixin version."""
    from helm3mixin.core.services.version_constraint import CLIENT_VERSION_CONSTRAINT

    if output == "json":
        click.echo(json.dumps({
            "name": MIXIN_NAME,
            "version": __version__,
            "clientVersionConstraint": CLIENT_VERSION_CONSTRAINT,
        }, indent=2))
        return
    click.echo(f"{MIXIN_NAME} v{__version__} (helm client {CLIENT_VERSION_CONSTRAINT})")


@cli.command()
def schema() -> None:
    """Print the JSON schema of the mixin configuration."""
    from helm3mixin.core.models.config import MixinConfig

    click.echo(json.dumps(MixinConfig.model_json_schema(by_alias=True), indent=2))


@cli.group()
def config() -> None:
    """Mixin configuration commands."""


@config.command("check")
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Build input document (default: stdin).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def config_check(file_path: Path | None, as_json: bool) -> None:
    """Validate a build input document."""
    from helm3mixin.core.config.loader import ConfigError
    from helm3mixin.core.use_cases.config_check import check_config

    try:
        text, source = _read_input(file_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    result = check_config(text, source=source)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if not result.valid:
            sys.exit(1)
        return

    if result.valid:
        settings = result.settings
        assert settings is not None
        click.secho("✅ Configuration valid", fg="green")
        click.echo(f"   Client:       {settings.version} ({settings.platform}/{settings.architecture})")
        click.echo(f"   Repositories: {len(result.config.repositories) if result.config else 0}")
    else:
        click.secho("❌ Configuration invalid", fg="red")

    for err in result.errors:
        click.secho(f"   ✗ {err}", fg="red")
    for warn in result.warnings:
        click.secho(f"   ⚠ {warn}", fg="yellow")

    if not result.valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()
