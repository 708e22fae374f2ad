"""
Tests for CLI commands — build, version, schema, config check, global options.
"""

import json
import textwrap
from pathlib import Path

from click.testing import CliRunner

from helm3mixin.main import cli


class TestCLIGlobal:
    """Tests for global CLI behavior."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Helm 3" in result.output

    def test_version_option(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestBuildCommand:
    """Tests for the build command."""

    def test_build_from_stdin(self, build_input_yaml: str):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input=build_input_yaml)
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "ENV HELM_EXPERIMENTAL_OCI=1"
        assert lines[-4:] == [
            "RUN helm3 repo add bitnami https://charts.bitnami.com/bitnami",
            "RUN helm3 repo add stable https://charts.helm.sh/stable",
            "RUN helm3 repo update",
            "USER root",
        ]
        assert result.stdout.endswith("USER root\n")

    def test_build_from_file(self, tmp_path: Path, build_input_yaml: str):
        path = tmp_path / "input.yaml"
        path.write_text(build_input_yaml)
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--file", str(path)])
        assert result.exit_code == 0
        assert "helm-3.8.2-linux-amd64.tar.gz" in result.stdout

    def test_build_no_repositories(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input="config: {}\n")
        assert result.exit_code == 0
        assert "USER" not in result.stdout
        assert "helm-v3.8.2-linux-amd64.tar.gz" in result.stdout

    def test_bad_version_fails(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input="config:\n  clientVersion: 2.9.0\n")
        assert result.exit_code == 1
        assert result.stdout == ""
        assert "2.9.0" in result.stderr
        assert "^v3.x" in result.stderr

    def test_invalid_yaml_fails(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input=":: invalid: [")
        assert result.exit_code == 1
        assert "Invalid YAML" in result.stderr

    def test_missing_file_fails(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--file", str(tmp_path / "nope.yaml")])
        assert result.exit_code == 1
        assert "Cannot read" in result.stderr

    def _broken_repo_input(self) -> str:
        return textwrap.dedent("""\
            config:
              repositories:
                broken:
                  url: ""
                stable:
                  url: https://charts.helm.sh/stable
        """)

    def test_skipped_repository_silent_by_default(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input=self._broken_repo_input())
        assert result.exit_code == 0
        assert "broken" not in result.stdout
        assert "addition of repository failed" not in result.stderr

    def test_skipped_repository_reported_in_debug(self, monkeypatch):
        """One diagnostic line per skipped repository and nothing else on stderr."""
        monkeypatch.delenv("HELM3MIXIN_LOG_LEVEL", raising=False)
        runner = CliRunner()
        result = runner.invoke(cli, ["--debug", "build"], input=self._broken_repo_input())
        assert result.exit_code == 0
        assert "RUN helm3 repo add stable https://charts.helm.sh/stable" in result.stdout
        assert result.stderr == (
            "DEBUG: addition of repository failed: repository url must be supplied\n"
        )
        assert "addition of repository failed" not in result.stdout

    def test_verbose_logging_is_separate_from_diagnostics(self, monkeypatch):
        monkeypatch.delenv("HELM3MIXIN_LOG_LEVEL", raising=False)
        runner = CliRunner()
        result = runner.invoke(cli, ["-vv", "build"], input=self._broken_repo_input())
        assert result.exit_code == 0
        assert "[helm3mixin] DEBUG" in result.stderr
        assert "DEBUG: addition of repository failed" not in result.stderr

    def test_json_hides_diagnostics_without_debug(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--json"], input=self._broken_repo_input())
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["debug"] is False
        assert data["diagnostics"] == []
        assert "broken" not in result.stdout

    def test_json_shows_diagnostics_with_debug(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--debug", "build", "--json"], input=self._broken_repo_input())
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["diagnostics"] == [
            {"repository": "broken", "message": "repository url must be supplied"},
        ]

    def test_output_dir_writes_fragment(self, tmp_path: Path, build_input_yaml: str):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["build", "--output-dir", str(tmp_path)], input=build_input_yaml,
        )
        assert result.exit_code == 0
        text = (tmp_path / "Dockerfile.helm3").read_text()
        assert text.endswith("RUN helm3 repo update\nUSER root\n")
        assert "Wrote" in result.stdout

    def test_output_dir_refuses_to_overwrite(self, tmp_path: Path, build_input_yaml: str):
        (tmp_path / "Dockerfile.helm3").write_text("mine\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["build", "--output-dir", str(tmp_path)], input=build_input_yaml,
        )
        assert result.exit_code == 1
        assert "already exists" in result.stderr
        assert (tmp_path / "Dockerfile.helm3").read_text() == "mine\n"

    def test_output_dir_force(self, tmp_path: Path, build_input_yaml: str):
        (tmp_path / "Dockerfile.helm3").write_text("mine\n")
        runner = CliRunner()
        result = runner.invoke(
            cli, ["build", "--output-dir", str(tmp_path), "--force"], input=build_input_yaml,
        )
        assert result.exit_code == 0
        assert (tmp_path / "Dockerfile.helm3").read_text().startswith("ENV HELM_EXPERIMENTAL_OCI=1")

    def test_version_with_decimal_text(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["build"], input="clientVersion: 3.10\n")
        assert result.exit_code == 0
        assert "helm-3.10-linux-amd64.tar.gz" in result.stdout

    def test_build_json(self, build_input_yaml: str):
        runner = CliRunner()
        result = runner.invoke(cli, ["build", "--json"], input=build_input_yaml)
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["settings"]["version"] == "3.8.2"
        assert data["instructions"][-1] == "USER root"


class TestVersionCommand:
    def test_plaintext(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["version"])
        assert result.exit_code == 0
        assert result.stdout.startswith("helm3 v0.1.0")

    def test_json(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["version", "--output", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data == {"name": "helm3", "version": "0.1.0", "clientVersionConstraint": "^v3.x"}


class TestSchemaCommand:
    def test_schema(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["schema"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert "repositories" in data["properties"]
        assert "clientVersion" in data["properties"]


class TestConfigCheckCommand:
    def test_valid(self, build_input_yaml: str):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"], input=build_input_yaml)
        assert result.exit_code == 0
        assert "valid" in result.stdout
        assert "3.8.2" in result.stdout

    def test_invalid(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check"], input="clientVersion: abc\n")
        assert result.exit_code == 1
        assert "invalid" in result.stdout

    def test_json(self, tmp_path: Path):
        path = tmp_path / "input.yaml"
        path.write_text("repositories:\n  broken: {}\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["config", "check", "--file", str(path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["valid"] is True
        assert data["warnings"] == ["Repository 'broken' has no url and will be skipped."]
