"""Tests for the svcdeps command-line interface."""

import json
import logging

import pytest
import yaml

from svcdeps import cli as cli_module
from svcdeps.cli import cli


MANIFEST = """\
name: test-project
services:
  api:
    project: ./api
    language: js
    host: appservice
  web:
    project: ./web
    language: js
    host: appservice
  database:
    project: ./database
    language: sql
    host: azure-sql
"""


@pytest.fixture
def manifest(tmp_path):
    path = tmp_path / "project.yaml"
    path.write_text(MANIFEST)
    return path


def _run(manifest, *args):
    return cli(["--manifest", str(manifest), *args])


def _depends_on(manifest, service):
    data = yaml.safe_load(manifest.read_text())
    return data["services"][service].get("dependsOn")


class TestDepAdd:
    def test_add_and_persist(self, manifest, capsys):
        assert _run(manifest, "dep", "add", "api", "database") == 0
        assert "Dependency created: 'api' now depends on 'database'" in capsys.readouterr().out
        assert _depends_on(manifest, "api") == ["database"]
        # other service fields survive the rewrite
        data = yaml.safe_load(manifest.read_text())
        assert data["services"]["database"]["host"] == "azure-sql"

    def test_force_and_second_dependency(self, manifest):
        assert _run(manifest, "dep", "add", "api", "database") == 0
        assert _run(manifest, "dep", "add", "api", "database", "--force") == 0
        assert _run(manifest, "dep", "add", "api", "web") == 0
        assert _depends_on(manifest, "api") == ["database", "web"]

    def test_duplicate_without_force_fails(self, manifest, capsys):
        _run(manifest, "dep", "add", "api", "database")
        capsys.readouterr()
        assert _run(manifest, "dep", "add", "api", "database") == 1
        assert "already depends on 'database'" in capsys.readouterr().err
        assert _depends_on(manifest, "api") == ["database"]

    def test_unknown_service(self, manifest, capsys):
        before = manifest.read_text()
        assert _run(manifest, "dep", "add", "api", "cache") == 1
        assert "service 'cache' not found in project" in capsys.readouterr().err
        assert manifest.read_text() == before

    def test_interactive(self, manifest, monkeypatch, capsys):
        prompts = []

        def fake_select(message, options):
            prompts.append((message, options))
            return options.index("web") if "web" in options and len(prompts) == 1 else options.index("api")

        monkeypatch.setattr(cli_module, "select_one", fake_select)
        assert _run(manifest, "dep", "add") == 0
        assert _depends_on(manifest, "web") == ["api"]
        assert prompts[1][0] == "Select a service that web depends on"
        assert "web" not in prompts[1][1]

    def test_gen_deps_alias(self, manifest):
        assert _run(manifest, "gen", "deps", "web", "api") == 0
        assert _depends_on(manifest, "web") == ["api"]

    def test_cycle_warning(self, manifest, caplog):
        caplog.set_level(logging.WARNING, logger="svcdeps")
        _run(manifest, "dep", "add", "api", "web")
        assert _run(manifest, "dep", "add", "web", "api") == 0
        assert "Cyclic dependency detected" in caplog.text

    def test_no_services(self, tmp_path, capsys):
        path = tmp_path / "project.yaml"
        path.write_text("name: empty\n")
        assert _run(path, "dep", "add", "api", "web") == 1
        assert "no services defined in project" in capsys.readouterr().err

    def test_single_service_has_nothing_to_depend_on(self, tmp_path, capsys):
        path = tmp_path / "project.yaml"
        path.write_text("services:\n  api: {}\n")
        assert _run(path, "dep", "add", "api") == 1
        assert "no other services available" in capsys.readouterr().err


class TestDepList:
    def test_table(self, manifest, capsys):
        _run(manifest, "dep", "add", "api", "database")
        _run(manifest, "dep", "add", "web", "api")
        capsys.readouterr()

        assert _run(manifest, "dep", "list") == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split() == ["SERVICE", "DEPENDS", "ON", "REQUIRED", "BY"]
        assert lines[1].split() == ["api", "database", "web"]
        assert lines[2].split() == ["database", "-", "api"]
        assert lines[3].split() == ["web", "api", "-"]

    def test_json_single_service(self, manifest, capsys):
        _run(manifest, "dep", "add", "web", "api")
        capsys.readouterr()

        assert _run(manifest, "dep", "list", "api", "--output", "json") == 0
        views = json.loads(capsys.readouterr().out)
        assert views == [{"service": "api", "dependsOn": [], "requiredBy": ["web"]}]

    def test_unknown_service(self, manifest, capsys):
        assert _run(manifest, "dep", "list", "nope") == 1
        assert "service 'nope' not found" in capsys.readouterr().err


class TestDepRemove:
    def test_forced_remove(self, manifest, capsys):
        _run(manifest, "dep", "add", "api", "database")
        capsys.readouterr()

        assert _run(manifest, "dep", "remove", "api", "database", "--force") == 0
        assert "Dependency removed: 'api' no longer depends on 'database'" in capsys.readouterr().out
        assert _depends_on(manifest, "api") is None

    def test_declined_confirmation(self, manifest, monkeypatch, capsys):
        _run(manifest, "dep", "add", "api", "database")
        capsys.readouterr()
        monkeypatch.setattr(cli_module, "confirm", lambda prompt, default: False)

        assert _run(manifest, "dep", "remove", "api", "database") == 0
        assert "Dependency removal cancelled" in capsys.readouterr().out
        assert _depends_on(manifest, "api") == ["database"]

    def test_accepted_confirmation(self, manifest, monkeypatch):
        _run(manifest, "dep", "add", "api", "database")
        monkeypatch.setattr(cli_module, "confirm", lambda prompt, default: True)
        assert _run(manifest, "dep", "remove", "api", "database") == 0
        assert _depends_on(manifest, "api") is None

    def test_missing_edge(self, manifest, capsys):
        _run(manifest, "dep", "add", "api", "web")
        capsys.readouterr()
        assert _run(manifest, "dep", "remove", "api", "database", "--force") == 1
        assert "does not depend on 'database'" in capsys.readouterr().err

    def test_interactive_no_dependencies(self, manifest, capsys):
        assert _run(manifest, "dep", "remove", "api") == 1
        assert "has no dependencies to remove" in capsys.readouterr().err

    def test_interactive_choice(self, manifest, monkeypatch):
        _run(manifest, "dep", "add", "api", "database")
        _run(manifest, "dep", "add", "api", "web")
        monkeypatch.setattr(cli_module, "select_one", lambda message, options: options.index("web"))
        assert _run(manifest, "dep", "remove", "api", "--force") == 0
        assert _depends_on(manifest, "api") == ["database"]


class TestValidate:
    def test_clean_project(self, manifest, capsys):
        assert _run(manifest, "validate") == 0
        assert "no dependency issues found" in capsys.readouterr().out

    def test_findings_are_warnings(self, tmp_path, capsys):
        path = tmp_path / "project.yaml"
        path.write_text(
            "services:\n"
            "  a:\n    dependsOn: [b]\n"
            "  b:\n    dependsOn: [a]\n"
            "  web:\n    dependsOn: [nonexistent]\n"
        )
        assert _run(path, "validate") == 0
        out = capsys.readouterr().out
        assert "WARNING: Service 'web' depends on 'nonexistent'" in out
        assert "WARNING: Cyclic dependency detected: a -> b -> a" in out

    def test_strict(self, tmp_path):
        path = tmp_path / "project.yaml"
        path.write_text("services:\n  a:\n    dependsOn: [a]\n")
        assert _run(path, "validate", "--strict") == 1

    def test_missing_manifest(self, tmp_path, capsys):
        assert _run(tmp_path / "missing.yaml", "validate") == 1
        assert "failed to load project configuration" in capsys.readouterr().err

    def test_undecodable_manifest(self, tmp_path, capsys):
        path = tmp_path / "project.yaml"
        path.write_bytes(b"services:\n  web:\n    dependsOn: [\xff\xfe]\n")
        assert _run(path, "validate") == 1
        assert "ERROR: failed to load project configuration" in capsys.readouterr().err


class TestSynth:
    @pytest.fixture
    def wired(self, manifest):
        _run(manifest, "dep", "add", "web", "api")
        _run(manifest, "dep", "add", "web", "database")
        return manifest

    def test_bicep_default(self, wired, capsys):
        capsys.readouterr()
        assert _run(wired, "synth") == 0
        out = capsys.readouterr().out
        assert "web: dependsOn: [resource_api.id, resource_database.id]" in out
        assert "api:" not in out

    def test_terraform(self, wired, capsys):
        capsys.readouterr()
        assert _run(wired, "synth", "--provider", "TERRAFORM") == 0
        assert "web: depends_on = [module.api, module.database]" in capsys.readouterr().out

    def test_prefixed(self, wired, capsys):
        capsys.readouterr()
        assert _run(wired, "synth", "--provider", "terraform", "--prefix", "svc") == 0
        assert "web: depends_on = [module.svc_api, module.svc_database]" in capsys.readouterr().out

    def test_nothing_to_synthesize(self, manifest, capsys):
        assert _run(manifest, "synth") == 0
        assert "No service dependencies to synthesize." in capsys.readouterr().out
