"""Unit tests for CLI module."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from kubemap.cli import main
from kubemap.discovery import DiscoveryError


@pytest.fixture(autouse=True)
def builtin_only(monkeypatch):
    """Keep the CLI on the built-in snapshot."""
    monkeypatch.delenv("KUBEMAP_DISCOVERY", raising=False)
    monkeypatch.delenv("KUBEMAP_IGNORED_GROUPS", raising=False)


def run_cli(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["kubemap", *args])
    main()


class TestResolveCommand:
    """Test cases for the resolve command."""

    def test_resolve(self, monkeypatch, capsys):
        run_cli(monkeypatch, "resolve", "pod", "Deployment", "--quiet")
        out = capsys.readouterr().out
        assert out.splitlines() == ["/v1/pods", "apps/v1/deployments"]

    def test_resolve_unknown_exits(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "resolve", "pod", "frobnicator", "--quiet")
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "/v1/pods" in captured.out
        assert "frobnicator" in captured.err


class TestApiResourcesCommand:
    """Test cases for the api-resources command."""

    def test_namespaced_only(self, monkeypatch, capsys):
        run_cli(monkeypatch, "api-resources", "--namespaced", "--quiet")
        names = capsys.readouterr().out.split()
        assert "pods" in names
        assert "deployments" in names
        assert "namespaces" not in names
        assert names == sorted(names)

    def test_cluster_only(self, monkeypatch, capsys):
        run_cli(monkeypatch, "api-resources", "--cluster", "--quiet")
        names = capsys.readouterr().out.split()
        assert "namespaces" in names
        assert "clusterroles" in names
        assert "pods" not in names

    def test_namespaced_and_cluster_are_exclusive(self, monkeypatch):
        with pytest.raises(SystemExit):
            run_cli(monkeypatch, "api-resources", "--namespaced", "--cluster")


class TestExpandCommand:
    """Test cases for the expand command."""

    def test_expand_group_version(self, monkeypatch, capsys):
        run_cli(monkeypatch, "expand", "batch/v1/*", "--quiet")
        assert capsys.readouterr().out.splitlines() == ["batch/v1/cronjobs", "batch/v1/jobs"]

    def test_expand_resource(self, monkeypatch, capsys):
        run_cli(monkeypatch, "expand", "*/*/Deployment", "--quiet")
        assert capsys.readouterr().out.splitlines() == ["apps/v1/deployments"]

    def test_expand_custom_resource(self, monkeypatch, capsys):
        run_cli(monkeypatch, "expand", "example.com/v1/widgets", "--quiet")
        assert capsys.readouterr().out.splitlines() == ["example.com/v1/widgets"]

    def test_expand_invalid_triplet(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "expand", "apps/v1", "--quiet")
        assert exc_info.value.code == 1
        assert "Invalid triplet" in capsys.readouterr().err


class TestClassifyCommand:
    """Test cases for the classify command."""

    def test_classify(self, monkeypatch, capsys, tmp_path):
        manifest = tmp_path / "app.yaml"
        manifest.write_text(
            "apiVersion: apps/v1\n"
            "kind: Deployment\n"
            "metadata:\n"
            "  name: web\n"
            "---\n"
            "apiVersion: example.com/v1\n"
            "kind: Widget\n"
            "metadata:\n"
            "  name: gadget\n"
        )
        run_cli(monkeypatch, "classify", str(manifest))
        out = capsys.readouterr().out
        assert "Deployment" in out
        assert "Widget" in out
        assert "1 of 2 documents" in out

    def test_classify_missing_file(self, monkeypatch, capsys, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(monkeypatch, "classify", str(tmp_path / "missing.yaml"))
        assert exc_info.value.code == 1
        assert "Error" in capsys.readouterr().err


class TestDiscoverFlag:
    """Test cases for --discover."""

    def test_discover_uses_kubectl(self, monkeypatch, capsys):
        discovery = MagicMock()
        discovery.server_preferred_resources.return_value = [
            {
                "groupVersion": "example.com/v1",
                "resources": [{"name": "widgets", "namespaced": True, "verbs": ["get"]}],
            }
        ]
        with patch("kubemap.cli.KubectlDiscovery", return_value=discovery):
            run_cli(monkeypatch, "resolve", "Widget", "--discover", "--quiet")
        assert capsys.readouterr().out.splitlines() == ["example.com/v1/widgets"]

    def test_discover_failure_falls_back(self, monkeypatch, capsys):
        discovery = MagicMock()
        discovery.server_preferred_resources.side_effect = DiscoveryError("no cluster")
        with patch("kubemap.cli.KubectlDiscovery", return_value=discovery):
            run_cli(monkeypatch, "resolve", "pod", "--discover", "--quiet")
        assert capsys.readouterr().out.splitlines() == ["/v1/pods"]
