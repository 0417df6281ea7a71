"""Unit tests for manifest classification."""

import pytest
import yaml

from kubemap.manifest import classify_manifests, is_workload_like, load_manifests


class TestIsWorkloadLike:
    """Test cases for is_workload_like."""

    def test_deployment(self, registry):
        assert is_workload_like({"apiVersion": "apps/v1", "kind": "Deployment"}, registry)

    def test_missing_kind(self, registry):
        assert not is_workload_like({"apiVersion": "apps/v1"}, registry)

    def test_missing_api_version(self, registry):
        assert not is_workload_like({"kind": "Deployment"}, registry)

    def test_none(self, registry):
        assert not is_workload_like(None, registry)

    def test_non_string_kind(self, registry):
        assert not is_workload_like({"apiVersion": "v1", "kind": 42}, registry)
        assert not is_workload_like({"apiVersion": "v1", "kind": None}, registry)

    def test_unknown_kind(self, registry):
        assert not is_workload_like({"apiVersion": "example.com/v1", "kind": "Widget"}, registry)

    def test_api_version_is_not_checked(self, registry):
        """Only the kind is looked up."""
        assert is_workload_like({"apiVersion": "made-up/v9", "kind": "Pod"}, registry)


class TestLoadManifests:
    """Test cases for load_manifests."""

    def test_multi_document(self, tmp_path):
        manifest = tmp_path / "app.yaml"
        manifest.write_text(
            "apiVersion: v1\n"
            "kind: Namespace\n"
            "metadata:\n"
            "  name: demo\n"
            "---\n"
            "---\n"
            "apiVersion: apps/v1\n"
            "kind: Deployment\n"
            "metadata:\n"
            "  name: web\n"
            "---\n"
            "just a string\n"
        )

        documents = load_manifests(manifest)
        assert [doc["kind"] for doc in documents] == ["Namespace", "Deployment"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifests(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        manifest = tmp_path / "bad.yaml"
        manifest.write_text("kind: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_manifests(manifest)


class TestClassifyManifests:
    """Test cases for classify_manifests."""

    def test_split(self, registry):
        documents = [
            {"apiVersion": "apps/v1", "kind": "Deployment"},
            {"apiVersion": "example.com/v1", "kind": "Widget"},
            {"kind": "Pod"},
        ]
        workloads, other = classify_manifests(documents, registry)
        assert workloads == [documents[0]]
        assert other == documents[1:]
