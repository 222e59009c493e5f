"""Tests for GraphService — build and check operations."""

from __future__ import annotations

import json
import subprocess
from pathlib import Path
from typing import Any

import pytest

from depcheck.config.settings import DepcheckSettings
from depcheck.infrastructure import golist
from depcheck.services.graph import GraphService
from tests.conftest import REPO, ROOT, VENDOR_ONE


def _settings_with(project_root: Path, toml: str) -> DepcheckSettings:
    (project_root / "depcheck.toml").write_text(toml, encoding="utf-8")
    return DepcheckSettings.from_cli(project_root=project_root)


class TestBuild:
    def test_dot_by_default(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).build(input_text=stream)
        assert result.ok
        assert result.op == "build_graph"
        assert result.data["format"] == "dot"
        assert result.data["content"].startswith("digraph deps {")
        assert result.data["node_count"] == 10
        assert result.data["edge_count"] == 9
        assert result.data["package_count"] == 10

    def test_json_format(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).build(input_text=stream, fmt="JSON")
        assert result.ok
        assert result.data["format"] == "json"
        payload = json.loads(result.data["content"])
        assert len(payload["nodes"]) == 10

    def test_invalid_format(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).build(input_text=stream, fmt="svg")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_FORMAT"
        assert result.error.detail["valid"] == ["dot", "json"]

    def test_missing_root(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).build(input_text=stream, roots=["invalid/root/import/path"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ROOT_NOT_FOUND"
        assert "no corresponding node found for the root name" in result.error.message
        assert result.error.detail["root"] == "invalid/root/import/path"

    def test_root_does_not_filter(self, settings: DepcheckSettings, stream: str) -> None:
        plain = GraphService(settings).build(input_text=stream)
        rooted = GraphService(settings).build(input_text=stream, roots=[ROOT])
        assert rooted.ok
        assert rooted.data["content"] == plain.data["content"]

    def test_excludes(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).build(
            input_text=stream, excludes=[f"{REPO}/pkg/three"], fmt="json"
        )
        ids = {n["id"] for n in json.loads(result.data["content"])["nodes"]}
        assert f"{REPO}/pkg/three" not in ids
        assert result.data["node_count"] == 9

    def test_invalid_packages(self, settings: DepcheckSettings) -> None:
        result = GraphService(settings).build(input_text="{not json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_PACKAGES"

    def test_config_roots_and_excludes_merge(self, project_root: Path, stream: str) -> None:
        settings = _settings_with(
            project_root,
            f'[graph]\nroots = ["{ROOT}"]\nexcludes = ["{REPO}/pkg/two"]\n',
        )
        result = GraphService(settings).build(
            input_text=stream,
            roots=[VENDOR_ONE, ROOT],
            excludes=[f"{REPO}/pkg/three"],
        )
        assert result.ok
        assert result.data["roots"] == [ROOT, VENDOR_ONE]
        assert result.data["excludes"] == [f"{REPO}/pkg/two", f"{REPO}/pkg/three"]
        assert result.data["node_count"] == 8

    def test_config_root_missing(self, project_root: Path, stream: str) -> None:
        settings = _settings_with(project_root, '[graph]\nroots = ["github.com/gone/repo/x"]\n')
        result = GraphService(settings).build(input_text=stream)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ROOT_NOT_FOUND"

    def test_config_output_settings(self, project_root: Path, stream: str) -> None:
        settings = _settings_with(project_root, '[output]\nformat = "dot"\nrankdir = "TB"\n')
        result = GraphService(settings).build(input_text=stream)
        assert "rankdir=TB;" in result.data["content"]

    def test_collects_when_no_input(
        self, project_root: Path, stream: str, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settings = _settings_with(
            project_root, '[collect]\npatterns = ["./cmd/..."]\ntags = ["e2e"]\ntimeout = 9.5\n'
        )
        seen: dict[str, Any] = {}

        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            seen.update(cmd=cmd, **kwargs)
            return subprocess.CompletedProcess(cmd, 0, stdout=stream, stderr="")

        monkeypatch.setattr(golist.subprocess, "run", fake_run)
        result = GraphService(settings).build()
        assert result.ok
        assert seen["cmd"] == ["go", "list", "-json", "-tags=e2e", "./cmd/..."]
        assert seen["cwd"] == project_root
        assert seen["timeout"] == 9.5

    def test_collects_in_directory(
        self,
        settings: DepcheckSettings,
        stream: str,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        module_dir = tmp_path / "module"
        module_dir.mkdir()
        seen: dict[str, Any] = {}

        def fake_run(cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess[str]:
            seen.update(kwargs)
            return subprocess.CompletedProcess(cmd, 0, stdout=stream, stderr="")

        monkeypatch.setattr(golist.subprocess, "run", fake_run)
        result = GraphService(settings).check(directory=module_dir)
        assert result.ok
        assert seen["cwd"] == module_dir

    def test_collect_failure(self, project_root: Path) -> None:
        settings = _settings_with(project_root, '[collect]\ngo_binary = "no-such-go-xyz"\n')
        result = GraphService(settings).build()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COLLECT_FAILED"


class TestCheck:
    def test_ok(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).check(input_text=stream, roots=[ROOT])
        assert result.ok
        assert result.op == "check_graph"
        assert result.data["node_count"] == 10
        assert "content" not in result.data
        assert result.warnings == []

    def test_missing_root(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).check(input_text=stream, roots=[f"{REPO}/missing"])
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ROOT_NOT_FOUND"

    def test_unknown_exclude_warns(self, settings: DepcheckSettings, stream: str) -> None:
        result = GraphService(settings).check(
            input_text=stream, excludes=["github.com/nobody/nothing/here", f"{REPO}/pkg/two"]
        )
        assert result.ok
        assert result.warnings == ["Exclude 'github.com/nobody/nothing/here' matched no package"]
