"""Shared pytest fixtures and test helpers for depcheck tests."""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from depcheck.config.discovery import CONFIG_ENV_VAR
from depcheck.config.settings import DepcheckSettings
from depcheck.domain.packages import Package, PackageList

REPO = "github.com/test/repo"
ROOT = f"{REPO}/root"
VENDOR_ONE = f"{REPO}/vendor/github.com/testvendor/vendor_one"
UNLISTED = f"{REPO}/no/node/should/exist/for/this/pkg"


def pkg(import_path: str, *imports: str) -> Package:
    """Build a Package whose Dir mirrors its import path."""
    return Package(Dir=f"/path/to/{import_path}", ImportPath=import_path, Imports=list(imports))


def sample_packages() -> PackageList:
    """A small repository with a vendored package and a stdlib import.

    ``unique/unique_vendor_two`` is not reachable from ``root`` but still
    exists in the codebase, and it imports a package that was never listed.
    """
    return PackageList(
        packages=(
            pkg(ROOT, f"{REPO}/pkg/one"),
            pkg(
                f"{REPO}/pkg/one",
                f"{REPO}/pkg/two",
                f"{REPO}/pkg/three",
                f"{REPO}/pkg/depends_on_fmt",
            ),
            pkg(f"{REPO}/pkg/two", VENDOR_ONE),
            pkg(f"{REPO}/pkg/three", f"{REPO}/shared/shared_one"),
            pkg(
                f"{REPO}/pkg/depends_on_fmt",
                "fmt",
                f"{REPO}/unique/unique_nonvendored_one",
            ),
            pkg(f"{REPO}/unique/unique_nonvendored_one"),
            pkg(f"{REPO}/shared/shared_one"),
            pkg(
                VENDOR_ONE,
                f"{REPO}/unique/unique_vendor_one",
                f"{REPO}/shared/shared_one",
            ),
            pkg(f"{REPO}/unique/unique_vendor_one"),
            pkg(f"{REPO}/unique/unique_vendor_two", UNLISTED),
        )
    )


def go_list_stream(packages: Iterable[Package]) -> str:
    """Render packages the way ``go list -json`` does: concatenated objects."""
    chunks: list[str] = []
    for p in packages:
        obj: dict[str, Any] = {"Dir": p.dir, "ImportPath": p.import_path, "Name": "x"}
        if p.imports:
            obj["Imports"] = list(p.imports)
        chunks.append(json.dumps(obj, indent="\t"))
    return "\n".join(chunks) + "\n"


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's DEPCHECK_CONFIG from leaking into tests."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def packages() -> PackageList:
    return sample_packages()


@pytest.fixture
def stream() -> str:
    """The sample packages as a go list -json stream."""
    return go_list_stream(sample_packages().packages)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project directory set as CWD, with no config file."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> DepcheckSettings:
    return DepcheckSettings.from_cli(project_root=project_root)
