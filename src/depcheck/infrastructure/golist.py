"""Package collector — decode or produce ``go list -json`` output.

``go list -json`` writes one JSON object per package, concatenated without
separators. :func:`parse_package_stream` decodes that stream into a
:class:`PackageList`; :func:`collect_packages` runs the tool first.
"""

from __future__ import annotations

import json
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from depcheck.domain.errors import CollectorError, PackageListError
from depcheck.domain.packages import Package, PackageList

logger = logging.getLogger(__name__)

_DECODER = json.JSONDecoder()


def _decode_stream(raw: str) -> list[Any]:
    """Split a stream of concatenated JSON values."""
    values: list[Any] = []
    pos = 0
    end = len(raw)
    while True:
        # Skip inter-object whitespace.
        while pos < end and raw[pos].isspace():
            pos += 1
        if pos >= end:
            return values
        try:
            value, pos = _DECODER.raw_decode(raw, pos)
        except json.JSONDecodeError as exc:
            msg = f"Invalid package JSON at offset {exc.pos}: {exc.msg}"
            raise PackageListError(msg) from exc
        values.append(value)


def parse_package_stream(raw: str) -> PackageList:
    """Decode ``go list -json`` output into a PackageList.

    Accepts either the native concatenated-object stream or a single JSON
    array of package objects.

    Raises:
        PackageListError: On malformed JSON, non-object entries, missing
            ``ImportPath`` fields, or duplicate import paths.
    """
    values = _decode_stream(raw)
    if len(values) == 1 and isinstance(values[0], list):
        values = values[0]

    packages: list[Package] = []
    for index, value in enumerate(values):
        if not isinstance(value, dict):
            msg = f"Package entry {index} is {type(value).__name__}, expected an object"
            raise PackageListError(msg)
        try:
            packages.append(Package.model_validate(value))
        except ValidationError as exc:
            msg = f"Invalid package entry {index}: {exc.errors()[0]['msg']}"
            raise PackageListError(msg) from exc

    try:
        return PackageList(packages=tuple(packages))
    except ValidationError as exc:
        raise PackageListError(exc.errors()[0]["msg"]) from exc


def build_go_list_command(
    *,
    go_binary: str = "go",
    patterns: Sequence[str] = ("./...",),
    tags: Sequence[str] = (),
) -> list[str]:
    """Return the argv for listing *patterns* as JSON."""
    cmd = [go_binary, "list", "-json"]
    if tags:
        cmd.append(f"-tags={','.join(tags)}")
    cmd.extend(patterns)
    return cmd


def collect_packages(
    cwd: Path,
    *,
    go_binary: str = "go",
    patterns: Sequence[str] = ("./...",),
    tags: Sequence[str] = (),
    timeout: float | None = None,
) -> PackageList:
    """Run ``go list -json`` in *cwd* and decode its output.

    Raises:
        CollectorError: If the binary is missing, times out, or exits non-zero.
        PackageListError: If its output cannot be decoded.
    """
    cmd = build_go_list_command(go_binary=go_binary, patterns=patterns, tags=tags)
    logger.debug("Running %s in %s", " ".join(cmd), cwd)
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except FileNotFoundError as exc:
        msg = f"Package listing tool not found: {go_binary}"
        raise CollectorError(msg) from exc
    except subprocess.TimeoutExpired as exc:
        msg = f"'{' '.join(cmd)}' timed out after {timeout}s"
        raise CollectorError(msg) from exc
    except subprocess.CalledProcessError as exc:
        msg = f"'{' '.join(cmd)}' exited with status {exc.returncode}"
        raise CollectorError(msg, stderr=exc.stderr or "") from exc

    packages = parse_package_stream(proc.stdout)
    logger.debug("Collected %d packages", len(packages))
    return packages
