"""Package metadata models.

``Package`` mirrors one object of ``go list -json`` output, restricted to the
fields the graph builder reads. ``PackageList`` is the universe of known
packages for one build.

INVARIANT: ImportPath is unique within a PackageList.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Package(BaseModel):
    """A single source package with its literal import strings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    dir: str = Field(default="", alias="Dir")
    import_path: str = Field(alias="ImportPath")
    # Literal import strings as written in source, stdlib included.
    imports: tuple[str, ...] = Field(default=(), alias="Imports")

    @field_validator("imports", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return () if value is None else value


class PackageList(BaseModel):
    """An unordered collection of packages, unique by import path."""

    model_config = ConfigDict(frozen=True)

    packages: tuple[Package, ...] = ()

    @model_validator(mode="after")
    def _check_unique_import_paths(self) -> PackageList:
        seen: set[str] = set()
        for pkg in self.packages:
            if pkg.import_path in seen:
                msg = f"duplicate import path in package list: {pkg.import_path}"
                raise ValueError(msg)
            seen.add(pkg.import_path)
        return self

    def __len__(self) -> int:
        return len(self.packages)

    def by_import_path(self) -> dict[str, Package]:
        """Return a lookup from import path to package."""
        return {pkg.import_path: pkg for pkg in self.packages}
