"""Helper utilities for constructing temporary JavaScript projects in tests."""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any, Mapping


class WorkspaceBuilder:
    """Writes manifests and config files into a throwaway project root."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the project."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_json(self, relative: str, payload: Any) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload), encoding="utf-8")

    def package(self, directory: str, name: str | None, version: str | None = None) -> Path:
        """Create `<directory>/package.json`, omitting fields passed as None."""
        manifest: dict[str, str] = {}
        if name is not None:
            manifest["name"] = name
        if version is not None:
            manifest["version"] = version
        self.write_json(f"{directory}/package.json", manifest)
        return (self.root / directory).resolve()

    def path(self) -> Path:
        return self.root


__all__ = ["WorkspaceBuilder"]
