"""NPM workspaces detector (``workspaces`` in the root package.json)."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional

from ..models import MonorepoType, PackageInfo
from .base import MANIFEST_NAME, BaseDetector, patterns_from


class NpmDetector(BaseDetector):
    """Detects projects declaring workspaces in their root package.json."""

    name = MonorepoType.NPM

    def detect(self, root_path: str | Path) -> bool:
        return self._workspace_patterns(self._root(root_path)) is not None

    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        root = self._root(root_path)
        patterns = self._workspace_patterns(root)
        if not patterns:
            return []
        return self._collect_packages(root, patterns)

    def _workspace_patterns(self, root: Path) -> Optional[List[str]]:
        """Return the declared globs, or None when no workspaces field exists."""
        manifest = root / MANIFEST_NAME
        if not self._file_exists(manifest):
            return None
        data = self._read_json(manifest)
        if not isinstance(data, dict):
            return None
        return _workspaces_field(data.get("workspaces"))


def _workspaces_field(value: Any) -> Optional[List[str]]:
    # Either ["packages/*"] or {"packages": ["packages/*"], "nohoist": [...]}.
    if isinstance(value, list):
        return patterns_from(value)
    if isinstance(value, dict) and isinstance(value.get("packages"), list):
        return patterns_from(value["packages"])
    return None
