"""PNPM workspaces detector (``pnpm-workspace.yaml``)."""

from __future__ import annotations

from pathlib import Path
from typing import List

import yaml

from ..logging import get_logger
from ..models import MonorepoType, PackageInfo
from .base import BaseDetector, patterns_from

WORKSPACE_FILE = "pnpm-workspace.yaml"

logger = get_logger("detectors.pnpm")


class PnpmDetector(BaseDetector):
    """Detects PNPM workspaces and resolves their ``packages`` globs."""

    name = MonorepoType.PNPM

    def detect(self, root_path: str | Path) -> bool:
        return self._file_exists(self._root(root_path) / WORKSPACE_FILE)

    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        root = self._root(root_path)
        workspace_file = root / WORKSPACE_FILE
        if not self._file_exists(workspace_file):
            return []

        try:
            data = yaml.safe_load(workspace_file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            logger.warning("Error reading %s: %s", workspace_file, exc)
            return []

        if not isinstance(data, dict):
            return []
        patterns = patterns_from(data.get("packages"))
        if not patterns:
            return []
        return self._collect_packages(root, patterns)
