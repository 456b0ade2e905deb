"""Lerna detector (``lerna.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..logging import get_logger
from ..models import MonorepoType, PackageInfo
from .base import BaseDetector, patterns_from

LERNA_FILE = "lerna.json"
DEFAULT_PATTERNS = ("packages/*",)

logger = get_logger("detectors.lerna")


class LernaDetector(BaseDetector):
    """Detects Lerna monorepos; ``packages`` defaults to ``packages/*``."""

    name = MonorepoType.LERNA

    def detect(self, root_path: str | Path) -> bool:
        return self._file_exists(self._root(root_path) / LERNA_FILE)

    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        root = self._root(root_path)
        config = self._read_json(root / LERNA_FILE)
        if not isinstance(config, dict):
            logger.debug("No readable %s under %s", LERNA_FILE, root)
            return []

        # A null "packages" means the key is absent.
        if config.get("packages") is not None:
            patterns = patterns_from(config["packages"])
        else:
            patterns = list(DEFAULT_PATTERNS)
        return self._collect_packages(root, patterns)
