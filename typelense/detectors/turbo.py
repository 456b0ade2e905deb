"""Turborepo detector.

Turbo has no workspace syntax of its own: it runs on top of an NPM or PNPM
workspace, so both detection and package listing go through those detectors.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

from ..models import MonorepoType, PackageInfo
from .base import BaseDetector
from .npm import NpmDetector
from .pnpm import PnpmDetector

TURBO_FILE = "turbo.json"


class TurboDetector(BaseDetector):
    name = MonorepoType.TURBO

    def __init__(
        self,
        npm: NpmDetector | None = None,
        pnpm: PnpmDetector | None = None,
    ) -> None:
        self._npm = npm or NpmDetector()
        self._pnpm = pnpm or PnpmDetector()

    def detect(self, root_path: str | Path) -> bool:
        root = self._root(root_path)
        if not self._file_exists(root / TURBO_FILE):
            return False
        return self._npm.detect(root) or self._pnpm.detect(root)

    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        root = self._root(root_path)
        if self._pnpm.detect(root):
            return self._pnpm.get_packages(root)
        return self._npm.get_packages(root)
