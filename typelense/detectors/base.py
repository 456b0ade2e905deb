"""Base class for monorepo convention detectors."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional

from ..logging import get_logger
from ..models import MonorepoType, PackageInfo

MANIFEST_NAME = "package.json"

logger = get_logger("detectors")


class BaseDetector(ABC):
    """Contract for detectors that recognise one monorepo convention.

    ``detect`` answers whether the convention applies to a project root and must
    never raise. ``get_packages`` lists the workspace members declared by the
    convention; malformed or missing configuration yields an empty list.
    """

    name: MonorepoType

    @abstractmethod
    def detect(self, root_path: str | Path) -> bool:
        """Return True when this convention's markers exist at ``root_path``."""

    @abstractmethod
    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        """Return one entry per named manifest matched by the workspace globs."""

    # ------------------------------------------------------------------
    # Shared helpers

    @staticmethod
    def _root(root_path: str | Path) -> Path:
        return Path(root_path).expanduser().resolve()

    @staticmethod
    def _file_exists(path: Path) -> bool:
        try:
            return path.is_file()
        except OSError:
            return False

    @staticmethod
    def _read_json(path: Path) -> Optional[Any]:
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return None

    def _collect_packages(self, root: Path, patterns: Iterable[str]) -> List[PackageInfo]:
        packages: List[PackageInfo] = []
        for pattern in patterns:
            for manifest in _iter_manifests(root, pattern):
                package = self._package_from_manifest(manifest)
                if package is not None:
                    packages.append(package)
        logger.debug("%s detector found %d packages under %s", self.name.value, len(packages), root)
        return packages

    def _package_from_manifest(self, manifest: Path) -> Optional[PackageInfo]:
        data = self._read_json(manifest)
        if not isinstance(data, dict):
            logger.debug("Skipping unreadable manifest %s", manifest)
            return None
        name = data.get("name")
        if not isinstance(name, str) or not name:
            logger.debug("Skipping manifest without a name: %s", manifest)
            return None
        version = data.get("version")
        return PackageInfo(
            name=name,
            path=str(manifest.parent),
            version=version if isinstance(version, str) else None,
        )


def _iter_manifests(root: Path, pattern: str) -> Iterator[Path]:
    """Yield the package.json files matched by one workspace pattern."""
    cleaned = _normalise_pattern(pattern)
    if cleaned is None:
        return
    glob = f"{cleaned}/{MANIFEST_NAME}" if cleaned else MANIFEST_NAME
    try:
        matches = sorted(root.glob(glob))
    except (ValueError, NotImplementedError, OSError) as exc:
        logger.warning("Ignoring workspace pattern %r: %s", pattern, exc)
        return
    for match in matches:
        if match.is_file():
            yield match


def _normalise_pattern(pattern: object) -> Optional[str]:
    if not isinstance(pattern, str):
        logger.debug("Ignoring non-string workspace pattern %r", pattern)
        return None
    cleaned = pattern.strip()
    if cleaned.startswith("!"):
        # Exclusion globs never contribute packages of their own.
        logger.debug("Ignoring exclusion pattern %r", pattern)
        return None
    if Path(cleaned).is_absolute():
        logger.warning("Ignoring absolute workspace pattern %r", pattern)
        return None
    while cleaned.startswith("./"):
        cleaned = cleaned[2:]
    cleaned = cleaned.rstrip("/")
    if cleaned == ".":
        cleaned = ""
    return cleaned


def patterns_from(value: Any) -> List[str]:
    """Return the string entries of a workspace pattern list."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


__all__ = ["BaseDetector", "MANIFEST_NAME", "patterns_from"]
