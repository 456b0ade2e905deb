"""Monorepo detectors and the priority-ordered selector."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..logging import get_logger
from ..models import DetectionResult
from .base import BaseDetector
from .lerna import LernaDetector
from .npm import NpmDetector
from .pnpm import PnpmDetector
from .turbo import TurboDetector

_ENTRY_POINT_GROUP = "typelense.detectors"

# Priority order. Composite detectors must precede the detectors they delegate
# to, otherwise a Turbo + PNPM repository is reported as plain PNPM.
_BUILTIN_FACTORIES: dict[str, Callable[[], BaseDetector]] = {
    "turbo": TurboDetector,
    "pnpm": PnpmDetector,
    "lerna": LernaDetector,
    "npm": NpmDetector,
}

logger = get_logger("detectors")


def discover_detectors(enabled: Sequence[str] | None = None) -> List[BaseDetector]:
    """Return instantiated detectors in priority order, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    detectors: List[BaseDetector] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], BaseDetector]) -> None:
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, BaseDetector):
            raise TypeError(f"Detector factory for '{name}' did not return a BaseDetector instance")
        detectors.append(instance)
        seen.add(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load detector entry point '{entry.name}': {exc}") from exc

        def _factory(obj: object = loaded) -> BaseDetector:
            return _coerce_detector(obj)

        _add(entry.name, _factory)

    if enabled_set:
        missing = enabled_set - seen
        if missing:
            raise ValueError(f"Unknown detectors requested: {', '.join(sorted(missing))}")

    return detectors


def select_detector(
    root_path: str | Path,
    detectors: Optional[Iterable[BaseDetector]] = None,
) -> Optional[BaseDetector]:
    """Return the first detector whose convention applies, or None."""
    candidates = list(detectors) if detectors is not None else discover_detectors()
    for detector in candidates:
        try:
            matched = detector.detect(root_path)
        except Exception as exc:  # plugin detectors may not honour the no-raise contract
            logger.warning("Detector %s failed on %s: %s", type(detector).__name__, root_path, exc)
            continue
        if matched:
            logger.debug("Selected %s detector for %s", detector.name.value, root_path)
            return detector
    logger.info("No supported monorepo configuration found at %s", root_path)
    return None


def detect_monorepo(
    root_path: str | Path,
    detectors: Optional[Iterable[BaseDetector]] = None,
) -> Optional[DetectionResult]:
    """Select a detector for ``root_path`` and list the packages it declares."""
    root = Path(root_path).expanduser().resolve()
    if not root.is_dir():
        raise FileNotFoundError(f"Project root not found: {root}")

    detector = select_detector(root, detectors)
    if detector is None:
        return None
    packages = detector.get_packages(root)
    logger.info("Detected %s monorepo with %d packages", detector.name.value, len(packages))
    return DetectionResult(monorepo_type=detector.name, packages=packages)


def _coerce_detector(obj: object) -> BaseDetector:
    if isinstance(obj, BaseDetector):
        return obj
    if isinstance(obj, type) and issubclass(obj, BaseDetector):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, BaseDetector):
            return instance
    raise TypeError("Detector entry point must be a BaseDetector subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "BaseDetector",
    "LernaDetector",
    "NpmDetector",
    "PnpmDetector",
    "TurboDetector",
    "detect_monorepo",
    "discover_detectors",
    "select_detector",
]
