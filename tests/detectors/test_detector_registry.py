"""Tests for detector discovery and selection."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from typelense.detectors import (
    BaseDetector,
    LernaDetector,
    NpmDetector,
    PnpmDetector,
    TurboDetector,
    detect_monorepo,
    discover_detectors,
    select_detector,
)
from typelense.models import MonorepoType, PackageInfo
from tests._fixtures.workspace_builder import WorkspaceBuilder


def test_discover_detectors_places_turbo_first() -> None:
    detectors = discover_detectors()
    kinds = [type(detector) for detector in detectors[:4]]

    assert kinds == [TurboDetector, PnpmDetector, LernaDetector, NpmDetector]


def test_discover_detectors_honours_enabled_names() -> None:
    detectors = discover_detectors(["NPM", "lerna"])

    assert [type(detector) for detector in detectors] == [LernaDetector, NpmDetector]


def test_discover_detectors_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="rush"):
        discover_detectors(["npm", "rush"])


def test_turbo_pnpm_repo_is_classified_as_turbo(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("turbo.json", {})
    workspace.write({"pnpm-workspace.yaml": "packages:\n  - 'packages/*'\n"})
    workspace.package("packages/lib", "lib")

    detector = select_detector(workspace.path())

    assert isinstance(detector, TurboDetector)


def test_select_detector_returns_none_for_unrecognised_root(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("package.json", {"name": "plain"})

    assert select_detector(workspace.path()) is None
    assert detect_monorepo(workspace.path()) is None


def test_detect_monorepo_lists_packages(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("lerna.json", {"packages": ["modules/*"]})
    lib_dir = workspace.package("modules/lib", "lib", "3.1.4")

    result = detect_monorepo(workspace.path())

    assert result is not None
    assert result.monorepo_type is MonorepoType.LERNA
    assert result.to_dict() == {
        "type": "lerna",
        "packages": [{"name": "lib", "path": str(lib_dir), "version": "3.1.4"}],
    }


def test_detect_monorepo_requires_existing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        detect_monorepo(tmp_path / "nope")


class _ExplodingDetector(BaseDetector):
    name = MonorepoType.NPM

    def detect(self, root_path: str | Path) -> bool:
        raise RuntimeError("boom")

    def get_packages(self, root_path: str | Path) -> List[PackageInfo]:
        return []


def test_select_detector_skips_failing_detectors(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("lerna.json", {})

    detector = select_detector(workspace.path(), [_ExplodingDetector(), LernaDetector()])

    assert isinstance(detector, LernaDetector)
