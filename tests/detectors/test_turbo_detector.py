"""Tests for the Turbo detector and its delegation rules."""

from __future__ import annotations

from typelense.detectors import NpmDetector, PnpmDetector, TurboDetector
from tests._fixtures.workspace_builder import WorkspaceBuilder


def test_turbo_alone_is_not_detected(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("turbo.json", {"pipeline": {}})

    assert TurboDetector().detect(workspace.path()) is False


def test_turbo_requires_marker(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("package.json", {"workspaces": ["apps/*"]})

    assert TurboDetector().detect(workspace.path()) is False


def test_turbo_with_npm_workspaces_delegates_to_npm(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("turbo.json", {"tasks": {}})
    workspace.write_json("package.json", {"workspaces": ["apps/*"]})
    workspace.package("apps/docs", "docs")
    workspace.package("apps/web", "web")

    detector = TurboDetector()

    assert detector.detect(workspace.path()) is True
    assert detector.get_packages(workspace.path()) == NpmDetector().get_packages(workspace.path())


def test_turbo_prefers_pnpm_when_both_apply(workspace: WorkspaceBuilder) -> None:
    workspace.write_json("turbo.json", {})
    workspace.write_json("package.json", {"workspaces": ["apps/*"]})
    workspace.write({"pnpm-workspace.yaml": "packages:\n  - 'packages/*'\n"})
    workspace.package("apps/web", "web")
    workspace.package("packages/lib", "lib")

    detector = TurboDetector()
    packages = detector.get_packages(workspace.path())

    assert detector.detect(workspace.path()) is True
    assert packages == PnpmDetector().get_packages(workspace.path())
    assert [package.name for package in packages] == ["lib"]
