"""Tests for the PNPM workspaces detector."""

from __future__ import annotations

from typelense.detectors import PnpmDetector
from tests._fixtures.workspace_builder import WorkspaceBuilder


def test_pnpm_reads_workspace_packages(workspace: WorkspaceBuilder) -> None:
    workspace.write(
        {
            "pnpm-workspace.yaml": """
                packages:
                  - "packages/*"
                  - "tools/cli"
            """,
        }
    )
    core_dir = workspace.package("packages/core", "@acme/core", "2.0.0")
    cli_dir = workspace.package("tools/cli", "@acme/cli")

    detector = PnpmDetector()
    packages = detector.get_packages(workspace.path())

    assert detector.detect(workspace.path()) is True
    assert [(package.name, package.path, package.version) for package in packages] == [
        ("@acme/core", str(core_dir), "2.0.0"),
        ("@acme/cli", str(cli_dir), None),
    ]


def test_pnpm_absent_workspace_file(workspace: WorkspaceBuilder) -> None:
    workspace.package("packages/core", "core")

    detector = PnpmDetector()

    assert detector.detect(workspace.path()) is False
    assert detector.get_packages(workspace.path()) == []


def test_pnpm_empty_or_missing_packages(workspace: WorkspaceBuilder) -> None:
    workspace.write({"pnpm-workspace.yaml": "packages: []\n"})
    workspace.package("packages/core", "core")

    assert PnpmDetector().get_packages(workspace.path()) == []

    workspace.write({"pnpm-workspace.yaml": "catalog:\n  react: ^18.0.0\n"})

    assert PnpmDetector().get_packages(workspace.path()) == []


def test_pnpm_unparsable_yaml_returns_empty(workspace: WorkspaceBuilder, caplog) -> None:
    workspace.write({"pnpm-workspace.yaml": "packages: [\"packages/*\"\n  - : :\n"})
    workspace.package("packages/core", "core")

    with caplog.at_level("WARNING", logger="typelense"):
        packages = PnpmDetector().get_packages(workspace.path())

    assert packages == []
    assert "pnpm-workspace.yaml" in caplog.text


def test_pnpm_supports_recursive_globs(workspace: WorkspaceBuilder) -> None:
    workspace.write({"pnpm-workspace.yaml": "packages:\n  - 'apps/**'\n"})
    workspace.package("apps/web", "web")
    workspace.package("apps/nested/admin", "admin")

    names = sorted(package.name for package in PnpmDetector().get_packages(workspace.path()))

    assert names == ["admin", "web"]
