"""Tests for typelense.models."""

from __future__ import annotations

import dataclasses

import pytest

from typelense.models import MonorepoType, PackageInfo, TypeScriptError


def test_type_script_error_from_camel_case_record() -> None:
    error = TypeScriptError.from_dict(
        {
            "id": 4,
            "packageName": "@acme/web",
            "fileName": "src/index.tsx",
            "errorCode": 2307,
            "description": "Cannot find module 'x'.",
        }
    )

    assert error == TypeScriptError(4, "@acme/web", "src/index.tsx", 2307, "Cannot find module 'x'.")


def test_type_script_error_from_snake_case_record() -> None:
    error = TypeScriptError.from_dict(
        {"id": "9", "package_name": "api", "file_name": "a.ts", "error_code": "1005", "description": "';' expected."}
    )

    assert error.id == 9
    assert error.error_code == 1005


def test_type_script_error_requires_every_field() -> None:
    with pytest.raises(ValueError, match="errorCode"):
        TypeScriptError.from_dict({"id": 1, "packageName": "a", "fileName": "b", "description": "c"})


@pytest.mark.parametrize(
    ("field", "value"),
    [("id", None), ("errorCode", [1]), ("errorCode", "TS2307"), ("packageName", None)],
)
def test_type_script_error_rejects_invalid_values(field: str, value: object) -> None:
    record = {"id": 1, "packageName": "a", "fileName": "b", "errorCode": 2, "description": "c"}
    record[field] = value

    with pytest.raises(ValueError, match=f"invalid '{field}'"):
        TypeScriptError.from_dict(record)


def test_package_info_is_immutable() -> None:
    package = PackageInfo(name="a", path="/repo/packages/a")

    with pytest.raises(dataclasses.FrozenInstanceError):
        package.name = "b"  # type: ignore[misc]


def test_monorepo_type_values() -> None:
    assert [member.value for member in MonorepoType] == ["npm", "pnpm", "lerna", "turbo"]
