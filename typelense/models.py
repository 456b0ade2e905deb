"""Core data models shared across typelense components."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


class MonorepoType(str, Enum):
    """Monorepo conventions understood by the detectors."""

    NPM = "npm"
    PNPM = "pnpm"
    LERNA = "lerna"
    TURBO = "turbo"


@dataclass(frozen=True)
class PackageInfo:
    """A workspace member discovered from its package.json manifest."""

    name: str
    path: str
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class DetectionResult:
    """The convention selected for a project root and the packages it declares."""

    monorepo_type: MonorepoType
    packages: List[PackageInfo] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.monorepo_type.value,
            "packages": [package.to_dict() for package in self.packages],
        }


@dataclass
class TypeScriptError:
    """Single diagnostic produced by a TypeScript compiler run."""

    id: int
    package_name: str
    file_name: str
    error_code: int
    description: str

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TypeScriptError":
        """Build an error from camelCase or snake_case keys."""
        values: Dict[str, Any] = {}
        for attr, aliases in _ERROR_FIELD_ALIASES.items():
            key = next((alias for alias in aliases if alias in payload), None)
            if key is None:
                raise ValueError(f"TypeScript error record is missing '{aliases[0]}'")
            raw = payload[key]
            convert = _ERROR_FIELD_TYPES[attr]
            try:
                if raw is None or isinstance(raw, (list, dict)):
                    raise TypeError(f"{type(raw).__name__} is not a scalar")
                values[attr] = convert(raw)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"TypeScript error record has invalid '{key}'") from exc
        return cls(**values)


_ERROR_FIELD_ALIASES = {
    "id": ("id",),
    "package_name": ("packageName", "package_name"),
    "file_name": ("fileName", "file_name"),
    "error_code": ("errorCode", "error_code"),
    "description": ("description",),
}

_ERROR_FIELD_TYPES = {
    "id": int,
    "package_name": str,
    "file_name": str,
    "error_code": int,
    "description": str,
}

# Free-form run description mirrored into metadata.json.
RunMetadata = Mapping[str, Any]


__all__ = [
    "DetectionResult",
    "MonorepoType",
    "PackageInfo",
    "RunMetadata",
    "TypeScriptError",
]
