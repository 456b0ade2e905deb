"""Tab-separated serialisation of TypeScript error records."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..models import TypeScriptError

TSV_HEADERS = ("id", "package_name", "file_name", "error_code", "description")


def escape_field(value: str) -> str:
    """Make a free-text value safe for a single TSV cell."""
    return value.replace("\t", " ").replace("\n", " ").replace("\r", "")


def render_tsv(errors: Iterable[TypeScriptError]) -> str:
    """Return the header row plus one row per error, in input order."""
    rows: List[str] = ["\t".join(TSV_HEADERS)]
    for error in errors:
        row = (
            str(error.id),
            escape_field(error.package_name),
            escape_field(error.file_name),
            str(error.error_code),
            escape_field(error.description),
        )
        rows.append("\t".join(row))
    return "\n".join(rows)


class TsvGenerator:
    """Writes ``errors.tsv`` files."""

    def generate(self, errors: Iterable[TypeScriptError], output_path: str | Path) -> Path:
        # Render fully before touching the file so a failure never leaves a partial write.
        content = render_tsv(errors)
        path = Path(output_path)
        path.write_text(content, encoding="utf-8", newline="")
        return path


def generate_tsv(errors: Iterable[TypeScriptError], output_path: str | Path) -> Path:
    return TsvGenerator().generate(errors, output_path)


__all__ = ["TSV_HEADERS", "TsvGenerator", "escape_field", "generate_tsv", "render_tsv"]
