"""Timestamped report directories holding errors.tsv and metadata.json."""

from __future__ import annotations

import json
import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from ..logging import get_logger
from ..models import RunMetadata, TypeScriptError
from .html import find_templates_dir, generate_single_file_html
from .tsv import TsvGenerator

OUTPUT_ROOT = ".typelense"
TSV_FILENAME = "errors.tsv"
METADATA_FILENAME = "metadata.json"

logger = get_logger("generators.output")


def generate_output_path(base_dir: str | Path, now: Optional[datetime] = None) -> Path:
    """Return ``<base_dir>/.typelense/<YYYY-MM-DD>-<HH-MM-SS>`` for the local time.

    Two runs within the same second map to the same directory.
    """
    moment = now or datetime.now()
    return Path(base_dir) / OUTPUT_ROOT / moment.strftime("%Y-%m-%d-%H-%M-%S")


def copy_template_files(output_dir: Path, templates_dir: Path | None = None) -> bool:
    """Copy the viewer template tree into ``output_dir``; False when skipped or failed."""
    source = templates_dir
    try:
        if source is None:
            source = find_templates_dir()
        if source is None:
            logger.debug("No templates directory found; report will not include the viewer")
            return False
        shutil.copytree(source, output_dir, dirs_exist_ok=True)
    except OSError as exc:
        logger.warning("Failed to copy templates from %s: %s", source or "bundled location", exc)
        return False
    return True


def generate_tsv_with_metadata(
    errors: Iterable[TypeScriptError],
    metadata: RunMetadata,
    base_dir: str | Path,
    web: bool = False,
    *,
    templates_dir: Path | None = None,
    now: Optional[datetime] = None,
) -> Path:
    """Materialise a report directory and return its path.

    Writing ``errors.tsv`` and ``metadata.json`` must succeed and any failure
    propagates. Template copying and HTML inlining (``web=True``) only log.
    """
    error_list = list(errors)
    output_dir = generate_output_path(base_dir, now)
    output_dir.mkdir(parents=True, exist_ok=True)

    if web:
        copy_template_files(output_dir, templates_dir)

    TsvGenerator().generate(error_list, output_dir / TSV_FILENAME)

    metadata_path = output_dir / METADATA_FILENAME
    metadata_path.write_text(
        json.dumps(dict(metadata), indent=2, ensure_ascii=False), encoding="utf-8"
    )

    if web:
        generate_single_file_html(error_list, metadata, output_dir, templates_dir=templates_dir)

    logger.info("Wrote %d errors to %s", len(error_list), output_dir)
    return output_dir


__all__ = [
    "METADATA_FILENAME",
    "OUTPUT_ROOT",
    "TSV_FILENAME",
    "copy_template_files",
    "generate_output_path",
    "generate_tsv_with_metadata",
]
