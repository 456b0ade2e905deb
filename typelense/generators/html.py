"""Single-file HTML report built from the bundled viewer templates.

The viewer is shipped as a Vite build: ``index.html`` plus an ``assets``
directory with one stylesheet, a ``vendor`` chunk and an entry chunk. This
module splices those assets into the page so the report opens from disk with
no sibling files. The splice is purely textual and only understands a single
flat ``export{a as b}`` / ``import{b as c}from"..."`` clause; anything else
leaves the page pointing at the external script.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from jinja2 import DictLoader, Environment

from ..logging import get_logger
from ..models import RunMetadata, TypeScriptError
from .tsv import render_tsv

TEMPLATES_DIR_NAME = "templates"
ASSETS_DIR_NAME = "assets"
SEARCH_LEVELS = 3

_MODULE_DIR = Path(__file__).resolve().parent

_STYLESHEET_LINK = re.compile(r'<link rel="stylesheet"[^>]+>')
_MODULE_SCRIPT = re.compile(r'<script type="module" crossorigin src="[^"]+"></script>')
_MODULE_PRELOAD = re.compile(r'<link rel="modulepreload"[^>]+>')
_VENDOR_EXPORT = re.compile(r"export\{([^}]+)\};?\s*\Z")
_ENTRY_IMPORT = re.compile(r'import\{([^}]+)\}from"[^"]+";?')
_ALIAS_SPLIT = re.compile(r"\s+as\s+")

DATA_PLACEHOLDER = "window.__TS_ERROR_DATA__ = ``;"

_FRAGMENTS = {
    "style.html": "<style>{{ css }}</style>",
    "script.html": "<script>{{ body }}</script>",
    "bundle.js": (
        "\n// Vendor\n{{ vendor }}\n"
        "// Mappings\n{{ bindings | join('\\n') }}\n"
        "// Index\n{{ entry }}\n"
    ),
    "data.js": "window.__TS_ERROR_DATA__ = `{{ data }}`;",
}

_env = Environment(loader=DictLoader(_FRAGMENTS), autoescape=False, keep_trailing_newline=True)

logger = get_logger("generators.html")


@dataclass
class TemplateAssets:
    """Raw text of the viewer template files."""

    html: str
    css: Optional[str] = None
    vendor_js: Optional[str] = None
    entry_js: Optional[str] = None


def find_templates_dir(start: Path | None = None, levels: int = SEARCH_LEVELS) -> Optional[Path]:
    """Look for a ``templates`` directory in ``start`` and its ancestors."""
    current = (start or _MODULE_DIR).resolve()
    for _ in range(levels):
        candidate = current / TEMPLATES_DIR_NAME
        if candidate.is_dir():
            return candidate
        current = current.parent
    return None


def load_template_assets(templates_dir: Path) -> TemplateAssets:
    html = (templates_dir / "index.html").read_text(encoding="utf-8")
    assets_dir = templates_dir / ASSETS_DIR_NAME
    files = sorted(path for path in assets_dir.iterdir() if path.is_file())

    css_file = next((path for path in files if path.suffix == ".css"), None)
    js_files = [path for path in files if path.suffix == ".js"]
    vendor_file = next((path for path in js_files if "vendor" in path.name), None)
    entry_file = next((path for path in js_files if "vendor" not in path.name), None)

    return TemplateAssets(
        html=html,
        css=_read_optional(css_file),
        vendor_js=_read_optional(vendor_file),
        entry_js=_read_optional(entry_file),
    )


def inline_stylesheet(html: str, css: str) -> str:
    """Swap the first stylesheet link for an inline ``<style>`` block."""
    style = _env.get_template("style.html").render(css=css)
    return _STYLESHEET_LINK.sub(lambda _: style, html, count=1)


def parse_vendor_exports(vendor_js: str) -> Optional[Dict[str, str]]:
    """Map exported name -> local name from the vendor chunk's trailing export clause."""
    match = _VENDOR_EXPORT.search(vendor_js)
    if match is None:
        return None
    exports: Dict[str, str] = {}
    for local, exported in _split_specifiers(match.group(1)):
        exports[exported] = local
    return exports


def parse_entry_imports(entry_js: str) -> Optional[List[Tuple[str, str]]]:
    """Return ``(imported, local)`` pairs from the entry chunk's import clause."""
    match = _ENTRY_IMPORT.search(entry_js)
    if match is None:
        return None
    return list(_split_specifiers(match.group(1)))


def build_bindings(exports: Dict[str, str], imports: Iterable[Tuple[str, str]]) -> List[str]:
    """Alias each imported local to the vendor local it refers to."""
    bindings: List[str] = []
    for imported, local in imports:
        vendor_local = exports.get(imported)
        if vendor_local is None:
            continue
        if vendor_local == local:
            # Already bound by the vendor code in the shared scope.
            continue
        bindings.append(f"const {local} = {vendor_local};")
    return bindings


def merge_bundles(vendor_js: str, entry_js: str) -> Optional[str]:
    """Flatten the two chunks into one classic script body, or None if unsupported."""
    exports = parse_vendor_exports(vendor_js)
    imports = parse_entry_imports(entry_js)
    if exports is None or imports is None:
        return None

    return _env.get_template("bundle.js").render(
        vendor=_VENDOR_EXPORT.sub("", vendor_js, count=1),
        bindings=build_bindings(exports, imports),
        entry=_ENTRY_IMPORT.sub("", entry_js, count=1),
    )


def inline_scripts(html: str, vendor_js: str, entry_js: str) -> str:
    body = merge_bundles(vendor_js, entry_js)
    if body is None:
        logger.warning("Unsupported bundle layout; index.html keeps its external script")
        return html
    script = _env.get_template("script.html").render(body=body)
    html = _MODULE_SCRIPT.sub(lambda _: script, html, count=1)
    return _MODULE_PRELOAD.sub("", html)


def escape_template_literal(text: str) -> str:
    """Escape text for embedding inside a JavaScript template literal."""
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("$", "\\$")
        .replace("</", "<\\/")
    )


def inject_error_data(html: str, tsv: str) -> str:
    if DATA_PLACEHOLDER not in html:
        logger.warning("index.html template has no error data placeholder")
        return html
    assignment = _env.get_template("data.js").render(data=escape_template_literal(tsv))
    return html.replace(DATA_PLACEHOLDER, assignment, 1)


def generate_single_file_html(
    errors: Iterable[TypeScriptError],
    metadata: RunMetadata,
    output_dir: str | Path,
    *,
    templates_dir: Path | None = None,
) -> Optional[Path]:
    """Write a self-contained ``index.html`` into ``output_dir``.

    Returns the written path, or None when no templates are available or
    anything goes wrong. Failures are logged and never raised.
    """
    try:
        source = templates_dir if templates_dir is not None else find_templates_dir()
        if source is None:
            logger.debug("No templates directory found; skipping single-file HTML")
            return None

        assets = load_template_assets(source)
        html = assets.html
        if assets.css is not None:
            html = inline_stylesheet(html, assets.css)
        if assets.vendor_js is not None and assets.entry_js is not None:
            html = inline_scripts(html, assets.vendor_js, assets.entry_js)
        html = inject_error_data(html, render_tsv(errors))

        target = Path(output_dir) / "index.html"
        target.write_text(html, encoding="utf-8")
    except Exception as exc:
        logger.warning("Failed to generate inlined HTML: %s", exc)
        return None

    logger.debug("Wrote single-file report to %s", target)
    return target


def _split_specifiers(clause: str) -> Iterable[Tuple[str, str]]:
    for item in clause.split(","):
        item = item.strip()
        if not item:
            continue
        parts = _ALIAS_SPLIT.split(item)
        yield parts[0], parts[-1]


def _read_optional(path: Path | None) -> Optional[str]:
    if path is None:
        return None
    return path.read_text(encoding="utf-8")


__all__ = [
    "DATA_PLACEHOLDER",
    "TemplateAssets",
    "build_bindings",
    "escape_template_literal",
    "find_templates_dir",
    "generate_single_file_html",
    "inject_error_data",
    "inline_scripts",
    "inline_stylesheet",
    "load_template_assets",
    "merge_bundles",
    "parse_entry_imports",
    "parse_vendor_exports",
]
