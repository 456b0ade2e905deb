"""Report generators: TSV serialisation, output directories and the HTML inliner."""

from .html import generate_single_file_html
from .output import generate_output_path, generate_tsv_with_metadata
from .tsv import TsvGenerator, escape_field, generate_tsv, render_tsv

__all__ = [
    "TsvGenerator",
    "escape_field",
    "generate_output_path",
    "generate_single_file_html",
    "generate_tsv",
    "generate_tsv_with_metadata",
    "render_tsv",
]
