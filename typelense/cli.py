"""CLI entrypoints for typelense commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

from .config import ConfigError, load_config
from .detectors import detect_monorepo, discover_detectors
from .generators import generate_tsv_with_metadata
from .logging import configure_logging
from .models import TypeScriptError


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only show warnings and errors.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="typelense",
        description="Detect monorepo workspaces and write TypeScript error reports.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    detect_parser = subparsers.add_parser(
        "detect",
        help="Report the monorepo convention and its packages.",
    )
    _add_logging_options(detect_parser, suppress_default=True)
    detect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    detect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the detection result as JSON.",
    )

    report_parser = subparsers.add_parser(
        "report",
        help="Write errors.tsv, metadata.json and optionally index.html.",
    )
    _add_logging_options(report_parser, suppress_default=True)
    report_parser.add_argument(
        "errors",
        help="JSON file with a list of error records (or an object with 'errors' and 'metadata').",
    )
    report_parser.add_argument(
        "--metadata",
        help="JSON file with run metadata copied into metadata.json.",
    )
    report_parser.add_argument(
        "--base-dir",
        help="Directory that receives the .typelense folder (defaults to the config root).",
    )
    report_parser.add_argument(
        "--web",
        action="store_true",
        default=None,
        help="Also produce the single-file HTML viewer.",
    )
    report_parser.add_argument(
        "--templates-dir",
        help="Viewer template directory to use instead of the bundled one.",
    )
    report_parser.add_argument(
        "--config",
        default=".",
        help="Project directory or .typelense.yml path (defaults to current directory).",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for typelense commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    if args.command == "detect":
        try:
            config = load_config(Path(args.path))
            detectors = discover_detectors(config.enabled_detectors)
            result = detect_monorepo(args.path, detectors)
        except (FileNotFoundError, ConfigError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        if result is None:
            if args.json:
                print(json.dumps({"type": None, "packages": []}, indent=2))
            else:
                print("No supported monorepo configuration found")
            return
        if args.json:
            print(json.dumps(result.to_dict(), indent=2))
            return
        print(f"{result.monorepo_type.value}: {len(result.packages)} packages")
        for package in result.packages:
            version = f"@{package.version}" if package.version else ""
            print(f"  {package.name}{version}  {_relativize(Path(package.path))}")
    elif args.command == "report":
        try:
            config = load_config(Path(args.config))
            errors, metadata = _load_report_input(Path(args.errors), args.metadata)
            base_dir = Path(args.base_dir) if args.base_dir else config.report_base_dir
            web = config.output.web if args.web is None else True
            templates_dir = (
                Path(args.templates_dir) if args.templates_dir else config.output.templates_dir
            )
            output_dir = generate_tsv_with_metadata(
                errors, metadata, base_dir, web, templates_dir=templates_dir
            )
        except (ConfigError, ValueError) as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"typelense report failed: {exc}\n")
        print(f"Report written to {_relativize(output_dir)}")
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _load_report_input(
    errors_path: Path, metadata_path: str | None
) -> Tuple[List[TypeScriptError], Dict[str, Any]]:
    payload = _read_json_file(errors_path)
    metadata: Dict[str, Any] = {}
    if isinstance(payload, dict):
        records = payload.get("errors", [])
        embedded = payload.get("metadata")
        if isinstance(embedded, dict):
            metadata = embedded
    else:
        records = payload
    if not isinstance(records, list):
        raise ValueError(f"{errors_path} must contain a list of error records")

    errors = []
    for record in records:
        if not isinstance(record, dict):
            raise ValueError(f"{errors_path} contains a non-object error record")
        errors.append(TypeScriptError.from_dict(record))

    if metadata_path:
        loaded = _read_json_file(Path(metadata_path))
        if not isinstance(loaded, dict):
            raise ValueError(f"{metadata_path} must contain a JSON object")
        metadata = loaded
    return errors, metadata


def _read_json_file(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
