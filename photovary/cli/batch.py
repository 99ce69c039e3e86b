"""photovary CLI batch generator.

Draws randomized tone/colour adjustment variants for every input image.
"""

import os
import sys

os.environ.setdefault("NUMBA_THREADING_LAYER", "workqueue")

import argparse
import dataclasses
import json
import logging
from typing import List, Optional, Tuple

from photovary.domain.models import (
    AdjustmentParams,
    BatchConfig,
    ExportFormat,
    FilterKind,
)
from photovary.infrastructure.loaders.constants import SUPPORTED_IMAGE_EXTENSIONS
from photovary.kernel.system.config import APP_CONFIG, DEFAULT_BATCH_CONFIG
from photovary.kernel.system.logging import setup_logging
from photovary.services.export.service import VariantExportService


FORMAT_MAP = {
    "jpeg": ExportFormat.JPEG,
    "png": ExportFormat.PNG,
    "tiff": ExportFormat.TIFF,
}

FORMAT_CHOICES = tuple(FORMAT_MAP.keys())

DEFAULT_OUTPUT = APP_CONFIG.default_export_dir

CONFIG_FILE = APP_CONFIG.config_file


def load_user_config() -> dict:
    """Loads the user config file if it exists. Returns {"cli": {}}."""
    if not os.path.isfile(CONFIG_FILE):
        return {"cli": {}}
    with open(CONFIG_FILE, "r") as f:
        data = json.load(f)
    return {"cli": data.get("cli", {})}


def generate_default_config() -> int:
    """Creates the user config with documented defaults. Returns 0 on success, 1 if exists."""
    if os.path.isfile(CONFIG_FILE):
        print(f"Config already exists: {CONFIG_FILE}", file=sys.stderr)
        return 1
    os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
    export = DEFAULT_BATCH_CONFIG.export
    default = {
        "cli": {
            "output": DEFAULT_OUTPUT,
            "format": "jpeg",
            "quality": export.jpeg_quality,
            "variants": DEFAULT_BATCH_CONFIG.variants,
            "workers": 1,
            "order": ",".join(k.value for k in DEFAULT_BATCH_CONFIG.order),
            "filename_pattern": export.filename_pattern,
        },
    }
    with open(CONFIG_FILE, "w") as f:
        json.dump(default, f, indent=4)
    print(f"Config created: {CONFIG_FILE}", file=sys.stderr)
    return 0


def parse_order(value: str) -> Tuple[FilterKind, ...]:
    """'contrast,lightness,...' -> tuple of FilterKind."""
    try:
        return tuple(FilterKind.parse(part) for part in value.split(",") if part.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photovary",
        description="photovary -- randomized photo-editing variant generator",
        epilog="Example: photovary --variants 5 --output ./output ./input/",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        metavar="FILE_OR_DIR",
        help="Input images or directories containing images",
    )

    parser.add_argument(
        "--variants",
        type=int,
        default=None,
        metavar="INT",
        help=f"Variants to draw per image (default: {DEFAULT_BATCH_CONFIG.variants})",
    )

    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT,
        metavar="DIR",
        help=f"Output directory (default: {DEFAULT_OUTPUT})",
    )

    parser.add_argument(
        "--format",
        choices=FORMAT_CHOICES,
        default=None,
        dest="output_format",
        help="Output file format (default: jpeg)",
    )

    parser.add_argument(
        "--quality",
        type=int,
        default=None,
        metavar="INT",
        help=f"JPEG quality 1-100 (default: {DEFAULT_BATCH_CONFIG.export.jpeg_quality})",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        metavar="INT",
        help="Random seed for reproducible parameter draws",
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        metavar="INT",
        help=f"Parallel worker processes (default: 1, max useful: {APP_CONFIG.max_workers})",
    )

    parser.add_argument(
        "--filename-pattern",
        default=None,
        metavar="TEMPLATE",
        help="Jinja2 filename template; must reference every parameter",
    )

    parser.add_argument(
        "--order",
        type=parse_order,
        default=None,
        metavar="KINDS",
        help="Comma-separated filter order (default: contrast,lightness,color_temperature,saturation,highlight)",
    )

    parser.add_argument(
        "--params",
        default=None,
        metavar="JSON_FILE",
        help="Apply these fixed parameters once per image instead of random draws",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        default=False,
        help=f"Generate default config at {CONFIG_FILE} and exit",
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Log debug output",
    )

    return parser


def discover_files(inputs: List[str]) -> List[str]:
    """Resolves input paths to a sorted list of supported image files."""
    files = []
    for input_path in inputs:
        path = os.path.abspath(input_path)
        if os.path.isfile(path):
            ext = os.path.splitext(path)[1].lower()
            if ext in SUPPORTED_IMAGE_EXTENSIONS:
                files.append(path)
            else:
                print(f"Warning: Skipping unsupported file: {path}", file=sys.stderr)
        elif os.path.isdir(path):
            for root, _dirs, filenames in os.walk(path):
                for fname in sorted(filenames):
                    fpath = os.path.join(root, fname)
                    ext = os.path.splitext(fname)[1].lower()
                    if ext in SUPPORTED_IMAGE_EXTENSIONS:
                        files.append(fpath)
        else:
            print(f"Warning: Path not found: {path}", file=sys.stderr)
    return files


def build_config(args: argparse.Namespace, user_config: dict) -> BatchConfig:
    """Builds BatchConfig with loading priority:
    DEFAULT -> user config -> CLI flags
    """
    cli_defaults = user_config.get("cli", {})
    config = DEFAULT_BATCH_CONFIG

    def pick(arg_value, key, fallback):
        if arg_value is not None:
            return arg_value
        return cli_defaults.get(key, fallback)

    output = args.output
    if output == DEFAULT_OUTPUT and "output" in cli_defaults:
        output = cli_defaults["output"]

    fmt_name = pick(args.output_format, "format", "jpeg")
    if fmt_name not in FORMAT_MAP:
        raise KeyError(f"Unknown output format: {fmt_name}")

    order = args.order
    if order is None:
        order = parse_order(cli_defaults["order"]) if "order" in cli_defaults else config.order

    fixed_params = None
    if args.params:
        with open(os.path.abspath(args.params), "r") as f:
            fixed_params = AdjustmentParams.from_flat_dict(json.load(f))

    export = dataclasses.replace(
        config.export,
        export_path=os.path.abspath(output),
        export_fmt=FORMAT_MAP[fmt_name],
        jpeg_quality=int(pick(args.quality, "quality", config.export.jpeg_quality)),
        filename_pattern=pick(args.filename_pattern, "filename_pattern", config.export.filename_pattern),
    )

    return dataclasses.replace(
        config,
        variants=max(1, int(pick(args.variants, "variants", config.variants))),
        seed=pick(args.seed, "seed", config.seed),
        order=order,
        fixed_params=fixed_params,
        max_workers=max(1, int(pick(args.workers, "workers", config.max_workers))),
        export=export,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns 0 on success, 1 on failure."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    # Handle early-exit commands
    if args.init_config:
        return generate_default_config()

    files = discover_files(args.inputs)
    if not files:
        print("Error: No supported image files found.", file=sys.stderr)
        return 1

    try:
        config = build_config(args, load_user_config())
    except (json.JSONDecodeError, FileNotFoundError, KeyError, TypeError, ValueError, argparse.ArgumentTypeError) as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    total = len(files)
    print(
        f"Processing {total} file(s) x {1 if config.fixed_params else config.variants} variant(s) "
        f"-> {config.export.export_path}",
        file=sys.stderr,
    )

    report = VariantExportService.run_batch(files, config)

    for path, error in report.errors.items():
        print(f"  {os.path.basename(path)} FAILED: {error.splitlines()[-1]}", file=sys.stderr)
    print(
        f"Done: {report.succeeded}/{total} succeeded, "
        f"{report.variants_written} variant(s) written in {report.elapsed:.1f}s",
        file=sys.stderr,
    )

    return 1 if report.failed > 0 else 0


def cli_entry() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    sys.exit(main())
