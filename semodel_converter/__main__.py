# File: __main__.py
# Purpose: Command line entry point (`semodel-convert` / `python -m semodel_converter`)
# Notes:
# - formats:  list output formats
# - convert:  batch export files and/or folders (folders are searched recursively)
# - validate: run the input-contract checks on source models
# - inspect:  verify an .xmodel_bin and print its counts

import argparse
import signal
import sys
from typing import List, Optional

from . import __version__
from .config.export_settings import ExportSettings
from .core.errors import ConversionError, UnsupportedFormatError
from .core.io.semodel_reader import read_semodel
from .core.validator import validate_model
from .export_dispatcher import DEFAULT_REGISTRY
from .export_processor import BatchExporter
from .utils.file_manager import FileManager
from .utils.logger import Logger
from .validators.structure_checker import StructureChecker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="semodel-convert",
        description="Convert SEModel files to OBJ, SMD and XModel formats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  semodel-convert formats
  semodel-convert convert body.semodel -f .smd -o out/
  semodel-convert convert models/ -f .xmodel_bin -o out/ --new-folder --copy-images
  semodel-convert inspect out/body.xmodel_bin
        """,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("formats", help="List supported output formats")

    conv = sub.add_parser("convert", help="Convert models")
    conv.add_argument("input", nargs="+", help=".semodel file(s) or folder(s)")
    conv.add_argument("-f", "--format", dest="default_extension",
                      help="Output extension (default: .obj)")
    conv.add_argument("-o", "--output", required=True, help="Output folder")
    conv.add_argument("--overwrite", action=argparse.BooleanOptionalAction, default=None,
                      help="Replace existing outputs (default: yes)")
    conv.add_argument("--copy-images", action="store_true", default=None,
                      help="Copy referenced images into <output>/_images")
    conv.add_argument("--new-folder", action="store_true", default=None,
                      help="Put each model in its own folder")
    conv.add_argument("--prefix", help="Prefix added to output file names")
    conv.add_argument("--audit", dest="write_audit", action="store_true", default=None,
                      help="Write audit.log in the output folder")
    conv.add_argument("--stop-on-error", action="store_true", help="Abort the batch on the first failure")
    conv.add_argument("-v", "--verbose", action="store_true", default=None, help="Verbose output")

    val = sub.add_parser("validate", help="Check source models before converting")
    val.add_argument("input", nargs="+", help=".semodel file(s) or folder(s)")

    insp = sub.add_parser("inspect", help="Verify an .xmodel_bin file")
    insp.add_argument("file", help=".xmodel_bin file")
    insp.add_argument("-v", "--verbose", action="store_true", help="List chunk counts")

    return parser


def cmd_formats(args) -> int:
    print("Supported output formats:")
    for ext, desc in DEFAULT_REGISTRY.enumerate():
        print(f"  {ext}: {desc}")
    return 0


def cmd_convert(args) -> int:
    settings = ExportSettings.from_args(args)
    logger = Logger(verbose=settings.verbose)

    try:
        writer = DEFAULT_REGISTRY.require(settings.default_extension)
    except UnsupportedFormatError as e:
        logger.error(str(e))
        return 2

    paths = FileManager.collect_models(args.input)
    if not paths:
        logger.error("No .semodel files found")
        return 1

    batch = BatchExporter(
        paths, args.output, writer, settings,
        logger=logger,
        on_error=(lambda path, exc: False) if args.stop_on_error else (lambda path, exc: True),
        on_progress=lambda done, total, result: print(f"[{done}/{total}] {result.input_path}"),
    )

    # Ctrl+C finishes the current model, then stops
    previous = signal.signal(signal.SIGINT, lambda signum, frame: batch.cancel())
    try:
        results = batch.run()
    finally:
        signal.signal(signal.SIGINT, previous)

    return 0 if all(r.ok for r in results) and not batch.cancelled else 1


def cmd_validate(args) -> int:
    status = 0
    for path in FileManager.collect_models(args.input):
        try:
            errors, warnings = validate_model(read_semodel(path))
        except (ConversionError, OSError) as e:
            print(f"{path}: ERROR: {e}")
            status = 1
            continue
        for message in errors:
            print(f"{path}: ERROR: {message}")
        for message in warnings:
            print(f"{path}: WARNING: {message}")
        if errors:
            status = 1
        elif not warnings:
            print(f"{path}: OK")
    return status


def cmd_inspect(args) -> int:
    checker = StructureChecker(verbose=args.verbose)
    report = checker.check_xmodel_bin_file(args.file)
    for line in checker.format_report(report):
        print(line)
    return 1 if report["errors"] else 0


COMMANDS = {
    "formats": cmd_formats,
    "convert": cmd_convert,
    "validate": cmd_validate,
    "inspect": cmd_inspect,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return COMMANDS[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
