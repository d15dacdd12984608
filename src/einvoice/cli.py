"""Command line interface.

Usage:
    einvoice validate [--format text|json] [--verbose] FILE
    einvoice info [--format text|json] FILE
    einvoice convert FILE -o OUT
"""

import argparse
import json
import logging
import sys

from . import __version__
from .config import get_settings
from .core.errors import EInvoiceError
from .core.pipeline import InvoicePipeline, load_invoice
from .reports import (
    format_summary_text,
    format_violations_text,
    invoice_summary,
    validation_report,
)
from .writers import get_writer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _print_json(data: dict) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_validate(args: argparse.Namespace) -> int:
    pipeline = InvoicePipeline()
    try:
        result = pipeline.process_file(args.file)
    except (EInvoiceError, ValueError) as e:
        logger.debug(f"Cannot validate {args.file}: {e}")
        if args.format == "json":
            _print_json(validation_report(args.file, None, [], error=str(e)))
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.format == "json":
        _print_json(validation_report(args.file, result.invoice, result.violations))
    else:
        print(format_violations_text(result.invoice, result.violations, verbose=args.verbose))
    return EXIT_OK if result.is_valid else EXIT_VIOLATIONS


def cmd_info(args: argparse.Namespace) -> int:
    try:
        invoice = load_invoice(args.file)
    except EInvoiceError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    summary = invoice_summary(invoice)
    if args.format == "json":
        _print_json(summary)
    else:
        print(format_summary_text(summary))
    return EXIT_OK


def cmd_convert(args: argparse.Namespace) -> int:
    try:
        invoice = load_invoice(args.file)
        writer = get_writer()
        if args.output == "-":
            writer.write(invoice, sys.stdout.buffer)
        else:
            with open(args.output, "wb") as sink:
                writer.write(invoice, sink)
    except (EInvoiceError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.output != "-":
        print(f"Wrote {writer.format_name} invoice {invoice.invoice_number} to {args.output}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="einvoice",
        description="Read, validate and convert EN 16931 electronic invoices (ZUGFeRD/Factur-X, XRechnung, UBL).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Check an invoice against the EN 16931 business rules")
    validate.add_argument("file", help="Invoice XML or hybrid PDF")
    validate.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    validate.add_argument("-v", "--verbose", action="store_true", help="Show rule details and debug logging")
    validate.set_defaults(func=cmd_validate)

    info = subparsers.add_parser("info", help="Show an invoice summary")
    info.add_argument("file", help="Invoice XML or hybrid PDF")
    info.add_argument("--format", choices=["text", "json"], default="text", help="Output format")
    info.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    info.set_defaults(func=cmd_info)

    convert = subparsers.add_parser("convert", help="Write an invoice as ZUGFeRD/Factur-X CII XML")
    convert.add_argument("file", help="Invoice XML or hybrid PDF")
    convert.add_argument("-o", "--output", required=True, help="Output file, '-' for stdout")
    convert.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    convert.set_defaults(func=cmd_convert)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
