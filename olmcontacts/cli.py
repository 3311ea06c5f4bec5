"""Command-line interface: ``olm-contacts backup.olm ./output``."""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__, config
from .cancel_token import cancel_all, reset_all
from .exporters import CSV_ALL_NAME, CSV_FREQUENT_NAME, VCARD_NAME, write_outputs
from .models import ExtractionResult
from .utils import load_env, setup_logging
from .utils.friendly_errors import to_user_message
from .worker import run_extraction_in_thread

logger = logging.getLogger(__name__)

EPILOG = """
Input:
  Either an .olm file (read directly as a ZIP archive) or a directory holding
  an already extracted backup.

Examples:
  olm-contacts backup.olm ./output
  olm-contacts ./olm_extracted ./output --extract-from-preview

Output:
  contacts.csv           all contacts with email, name, source, count
  contacts-frequent.csv  only contacts seen in 3+ messages
  contacts.vcf           vCard 3.0 for importing into address books
"""


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="olm-contacts",
        description="Extract contacts from an Outlook for Mac (.olm) backup.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("input", help=".olm file or extracted directory")
    parser.add_argument(
        "output_dir",
        nargs="?",
        default=None,
        help="directory for the generated files (default: $OLM_OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--extract-from-preview",
        action="store_true",
        default=None,
        help=(
            "also recover addresses from message preview text; finds recipients "
            "of sent messages but may be less accurate"
        ),
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="only print errors and the summary"
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser.parse_args(args)


def _progress_printer(quiet: bool):
    def _on_progress(snapshot: Dict[str, Any]) -> None:
        if quiet or snapshot.get("stage") not in {"progress", "finalize"}:
            return
        print(
            f"Processed {snapshot.get('processed', 0)}/{snapshot.get('total', 0)} files, "
            f"found {snapshot.get('contacts_found', 0)} unique contacts...",
            file=sys.stderr,
        )

    return _on_progress


def print_summary(result: ExtractionResult, out_dir: Path) -> None:
    print(f"\nProcessed {result.files_processed} XML files")
    if result.parse_errors:
        print(f"Skipped {result.parse_errors} unparseable files")
    print(f"Found {result.total_contacts} unique email addresses")
    print(f"\nOutput saved to {out_dir}/")
    print(f"  - {CSV_ALL_NAME} ({result.total_contacts} contacts)")
    print(
        f"  - {CSV_FREQUENT_NAME} ({result.frequent_contacts} contacts with "
        f"{config.FREQUENT_MIN_COUNT}+ messages)"
    )
    print(f"  - {VCARD_NAME} (vCard format)")
    if not result.top_contacts:
        return
    print(f"\nTop {len(result.top_contacts)} most frequent contacts:")
    for idx, item in enumerate(result.top_contacts, 1):
        name = f" ({item['name']})" if item.get("name") else ""
        print(f"  {idx}. {item['email']}{name} - {item['count']} messages")


def main(args: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit code."""

    parsed = parse_args(args)

    load_env(Path(__file__).resolve().parent)
    importlib.reload(config)
    setup_logging(logging.WARNING if parsed.quiet else logging.INFO)

    extract_from_preview = (
        config.EXTRACT_FROM_PREVIEW
        if parsed.extract_from_preview is None
        else parsed.extract_from_preview
    )
    out_dir = Path(parsed.output_dir) if parsed.output_dir else config.OUTPUT_DIR

    if not Path(parsed.input).exists():
        print(f"Error: File or directory not found: {parsed.input}", file=sys.stderr)
        return 1

    if not parsed.quiet:
        print(f"Scanning {parsed.input} for email messages...", file=sys.stderr)
        if extract_from_preview:
            print(
                "Extract from preview: ENABLED "
                "(may extract additional recipients from sent messages)",
                file=sys.stderr,
            )

    reset_all()
    try:
        ok, payload = run_extraction_in_thread(
            parsed.input,
            extract_from_preview=extract_from_preview,
            progress_callback=_progress_printer(parsed.quiet),
        )
    except KeyboardInterrupt:
        cancel_all()
        print("\nCancelled by user.", file=sys.stderr)
        return 130

    if not ok:
        print(f"Error: {payload.get('error', 'unknown error')}", file=sys.stderr)
        return 1

    result: ExtractionResult = payload["result"]
    try:
        write_outputs(result, out_dir)
    except OSError as exc:
        logger.error("cannot write outputs to %s: %s", out_dir, exc)
        print(f"Error: {to_user_message(exc)}", file=sys.stderr)
        return 1

    print_summary(result, out_dir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
