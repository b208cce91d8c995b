#!/usr/bin/env python3
"""Render the video analysis email for sample records or a JSON file.

Writes HTML (and optionally plain-text and PDF) files for previewing in a
browser, and can send a test email through the configured SMTP server.

Usage:
    python scripts/render_analysis_email.py                     # full + minimal samples
    python scripts/render_analysis_email.py --input record.json --pdf
    python scripts/render_analysis_email.py --send-to you@example.com
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import email_service
import report_service
import sample_analyses
from analysis_email import render_analysis_email, render_analysis_text
from email_models import AnalysisEmailInput

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
)
log = logging.getLogger(__name__)


def load_records(input_path: str | None, variants: list[str]) -> list[tuple[str, AnalysisEmailInput]]:
    """Return (name, record) pairs from a JSON file or the built-in samples."""
    if input_path:
        with open(input_path) as f:
            payload = json.load(f)
        name = os.path.splitext(os.path.basename(input_path))[0]
        return [(name, AnalysisEmailInput.from_dict(payload))]
    return [
        (variant, AnalysisEmailInput.from_dict(sample_analyses.sample_payload(variant)))
        for variant in variants
    ]


def write_outputs(name: str, data: AnalysisEmailInput, args: argparse.Namespace) -> list[str]:
    os.makedirs(args.output_dir, exist_ok=True)
    written = []

    html_path = os.path.join(args.output_dir, f"{name}.html")
    with open(html_path, "w", encoding="utf-8") as f:
        f.write(render_analysis_email(data, seed=args.seed, message_index=args.message_index))
    written.append(html_path)

    if args.text:
        text_path = os.path.join(args.output_dir, f"{name}.txt")
        with open(text_path, "w", encoding="utf-8") as f:
            f.write(render_analysis_text(data, seed=args.seed, message_index=args.message_index))
        written.append(text_path)

    if args.pdf:
        pdf_path = os.path.join(args.output_dir, f"{name}.pdf")
        with open(pdf_path, "wb") as f:
            f.write(report_service.generate_analysis_pdf(
                data, seed=args.seed, message_index=args.message_index))
        written.append(pdf_path)

    return written


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render the video analysis email")
    parser.add_argument(
        "--input", default=None,
        help="JSON file with an analysis record (camelCase or snake_case keys)",
    )
    parser.add_argument(
        "--variant", action="append", choices=sorted(sample_analyses.VARIANTS),
        help="Sample record to render; repeatable (default: full and minimal)",
    )
    parser.add_argument("--output-dir", default="email_previews", help="Directory for rendered files")
    parser.add_argument("--seed", type=int, default=None, help="Seed for synthesized scores and message")
    parser.add_argument("--message-index", type=int, default=None, help="Pick a specific coach message")
    parser.add_argument("--text", action="store_true", help="Also write the plain-text body")
    parser.add_argument("--pdf", action="store_true", help="Also write the PDF report")
    parser.add_argument("--send-to", default=None, help="Send a test email to this address")
    args = parser.parse_args(argv)

    variants = args.variant or ["full", "minimal"]
    try:
        records = load_records(args.input, variants)
    except (OSError, ValueError) as ex:
        log.error("Could not load analysis record: %s", ex)
        return 1

    failures = 0
    for name, data in records:
        for path in write_outputs(name, data, args):
            log.info("Wrote %s", path)

        if args.send_to:
            result = email_service.send_video_analysis_email(
                args.send_to, data, test=True,
                seed=args.seed, message_index=args.message_index,
            )
            if result.success:
                log.info("Test email for %s sent to %s (%s)", name, args.send_to, result.message_id)
            else:
                log.error("Test email for %s failed: %s", name, result.error)
                failures += 1

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
