"""Command-line helper to run the resume parsing pipeline."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pdf_resume_parser import DecodeError, parse_resume


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse a PDF resume into structured JSON")
    parser.add_argument("file", help="Path or http(s) URL of the resume PDF")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to save the JSON output")
    parser.add_argument("--verbose", action="store_true", help="Log each pipeline stage")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        resume = parse_resume(args.file)
    except DecodeError as error:
        logging.error("Failed to parse %s: %s", args.file, error)
        return 1

    json_payload = resume.json()
    print(json_payload)

    if args.output:
        args.output.write_text(json_payload, encoding="utf-8")
        logging.info("Saved output to %s", args.output)

    logging.info(
        "Parsed %s work experiences, %s educations, %s projects",
        len(resume.work_experiences),
        len(resume.educations),
        len(resume.projects),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
