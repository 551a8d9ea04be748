#!/usr/bin/env python3
"""
CLI script to run the article parser over captured pages on disk.

Usage:
    python run_parser.py guardian page1.html page2.html
    python run_parser.py mirror page.html -u https://www.mirror.co.uk/news/... -o out.json
    python run_parser.py independent page.html --log-level DEBUG

Log level and log file default to ARTICLE_PARSER_LOG_LEVEL and
ARTICLE_PARSER_LOG_FILE (a .env file is loaded automatically).
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from article_parser.main import ArticleParser
from article_parser.exceptions import ArticleParseError
from article_parser.logger import setup_logger


def main():
    parser = argparse.ArgumentParser(description="Parse captured news article pages")
    parser.add_argument("publisher", help="Publisher name (guardian, independent, mirror)")
    parser.add_argument("files", nargs="+", help="HTML files to parse")
    parser.add_argument("--url", "-u", help="Source url to record (single file only)")
    parser.add_argument("--output", "-o", help="Output JSON file")
    parser.add_argument(
        "--log-level",
        default=os.getenv("ARTICLE_PARSER_LOG_LEVEL", "INFO"),
        help="Logging level (default: INFO)"
    )
    args = parser.parse_args()

    setup_logger(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        log_file=os.getenv("ARTICLE_PARSER_LOG_FILE")
    )

    if args.url and len(args.files) > 1:
        parser.error("--url can only be used with a single file")

    try:
        article_parser = ArticleParser(args.publisher)
    except ArticleParseError as e:
        print(f"✗ {e.message}", file=sys.stderr)
        sys.exit(2)

    results = []

    for filepath in args.files:
        path = Path(filepath)
        print(f"Parsing: {path.name}", file=sys.stderr)

        try:
            page = article_parser.parse_file(path, url=args.url)
            results.append({
                "file": path.name,
                "status": "success",
                "page": page.model_dump(mode="json")
            })
            print(f"  ✓ {page.content.headline}", file=sys.stderr)

        except ArticleParseError as e:
            results.append({
                "file": path.name,
                "status": "error",
                "error": e.to_response()
            })
            print(f"  ✗ {type(e).__name__}: {e.message}", file=sys.stderr)

    # ensure_ascii=False keeps headlines readable
    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output)
        print(f"\nSaved to: {args.output}", file=sys.stderr)
    else:
        print(output)

    if any(r["status"] == "error" for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
