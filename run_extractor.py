#!/usr/bin/env python3
"""
CLI script to extract the main article from HTML files.

Settings come from ReaderSettings defaults, overridden by ARTICLE_READER_*
environment variables (a .env file in the working directory is loaded
first). A failure on one file is reported in the output and the run
continues with the next file.
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv
load_dotenv()

from article_reader.main import ArticleReader
from article_reader.config import ReaderSettings
from article_reader.exceptions import ParseError
from article_reader.logger import setup_logger


def main(argv=None):
    parser = argparse.ArgumentParser(description="Extract the main article from HTML files")
    parser.add_argument("files", nargs="+", help="HTML files to process")
    parser.add_argument("--output", "-o", help="Output JSON file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log candidate scores")
    args = parser.parse_args(argv)

    setup_logger(level=logging.DEBUG if args.verbose else logging.WARNING)
    reader = ArticleReader(settings=ReaderSettings.from_env())

    results = []

    for filepath in args.files:
        path = Path(filepath)
        print(f"Extracting: {path.name}")

        try:
            result = reader.extract_file(path)
        except ParseError as e:
            results.append({"file": path.name, "status": "error", **e.to_response()})
            print(f"  ✗ Error: {e.message}")
            continue

        results.append({
            "file": path.name,
            "status": "success",
            "base_url": result.base_url,
            "content": result.content,
            "warnings": result.warnings
        })
        print(f"  ✓ {len(result.content)} chars")

    # ensure_ascii=False keeps non-ASCII article text readable
    output = json.dumps(results, indent=2, ensure_ascii=False)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
        print(f"\nSaved to: {args.output}")
    else:
        print("\n" + output)

    return 0 if all(r["status"] == "success" for r in results) else 1


if __name__ == "__main__":
    raise SystemExit(main())
