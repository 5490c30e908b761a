"""Preview a batch of nominations before pasting it into the admin panel.

Reads a tab- or comma-separated file, or fetches one from a URL (e.g. a
spreadsheet published as TSV), and prints the rows the importer would create.

Usage:
    python scripts/import_nominations.py nominations.tsv
    python scripts/import_nominations.py https://example.com/sheet.tsv --json
"""

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so the script runs from a checkout
sys.path.insert(0, str(Path(__file__).parent.parent))

from movienight.importers import detect_importer, detect_importer_by_content  # noqa: E402
from movienight.importers.base import NominationImportError  # noqa: E402


def fetch_url(url: str) -> bytes:
    """Fetch the batch from a URL."""
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise NominationImportError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=30.0) as client:
            response = client.get(url)
            response.raise_for_status()
            return response.content
    except httpx.HTTPStatusError as e:
        raise NominationImportError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise NominationImportError(f"Error fetching URL: {e}")


def read_source(source: str) -> bytes:
    if source.startswith(("http://", "https://")):
        return fetch_url(source)
    return Path(source).read_bytes()


def main():
    parser = argparse.ArgumentParser(
        description="Preview a batch of film nominations")
    parser.add_argument("source", help="Path or URL of a .tsv/.csv batch")
    parser.add_argument("--json", action="store_true",
                        help="Print the rows as JSON instead of a table")
    args = parser.parse_args()

    try:
        content = read_source(args.source)
        importer = detect_importer(args.source) or detect_importer_by_content(content, args.source)
        if importer is None:
            print(f"Could not determine the format of {args.source}", file=sys.stderr)
            sys.exit(1)
        rows = importer.parse(content)
    except NominationImportError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps([asdict(row) for row in rows], indent=2, ensure_ascii=False))
        return

    print(f"{importer.name}: {len(rows)} nominations")
    for row in rows:
        print(f"  {row.title}  [{row.nominator}]")
        if row.link:
            print(f"      {row.link}")
        if row.comment:
            print(f"      \"{row.comment}\"")


if __name__ == "__main__":
    main()
