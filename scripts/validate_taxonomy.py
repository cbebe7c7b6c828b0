#!/usr/bin/env python3
"""Lightweight validator for category taxonomy JSON files."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_engine import config
from budget_engine.taxonomy import validate_taxonomy


def main(path: Path = config.TAXONOMY_PATH) -> int:
    if not path.exists():
        print(f"Taxonomy file not found: {path}")
        return 1

    try:
        data = config.load_config(path)
    except json.JSONDecodeError as exc:
        print(f"Taxonomy is not valid JSON: {exc}")
        return 1

    errors = validate_taxonomy(data)
    if errors:
        print("Taxonomy validation failed:")
        for message in errors:
            print(f"  - {message}")
        return 1

    keyword_count = sum(len(entry.get('keywords', [])) for entry in data['categories'])
    print(f"Taxonomy OK: {len(data['categories'])} categories, {keyword_count} keywords.")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description='Validate a category taxonomy file.')
    parser.add_argument('path', nargs='?', type=Path, default=config.TAXONOMY_PATH)
    args = parser.parse_args()
    raise SystemExit(main(args.path))
