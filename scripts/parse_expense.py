#!/usr/bin/env python3
"""Parse expense sentences and show how each one was interpreted."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from budget_engine import config
from budget_engine.exceptions import AmountNotFound
from budget_engine.parsing import classify, match_amount, parse


def describe(text: str, show_scores: bool = False) -> bool:
    try:
        draft = parse(text)
    except AmountNotFound as exc:
        print(f"✗ {text!r}: {exc}")
        return False

    match = match_amount(text)
    print(f"✓ {text!r}")
    print(f"    amount:     {draft.amount:,.2f} (pattern: {match.pattern})")
    print(f"    category:   {draft.category} ({draft.confidence}% confidence)")
    print(f"    note:       {draft.note}")
    if show_scores:
        scores = classify(text).scores
        print(f"    scores:     {scores or 'none'}")
    return True


def main(sentences: List[str], show_scores: bool = False) -> int:
    results = [describe(sentence, show_scores) for sentence in sentences]
    return 0 if all(results) else 1


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Parse free-text expense sentences.')
    parser.add_argument('sentences', nargs='+', help='Sentences such as "Paid $45.99 for lunch"')
    parser.add_argument('--scores', action='store_true', help='Show per-category keyword scores')
    parser.add_argument('--log-level', default=None, help='Logging level (default from BUDGET_ENGINE_LOG_LEVEL)')
    args = parser.parse_args()
    config.configure_logging(args.log_level)
    raise SystemExit(main(args.sentences, show_scores=args.scores))
