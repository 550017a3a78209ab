"""Scan narrative text for roll directives and resolve them.

Usage:
    python scripts/scan_text.py "Roll a Perception check DC 15."
    echo "Roll 2d6 fire damage." | python scripts/scan_text.py
"""

from __future__ import annotations

import json
import sys

from tavern.domain.rules.check import resolve_text
from tavern.infra.rng import new_rng
from tavern.models.result import CheckResultModel


def main(text: str) -> None:
    try:
        results = resolve_text(text, new_rng())
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)
    if not results:
        print("No roll directives found.")
        return
    for result in results:
        print(json.dumps(CheckResultModel.from_check(result).model_dump(), indent=2))


if __name__ == "__main__":
    if len(sys.argv) > 2:
        print('Usage: python scripts/scan_text.py ["narrative text"]')
        sys.exit(1)
    main(sys.argv[1] if len(sys.argv) == 2 else sys.stdin.read())
