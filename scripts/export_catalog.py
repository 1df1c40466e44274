#!/usr/bin/env python3
"""Write the shipped badge catalog as a class badge-set JSON file.

The output is a starting point for a class configuration: edit ``hidden``,
``overrides`` and ``custom_badges`` and pass it to ``check_badges.py --catalog``.

Usage:
    uv run python scripts/export_catalog.py [--output data/class_badges.json] [--minimal]
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from classball.engine.catalog import load_default_badge_set
from classball.ir.badge_set import BadgeSet


def main() -> None:
    parser = argparse.ArgumentParser(description="Export the shipped badge catalog")
    parser.add_argument("--output", type=Path, default=Path("data/class_badges.json"), help="Output file")
    parser.add_argument("--minimal", action="store_true", default=False, help="Omit shipped badges/categories (they are filled in on load)")
    args = parser.parse_args()

    badge_set = BadgeSet() if args.minimal else load_default_badge_set()
    print(f"Exporting {len(badge_set.badges)} badges, {len(badge_set.categories)} categories...")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(
        json.dumps(badge_set.model_dump(mode="json"), indent=2, ensure_ascii=False)
    )
    print(f"Saved badge set to {args.output}")


if __name__ == "__main__":
    main()
