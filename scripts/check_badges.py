#!/usr/bin/env python3
"""Check badges for one or more players from a JSON export.

Input file format::

    {
      "players": [
        {
          "id": "s-0142",
          "name": "Minji",
          "history": [{"stats": {"hits": 2, "runs": 1}, "isMVP": true}, ...],
          "open_game": {"hits": 1, "goodDefense": 1},
          "owned": ["first_game", "first_hit"]
        }
      ]
    }

Usage:
    uv run python scripts/check_badges.py roster.json
    uv run python scripts/check_badges.py roster.json --catalog class_badges.json --backfill
    uv run python scripts/check_badges.py roster.json --output awards.json
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from classball.engine.badge_engine import BadgeEngine
from classball.engine.catalog import load_badge_set
from classball.report import render_evaluation


def main() -> None:
    parser = argparse.ArgumentParser(description="Check classroom baseball badges")
    parser.add_argument("players", type=Path, help="Path to the players JSON file")
    parser.add_argument("--catalog", type=Path, default=None, help="Class badge set JSON (default: shipped catalog)")
    parser.add_argument("--backfill", action="store_true", default=False, help="Show 0%% badges for untouched categories")
    parser.add_argument("--output", type=Path, default=None, help="Write updated owned-badge lists to this JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.catalog is not None:
        print(f"Loading catalog {args.catalog}...")
        engine = BadgeEngine.from_badge_set(load_badge_set(args.catalog))
    else:
        engine = BadgeEngine.load_default()
    print(f"  {len(engine.catalog)} badges, {len(engine.categories)} categories")

    with open(args.players, encoding="utf-8") as f:
        raw = json.load(f)
    players = raw["players"] if isinstance(raw, dict) else raw

    updated: dict[str, list[str]] = {}
    for number, player in enumerate(players, start=1):
        player_id = player.get("id") or player.get("name")
        if not player_id:
            parser.error(f"player #{number} in {args.players} has neither an id nor a name")
        result = engine.evaluate(
            player.get("history", []),
            open_game=player.get("open_game"),
            owned=player.get("owned", []),
            backfill=args.backfill,
        )
        updated[player_id] = result.owned
        print()
        print(render_evaluation(player.get("name", player_id), result))

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(updated, indent=2, ensure_ascii=False))
        print(f"Saved owned badges to {args.output}")


if __name__ == "__main__":
    main()
