"""Badge engine: catalog, categories, aggregation, awards and progress."""

from classball.engine.aggregator import aggregate, player_points, snapshot_from_mapping
from classball.engine.badge_engine import BadgeEngine, PlayerEvaluation
from classball.engine.catalog import (
    BadgeCatalog,
    load_badge_set,
    load_default_badge_set,
)
from classball.engine.categories import CategoryIndex
from classball.engine.eligibility import check_roster, find_newly_earned, merge_awards
from classball.engine.progress import BadgeProgress, ProgressCalculator, count_by_tier

__all__ = [
    "BadgeCatalog",
    "BadgeEngine",
    "BadgeProgress",
    "CategoryIndex",
    "PlayerEvaluation",
    "ProgressCalculator",
    "aggregate",
    "check_roster",
    "count_by_tier",
    "find_newly_earned",
    "load_badge_set",
    "load_default_badge_set",
    "merge_awards",
    "player_points",
    "snapshot_from_mapping",
]
