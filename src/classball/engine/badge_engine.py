"""BadgeEngine -- one object bundling catalog, categories and progress.

Orchestrates aggregation -> award checking -> progress views for a single
player, which is what the scoring UI needs after every recorded play and at
the end of a game.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pydantic import BaseModel

from classball.ir.badge_set import BadgeSet
from classball.ir.badges import BadgeDefinition
from classball.ir.stats import StatSnapshot

from .aggregator import GameRecord, aggregate
from .catalog import BadgeCatalog, load_default_badge_set
from .categories import CategoryIndex
from .eligibility import find_newly_earned, merge_awards
from .progress import BadgeProgress, ProgressCalculator, count_by_tier


class PlayerEvaluation(BaseModel):
    """Everything the UI needs to show after evaluating one player."""

    snapshot: StatSnapshot
    newly_earned: list[BadgeDefinition]
    owned: list[str]
    """Owned ids after appending ``newly_earned``; persist this list."""
    next_badges: list[BadgeProgress]
    tier_counts: dict[str, int]


class BadgeEngine:
    """Evaluates players against one catalog.

    Usage::

        engine = BadgeEngine.load_default()
        result = engine.evaluate(history, open_game=live_stats, owned=badges)
        store.save(player_id, result.owned)
    """

    def __init__(self, catalog: BadgeCatalog, categories: CategoryIndex) -> None:
        self.catalog = catalog
        self.categories = categories
        self.progress = ProgressCalculator(catalog, categories)

    @classmethod
    def from_badge_set(cls, badge_set: BadgeSet) -> "BadgeEngine":
        catalog = BadgeCatalog.from_badge_set(badge_set)
        return cls(catalog, CategoryIndex(badge_set.categories, catalog))

    @classmethod
    def load_default(cls) -> "BadgeEngine":
        return cls.from_badge_set(load_default_badge_set())

    def evaluate(
        self,
        history: Iterable[GameRecord],
        open_game: GameRecord | None = None,
        owned: Sequence[str] = (),
        backfill: bool = False,
    ) -> PlayerEvaluation:
        """Aggregate, award and compute progress for one player."""
        snapshot = aggregate(history, open_game)
        return self.evaluate_snapshot(snapshot, owned, backfill=backfill)

    def evaluate_snapshot(
        self,
        snapshot: StatSnapshot,
        owned: Sequence[str] = (),
        backfill: bool = False,
    ) -> PlayerEvaluation:
        earned = find_newly_earned(self.catalog, snapshot, owned)
        updated = merge_awards(owned, earned)
        return PlayerEvaluation(
            snapshot=snapshot,
            newly_earned=earned,
            owned=updated,
            next_badges=self.progress.next_per_category(
                snapshot, updated, backfill=backfill
            ),
            tier_counts=count_by_tier(self.catalog, updated),
        )
