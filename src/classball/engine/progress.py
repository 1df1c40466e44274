"""Progress toward unearned badges.

Every figure is derived from the badge's rule: ``target`` is the rule's
threshold (1 for flag badges) and ``current`` is the counter the rule reads
(the lowest counter for composite rules).  Badges that track their own
progress report an unrounded percentage; the rest are rounded to whole
percent.  All functions are pure reads of the snapshot.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel

from classball.ir.badges import BadgeDefinition, BadgeTier
from classball.ir.stats import StatSnapshot

from .catalog import BadgeCatalog
from .categories import CategoryIndex


class BadgeProgress(BaseModel):
    """How far a player is from one unearned badge."""

    badge: BadgeDefinition
    current: int
    target: int
    percent: float
    """Share of the target reached, from 0 to 100.

    Badges that track their own progress report it unrounded; the others are
    rounded to a whole percent.
    """
    category: str | None = None


def _percent(badge: BadgeDefinition, current: int, target: int) -> float:
    ratio = 100 * current / target
    if badge.tracks_progress:
        return max(0.0, min(100.0, ratio))
    return float(max(0, min(100, round(ratio))))


def _by_percent(entries: list[BadgeProgress]) -> list[BadgeProgress]:
    # sorted() is stable, so equal percentages keep catalog/category order
    return sorted(entries, key=lambda p: p.percent, reverse=True)


class ProgressCalculator:
    """Computes progress views over a catalog and its category ladders.

    Usage::

        calc = ProgressCalculator(catalog, categories)
        calc.progress_of(catalog.get("steady"), snapshot)
        calc.next_per_category(snapshot, owned)
    """

    def __init__(self, catalog: BadgeCatalog, categories: CategoryIndex) -> None:
        self.catalog = catalog
        self.categories = categories

    # ------------------------------------------------------------------
    # Single badge
    # ------------------------------------------------------------------

    def progress_of(
        self, badge: BadgeDefinition, snapshot: StatSnapshot
    ) -> BadgeProgress | None:
        """Return progress toward *badge*, or ``None`` once it is earned.

        Manually awarded badges have no measurable progress and also return
        ``None``.  Flag badges that are not yet earned report the
        ``current=0, target=1, percent=0`` "not started" state.
        """
        if badge.is_manual or badge.condition(snapshot):
            return None

        current = badge.current(snapshot)
        target = badge.target()
        return BadgeProgress(
            badge=badge,
            current=current,
            target=target,
            percent=_percent(badge, current, target),
            category=self.categories.category_of(badge.id),
        )

    # ------------------------------------------------------------------
    # Aggregate views
    # ------------------------------------------------------------------

    def _unearned(
        self, snapshot: StatSnapshot, owned: Iterable[str]
    ) -> list[BadgeProgress]:
        owned_set = set(owned)
        entries: list[BadgeProgress] = []
        for badge in self.catalog:
            if badge.id in owned_set:
                continue
            progress = self.progress_of(badge, snapshot)
            if progress is not None:
                entries.append(progress)
        return entries

    def all_unearned_sorted(
        self, snapshot: StatSnapshot, owned: Iterable[str] = ()
    ) -> list[BadgeProgress]:
        """Progress for every unearned badge, highest percent first."""
        return _by_percent(self._unearned(snapshot, owned))

    def next_per_category(
        self,
        snapshot: StatSnapshot,
        owned: Iterable[str] = (),
        backfill: bool = False,
    ) -> list[BadgeProgress]:
        """The single closest badge of each category, highest percent first.

        Within a category the entry with the highest percent wins; on a tie
        the earlier (easier) badge is kept.  A category whose best entry is at
        0% is left out unless *backfill* is set, in which case its first
        still-open badge is reported in its 0% state.
        """
        owned = list(owned)
        best: dict[str, BadgeProgress] = {}
        for entry in self._unearned(snapshot, owned):
            existing = best.get(entry.category)
            if existing is None or entry.percent > existing.percent:
                best[entry.category] = entry

        results: list[BadgeProgress] = []
        for category in self.categories:
            entry = best.get(category.id)
            if entry is not None and entry.percent > 0:
                results.append(entry)
            elif backfill:
                first = self._first_open(category.id, snapshot, owned)
                if first is not None:
                    results.append(first)
        return _by_percent(results)

    def _first_open(
        self, category_id: str, snapshot: StatSnapshot, owned: list[str]
    ) -> BadgeProgress | None:
        """Walk a ladder from the start to the first badge still in progress."""
        after: str | None = None
        while True:
            badge = self.categories.next_in_category(category_id, owned, after=after)
            if badge is None:
                return None
            progress = self.progress_of(badge, snapshot)
            if progress is not None:
                return progress
            after = badge.id

    def recommend(
        self,
        snapshot: StatSnapshot,
        owned: Iterable[str] = (),
        limit: int = 3,
    ) -> list[BadgeProgress]:
        """Top *limit* progress-tracking badges to work toward next."""
        tracked = [
            p for p in self._unearned(snapshot, owned) if p.badge.tracks_progress
        ]
        return _by_percent(tracked)[:limit]


def count_by_tier(catalog: BadgeCatalog, badge_ids: Iterable[str]) -> dict[str, int]:
    """Count owned badges per tier, keyed by lowercase tier name.

    Every tier is present in the result; unknown ids are not counted.
    """
    counts = {tier.name.lower(): 0 for tier in BadgeTier}
    for badge in catalog.resolve(badge_ids):
        counts[badge.tier.name.lower()] += 1
    return counts
