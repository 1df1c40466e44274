"""Category index -- which track a badge belongs to and what comes next in it."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable, Iterator

from classball.ir.badges import BadgeDefinition
from classball.ir.categories import DEFAULT_CATEGORY_ID, CategoryDefinition

from .catalog import BadgeCatalog

logger = logging.getLogger(__name__)


class CategoryIndex:
    """Immutable lookup over a catalog's category ladders.

    Category ``badge_ids`` that the catalog does not know (a hidden or
    removed badge) are dropped from the ladder at construction time, so the
    "next badge" scan only ever returns real definitions.

    Raises
    ------
    ValueError
        If a badge is listed in more than one category, if the fallback
        category is missing, or if a ladder's tiers ever decrease.
    """

    def __init__(
        self,
        categories: Iterable[CategoryDefinition],
        catalog: BadgeCatalog,
        default_category: str = DEFAULT_CATEGORY_ID,
    ) -> None:
        self._catalog = catalog
        self._default = default_category
        self._categories: dict[str, CategoryDefinition] = {}
        self._ladders: dict[str, tuple[str, ...]] = {}
        owner: dict[str, str] = {}

        for category in categories:
            ladder: list[str] = []
            for badge_id in category.badge_ids:
                if badge_id in owner:
                    raise ValueError(
                        f"Badge {badge_id!r} is listed in both "
                        f"{owner[badge_id]!r} and {category.id!r}"
                    )
                owner[badge_id] = category.id
                if badge_id not in catalog:
                    logger.warning(
                        "Category %r references unknown badge %r; skipping",
                        category.id, badge_id,
                    )
                    continue
                ladder.append(badge_id)

            self._check_ladder_order(category.id, ladder)
            self._categories[category.id] = category
            self._ladders[category.id] = tuple(ladder)

        if default_category not in self._categories:
            raise ValueError(
                f"Fallback category {default_category!r} is not defined"
            )

        self._owner = MappingProxyType(owner)

    def _check_ladder_order(self, category_id: str, ladder: list[str]) -> None:
        tiers = [self._catalog.get(badge_id).tier for badge_id in ladder]
        for prev, nxt, badge_id in zip(tiers, tiers[1:], ladder[1:]):
            if nxt < prev:
                raise ValueError(
                    f"Category {category_id!r} is not ordered by tier: "
                    f"{badge_id!r} ({nxt.name}) follows a {prev.name} badge"
                )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def default_category(self) -> str:
        return self._default

    def get(self, category_id: str) -> CategoryDefinition | None:
        """Return the :class:`CategoryDefinition`, or ``None``."""
        return self._categories.get(category_id)

    def ladder(self, category_id: str) -> list[BadgeDefinition]:
        """Return a category's known badges, easiest first."""
        return self._catalog.resolve(self._ladders.get(category_id, ()))

    def category_of(self, badge_id: str) -> str:
        """Return the id of the category *badge_id* belongs to.

        Uncategorized ids (including custom badges) fall back to the default
        category.
        """
        return self._owner.get(badge_id, self._default)

    def next_in_category(
        self,
        category_id: str,
        owned: Iterable[str],
        after: str | None = None,
    ) -> BadgeDefinition | None:
        """Return the first unowned badge in a category.

        The scan starts right after *after*; with ``after=None`` it starts at
        the first badge of the ladder, which answers "what is the first badge
        this player can work toward".  Returns ``None`` for an unknown
        category, when *after* is not in the ladder or is its last badge, or
        when every remaining badge is owned.
        """
        ladder = self._ladders.get(category_id)
        if ladder is None:
            return None

        start = 0
        if after is not None:
            if after not in ladder:
                return None
            start = ladder.index(after) + 1

        owned_set = set(owned)
        for badge_id in ladder[start:]:
            if badge_id not in owned_set:
                return self._catalog.get(badge_id)
        return None

    def group_by_category(
        self, badge_ids: Iterable[str]
    ) -> dict[str, list[BadgeDefinition]]:
        """Group owned badges by category, in category order.

        Unknown ids are skipped; uncategorized ones land in the default
        category; categories with no badges are left out.
        """
        grouped: dict[str, list[BadgeDefinition]] = {
            category_id: [] for category_id in self._categories
        }
        for badge in self._catalog.resolve(badge_ids):
            grouped[self.category_of(badge.id)].append(badge)
        return {cid: badges for cid, badges in grouped.items() if badges}

    def __iter__(self) -> Iterator[CategoryDefinition]:
        return iter(self._categories.values())

    def __len__(self) -> int:
        return len(self._categories)

    def __repr__(self) -> str:
        return f"CategoryIndex(categories={len(self._categories)})"
