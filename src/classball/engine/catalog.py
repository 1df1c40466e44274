"""Badge catalog -- the immutable registry of badge definitions.

Shipped badges and categories are loaded from JSON files in
``classball/data/``.  A :class:`BadgeSet` document layers hidden badges,
display overrides and custom badges on top of them.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator

from classball.ir.badge_set import BadgeSet
from classball.ir.badges import BadgeDefinition
from classball.ir.categories import CategoryDefinition

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).resolve().parents[1] / "data"
_DEFAULT_BADGES_PATH = _DATA_DIR / "badges.json"
_DEFAULT_CATEGORIES_PATH = _DATA_DIR / "categories.json"


def _read_entries(path: Path) -> list[dict[str, Any]]:
    """Read a JSON list, dropping ``_section`` organisational markers."""
    with open(path, encoding="utf-8") as f:
        raw: list[dict[str, Any]] = json.load(f)
    return [entry for entry in raw if "_section" not in entry]


def load_default_badge_set(
    badges_path: str | Path | None = None,
    categories_path: str | Path | None = None,
) -> BadgeSet:
    """Load the shipped badges and categories into a :class:`BadgeSet`.

    Parameters
    ----------
    badges_path:
        Path to the badge JSON file.  Defaults to ``data/badges.json``
        inside the package.
    categories_path:
        Path to the category JSON file.  Defaults to
        ``data/categories.json`` inside the package.
    """
    badges_path = Path(badges_path) if badges_path else _DEFAULT_BADGES_PATH
    categories_path = (
        Path(categories_path) if categories_path else _DEFAULT_CATEGORIES_PATH
    )
    return BadgeSet(
        badges=[BadgeDefinition.model_validate(b) for b in _read_entries(badges_path)],
        categories=[
            CategoryDefinition.model_validate(c)
            for c in _read_entries(categories_path)
        ],
    )


def load_badge_set(path: str | Path) -> BadgeSet:
    """Load a class's catalog document.

    The document may omit ``badges`` and ``categories``; the shipped ones are
    used in that case, so a class file only needs its hidden ids, overrides
    and custom badges.
    """
    with open(path, encoding="utf-8") as f:
        raw: dict[str, Any] = json.load(f)

    if not raw.get("badges") or not raw.get("categories"):
        defaults = load_default_badge_set()
        raw = dict(raw)
        if not raw.get("badges"):
            raw["badges"] = [b.model_dump(mode="json") for b in defaults.badges]
        if not raw.get("categories"):
            raw["categories"] = [
                c.model_dump(mode="json") for c in defaults.categories
            ]
    return BadgeSet.model_validate(raw)


class BadgeCatalog:
    """Read-only, order-stable collection of :class:`BadgeDefinition`.

    Lookup by id is O(1) through a precomputed index.  The catalog never
    changes after construction, so one instance can be shared freely between
    threads and evaluations.

    Usage::

        catalog = BadgeCatalog.load_default()
        badge = catalog.get("hit_maker")
        for badge in catalog:
            ...
    """

    def __init__(self, badges: Iterable[BadgeDefinition]) -> None:
        ordered = tuple(badges)
        index: dict[str, BadgeDefinition] = {}
        for badge in ordered:
            if badge.id in index:
                raise ValueError(f"Duplicate badge id {badge.id!r} in catalog")
            index[badge.id] = badge
        self._badges = ordered
        self._index = MappingProxyType(index)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_badge_set(cls, badge_set: BadgeSet) -> "BadgeCatalog":
        """Build a catalog from a :class:`BadgeSet`.

        Shipped badges listed in ``hidden`` are dropped, ``overrides`` replace
        the name and icon of the remaining ones, and custom badges are
        appended.  A custom badge whose id matches a shipped badge replaces it
        in place and keeps the shipped tier, so category ladders stay ordered.
        """
        hidden = set(badge_set.hidden)
        badges: dict[str, BadgeDefinition] = {}

        for badge in badge_set.badges:
            if badge.id in hidden:
                continue
            override = badge_set.overrides.get(badge.id)
            if override is not None:
                badge = badge.model_copy(
                    update={"name": override.name, "icon": override.icon}
                )
            badges[badge.id] = badge

        for unknown in sorted(set(badge_set.overrides) - {b.id for b in badge_set.badges}):
            logger.warning("Override for unknown badge %r ignored", unknown)

        for spec in badge_set.custom_badges:
            shipped = badge_set.get_badge(spec.id)
            if shipped is not None:
                badges[spec.id] = spec.to_definition(tier=shipped.tier)
            else:
                badges[spec.id] = spec.to_definition()

        return cls(badges.values())

    @classmethod
    def load_default(cls) -> "BadgeCatalog":
        """Return a catalog of the shipped badges."""
        return cls.from_badge_set(load_default_badge_set())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get(self, badge_id: str) -> BadgeDefinition | None:
        """Return the :class:`BadgeDefinition` for *badge_id*, or ``None``."""
        return self._index.get(badge_id)

    def ids(self) -> list[str]:
        """Return all badge ids in catalog order."""
        return [badge.id for badge in self._badges]

    def resolve(self, badge_ids: Iterable[str]) -> list[BadgeDefinition]:
        """Map badge ids to definitions, keeping input order.

        Ids no longer in the catalog (e.g. after a badge was hidden or
        removed) are skipped.
        """
        resolved: list[BadgeDefinition] = []
        for badge_id in badge_ids:
            badge = self._index.get(badge_id)
            if badge is None:
                logger.warning("Skipping unknown badge id %r", badge_id)
                continue
            resolved.append(badge)
        return resolved

    def __iter__(self) -> Iterator[BadgeDefinition]:
        return iter(self._badges)

    def __len__(self) -> int:
        return len(self._badges)

    def __contains__(self, badge_id: object) -> bool:
        return badge_id in self._index

    def __repr__(self) -> str:
        return f"BadgeCatalog(badges={len(self._badges)})"
