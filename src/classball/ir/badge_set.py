"""Top-level document that bundles a badge catalog into a single JSON file."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, model_validator

from .badges import BadgeDefinition
from .categories import DEFAULT_CATEGORY_ID, CategoryDefinition
from .custom import CustomBadgeSpec


class BadgeOverride(BaseModel):
    """Display-only replacement for a shipped badge's name and icon."""

    name: str
    icon: str


class BadgeSet(BaseModel):
    """Serialisable description of a complete badge catalog.

    ``badges`` and ``categories`` are the shipped definitions.  A class can
    hide shipped badges, rename or re-icon them through ``overrides``, and add
    its own ``custom_badges``; :meth:`BadgeCatalog.from_badge_set` applies
    those layers in that order.
    """

    version: str = "1.0.0"
    """Version of the catalog content; bump when thresholds change."""

    badges: list[BadgeDefinition] = []
    categories: list[CategoryDefinition] = []

    hidden: list[str] = []
    """Shipped badge ids excluded from evaluation and display."""

    overrides: dict[str, BadgeOverride] = {}
    """Badge id -> replacement name/icon."""

    custom_badges: list[CustomBadgeSpec] = []

    # -- convenience lookups ------------------------------------------------

    def get_badge(self, badge_id: str) -> BadgeDefinition | None:
        """Return the shipped badge with the given id, or ``None``."""
        for badge in self.badges:
            if badge.id == badge_id:
                return badge
        return None

    def get_category(self, category_id: str) -> CategoryDefinition | None:
        """Return the category with the given id, or ``None``."""
        for category in self.categories:
            if category.id == category_id:
                return category
        return None

    # -- validation ---------------------------------------------------------

    @model_validator(mode="after")
    def _validate_unique_ids(self) -> "BadgeSet":
        """Reject duplicate badge, custom badge and category ids."""
        errors: list[str] = []

        for label, ids in (
            ("badge", [b.id for b in self.badges]),
            ("custom badge", [c.id for c in self.custom_badges]),
            ("category", [c.id for c in self.categories]),
        ):
            dupes = sorted(i for i, n in Counter(ids).items() if n > 1)
            if dupes:
                errors.append(f"duplicate {label} id(s): {', '.join(dupes)}")

        if errors:
            raise ValueError(
                f"Badge set validation failed with {len(errors)} error(s):\n"
                + "\n".join(f"  - {e}" for e in errors)
            )
        return self

    @model_validator(mode="after")
    def _validate_categories(self) -> "BadgeSet":
        """Each badge belongs to at most one category, and the fallback
        category must exist whenever categories are declared.
        """
        if not self.categories:
            return self

        if self.get_category(DEFAULT_CATEGORY_ID) is None:
            raise ValueError(
                f"Categories must include the fallback category "
                f"'{DEFAULT_CATEGORY_ID}'."
            )

        seen: dict[str, str] = {}
        for category in self.categories:
            for badge_id in category.badge_ids:
                if badge_id in seen:
                    raise ValueError(
                        f"Badge '{badge_id}' is listed more than once "
                        f"(in '{seen[badge_id]}' and '{category.id}')."
                    )
                seen[badge_id] = category.id
        return self
