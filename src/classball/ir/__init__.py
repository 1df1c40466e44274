"""Schema for badge catalog content and player statistics.

Badges, categories and custom badges are Pydantic models that serialise
cleanly to/from JSON.  :class:`BadgeSet` is the top-level catalog document;
:class:`StatSnapshot` is the cumulative statistics value every rule reads.
"""

from .badge_set import BadgeOverride, BadgeSet
from .badges import (
    AllOfRule,
    BadgeDefinition,
    BadgeRule,
    BadgeTier,
    FlagRule,
    ManualRule,
    Metric,
    ThresholdRule,
)
from .categories import DEFAULT_CATEGORY_ID, CategoryDefinition
from .custom import (
    CONDITION_INPUTS,
    ConditionType,
    CustomBadgeSpec,
    default_condition_data,
    validate_condition,
)
from .stats import PerGameStats, StatSnapshot

__all__ = [
    # badge_set
    "BadgeOverride",
    "BadgeSet",
    # badges
    "AllOfRule",
    "BadgeDefinition",
    "BadgeRule",
    "BadgeTier",
    "FlagRule",
    "ManualRule",
    "Metric",
    "ThresholdRule",
    # categories
    "CategoryDefinition",
    "DEFAULT_CATEGORY_ID",
    # custom
    "CONDITION_INPUTS",
    "ConditionType",
    "CustomBadgeSpec",
    "default_condition_data",
    "validate_condition",
    # stats
    "PerGameStats",
    "StatSnapshot",
]
