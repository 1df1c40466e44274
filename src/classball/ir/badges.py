"""Badge definitions -- achievements awarded from cumulative player statistics."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator

if TYPE_CHECKING:
    from .stats import StatSnapshot


class BadgeTier(IntEnum):
    """Ordinal rank of a badge; comparison follows the numeric value."""

    BEGINNER = 1
    SKILLED = 2
    MASTER = 3
    LEGEND = 4
    SPECIAL = 5


class Metric(str, Enum):
    """Cumulative counters a badge rule can read from a snapshot."""

    HITS = "hits"
    RUNS = "runs"
    GOOD_DEFENSE = "good_defense"
    BONUS_COOKIE = "bonus_cookie"
    HOMERUN = "homerun"
    GAMES_PLAYED = "games_played"
    MVP_COUNT = "mvp_count"
    TOTAL_POINTS = "total_points"


class ThresholdRule(BaseModel):
    """Earned once a single counter reaches ``threshold``."""

    kind: Literal["threshold"] = "threshold"
    metric: Metric
    threshold: int = Field(ge=1)

    def is_met(self, snapshot: StatSnapshot) -> bool:
        return snapshot.value(self.metric) >= self.threshold

    def current(self, snapshot: StatSnapshot) -> int:
        return snapshot.value(self.metric)

    def target(self) -> int:
        return self.threshold


class AllOfRule(BaseModel):
    """Earned once *every* listed counter reaches ``threshold``.

    Progress follows the lowest counter, since that one gates the badge.
    """

    kind: Literal["all_of"] = "all_of"
    metrics: list[Metric] = Field(min_length=1)
    threshold: int = Field(ge=1)

    def is_met(self, snapshot: StatSnapshot) -> bool:
        return all(snapshot.value(m) >= self.threshold for m in self.metrics)

    def current(self, snapshot: StatSnapshot) -> int:
        return min(snapshot.value(m) for m in self.metrics)

    def target(self) -> int:
        return self.threshold


class FlagRule(BaseModel):
    """Earned when a boolean snapshot flag is set (e.g. a perfect game)."""

    kind: Literal["flag"] = "flag"
    flag: Literal["has_perfect_game"] = "has_perfect_game"

    def is_met(self, snapshot: StatSnapshot) -> bool:
        return getattr(snapshot, self.flag) is True

    def current(self, snapshot: StatSnapshot) -> int:
        return 1 if self.is_met(snapshot) else 0

    def target(self) -> int:
        return 1


class ManualRule(BaseModel):
    """Never earned automatically; a teacher hands the badge out."""

    kind: Literal["manual"] = "manual"

    def is_met(self, snapshot: StatSnapshot) -> bool:
        return False

    def current(self, snapshot: StatSnapshot) -> int:
        return 0

    def target(self) -> int:
        return 1


BadgeRule = Annotated[
    Union[ThresholdRule, AllOfRule, FlagRule, ManualRule],
    Field(discriminator="kind"),
]


class BadgeDefinition(BaseModel):
    """Complete definition of a single badge in the catalog."""

    id: str
    """Stable lowercase snake_case identifier (e.g. 'hit_maker')."""

    name: str
    """Display name shown in the award popup."""

    icon: str
    """Emoji (or short text) rendered next to the name."""

    description: str
    """One-line explanation of what the badge rewards."""

    tier: BadgeTier
    """Difficulty / prestige rank."""

    rule: BadgeRule
    """Structural eligibility rule; the only authority on 'is this earned'."""

    tracks_progress: bool = False
    """If ``True``, the badge reports its own unrounded progress percentage.

    Entry-level "first X" badges and composite badges leave this ``False``
    and are reported with a rounded percentage instead.
    """

    model_config = {"frozen": True}

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not value or value != value.strip():
            raise ValueError(f"Badge id must be a non-empty trimmed string, got {value!r}")
        return value

    # -- rule helpers -------------------------------------------------------

    def condition(self, snapshot: StatSnapshot) -> bool:
        """Return True if *snapshot* satisfies this badge's rule."""
        return self.rule.is_met(snapshot)

    def current(self, snapshot: StatSnapshot) -> int:
        return self.rule.current(snapshot)

    def target(self) -> int:
        return self.rule.target()

    @property
    def is_manual(self) -> bool:
        return isinstance(self.rule, ManualRule)
