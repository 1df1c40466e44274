"""Per-game statistics and the cumulative snapshot built from them.

Both models are lenient on input: counters that are missing, ``None`` or
negative are normalised to ``0`` so that partially written history documents
never break badge evaluation.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from .badges import Metric


def _non_negative(value: Any) -> int:
    if value is None:
        return 0
    value = int(value)
    return value if value > 0 else 0


class PerGameStats(BaseModel):
    """One player's record for a single game."""

    hits: int = 0
    runs: int = 0
    good_defense: int = Field(default=0, alias="goodDefense")
    bonus_cookie: int = Field(default=0, alias="bonusCookie")
    homerun: int = 0

    is_mvp: bool = Field(default=False, alias="isMVP")
    """Set when the game was finished and this player was named MVP."""

    perfect_game: bool | None = Field(default=None, alias="isPerfectGame")
    """Hit, run and good defense all recorded in this one game.

    Derived from the counters when the stored record does not carry it.
    """

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator(
        "hits", "runs", "good_defense", "bonus_cookie", "homerun", mode="before"
    )
    @classmethod
    def _clamp_counter(cls, value: Any) -> int:
        return _non_negative(value)

    @field_validator("is_mvp", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> bool:
        return bool(value)

    @model_validator(mode="after")
    def _derive_perfect_game(self) -> "PerGameStats":
        if self.perfect_game is None:
            self.perfect_game = (
                self.hits > 0 and self.runs > 0 and self.good_defense > 0
            )
        return self

    @property
    def points(self) -> int:
        """Every hit, run, good defense and bonus cookie is worth one point."""
        return self.hits + self.runs + self.good_defense + self.bonus_cookie

    @classmethod
    def from_record(cls, raw: dict[str, Any]) -> "PerGameStats":
        """Parse a stored history record.

        History documents keep the counters either at the top level or nested
        under ``stats``; flags such as ``isMVP`` always live at the top level.
        """
        nested = raw.get("stats")
        if isinstance(nested, dict):
            merged = dict(nested)
            for key in ("isMVP", "is_mvp", "isPerfectGame", "perfect_game"):
                if key in raw:
                    merged[key] = raw[key]
            return cls.model_validate(merged)
        return cls.model_validate(raw)


class StatSnapshot(BaseModel):
    """Cumulative statistics for one player at one point in time.

    ``total_points`` is always recomputed from the four scoring counters; any
    value supplied by the caller is discarded.
    """

    total_hits: int = Field(default=0, alias="totalHits")
    total_runs: int = Field(default=0, alias="totalRuns")
    total_good_defense: int = Field(default=0, alias="totalGoodDefense")
    total_bonus_cookie: int = Field(default=0, alias="totalBonusCookie")
    total_homerun: int = Field(default=0, alias="totalHomerun")
    games_played: int = Field(default=0, alias="gamesPlayed")
    mvp_count: int = Field(default=0, alias="mvpCount")
    has_perfect_game: bool = Field(default=False, alias="hasPerfectGame")
    total_points: int = Field(default=0, alias="totalPoints")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator(
        "total_hits",
        "total_runs",
        "total_good_defense",
        "total_bonus_cookie",
        "total_homerun",
        "games_played",
        "mvp_count",
        mode="before",
    )
    @classmethod
    def _clamp_counter(cls, value: Any) -> int:
        return _non_negative(value)

    @field_validator("has_perfect_game", mode="before")
    @classmethod
    def _none_is_false(cls, value: Any) -> bool:
        return bool(value)

    @field_validator("total_points", mode="before")
    @classmethod
    def _discard_points(cls, value: Any) -> int:
        return 0

    @model_validator(mode="after")
    def _recompute_points(self) -> "StatSnapshot":
        total = sum(getattr(self, name) for name in _SCORING_FIELDS)
        object.__setattr__(self, "total_points", total)
        return self

    def value(self, metric: Metric) -> int:
        """Return the counter a :class:`Metric` refers to."""
        return getattr(self, _METRIC_FIELDS[metric])


_SCORING_FIELDS: tuple[str, ...] = (
    "total_hits",
    "total_runs",
    "total_good_defense",
    "total_bonus_cookie",
)

_METRIC_FIELDS: dict[Metric, str] = {
    Metric.HITS: "total_hits",
    Metric.RUNS: "total_runs",
    Metric.GOOD_DEFENSE: "total_good_defense",
    Metric.BONUS_COOKIE: "total_bonus_cookie",
    Metric.HOMERUN: "total_homerun",
    Metric.GAMES_PLAYED: "games_played",
    Metric.MVP_COUNT: "mvp_count",
    Metric.TOTAL_POINTS: "total_points",
}
