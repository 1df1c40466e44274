"""Statistics aggregation: per-game history -> cumulative snapshot.

Pure functions, no I/O.  The aggregator is the only place that decides
whether the currently open game counts toward ``games_played``: it does,
exactly once, whenever ``open_game`` is passed.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Union

from classball.ir.stats import PerGameStats, StatSnapshot

logger = logging.getLogger(__name__)

GameRecord = Union[PerGameStats, Mapping[str, Any]]


def _coerce(record: GameRecord) -> PerGameStats:
    if isinstance(record, PerGameStats):
        return record
    return PerGameStats.from_record(dict(record))


def player_points(stats: GameRecord | None) -> int:
    """Return the points a single game's record is worth.

    Hits, runs, good defensive plays and bonus cookies are worth one point
    each; an empty record is worth nothing.
    """
    if stats is None:
        return 0
    return _coerce(stats).points


def aggregate(
    history: Iterable[GameRecord],
    open_game: GameRecord | None = None,
) -> StatSnapshot:
    """Combine finished games and an optional in-progress game into a snapshot.

    Parameters
    ----------
    history:
        Completed-game records for one player.  Raw mappings are parsed with
        :meth:`PerGameStats.from_record`.
    open_game:
        Stats of the game currently being played, if any.  Its counters are
        added and it counts as one game played.  MVP and perfect-game status
        are only decided when a game is finished, so the open game never
        contributes to ``mvp_count`` or ``has_perfect_game``.  The caller must
        not pass a game that is already in *history*.
    """
    games = [_coerce(r) for r in history]

    totals = {
        "total_hits": sum(g.hits for g in games),
        "total_runs": sum(g.runs for g in games),
        "total_good_defense": sum(g.good_defense for g in games),
        "total_bonus_cookie": sum(g.bonus_cookie for g in games),
        "total_homerun": sum(g.homerun for g in games),
    }
    games_played = len(games)

    if open_game is not None:
        current = _coerce(open_game)
        totals["total_hits"] += current.hits
        totals["total_runs"] += current.runs
        totals["total_good_defense"] += current.good_defense
        totals["total_bonus_cookie"] += current.bonus_cookie
        totals["total_homerun"] += current.homerun
        games_played += 1

    snapshot = StatSnapshot(
        **totals,
        games_played=games_played,
        mvp_count=sum(1 for g in games if g.is_mvp),
        has_perfect_game=any(g.perfect_game for g in games),
    )
    logger.debug(
        "Aggregated %d finished game(s)%s -> %d points",
        len(games),
        " + open game" if open_game is not None else "",
        snapshot.total_points,
    )
    return snapshot


def snapshot_from_mapping(raw: Mapping[str, Any] | None) -> StatSnapshot:
    """Build a snapshot from an arbitrary stats mapping.

    For callers that already hold cumulative totals.  Missing or negative
    counters become zero and ``totalPoints`` is recomputed.
    """
    if not raw:
        return StatSnapshot()
    return StatSnapshot.model_validate(dict(raw))
