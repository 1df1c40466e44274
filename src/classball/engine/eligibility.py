"""Award checking: which badges a snapshot newly earns.

Rules are evaluated without any guard.  A rule that raises signals a broken
catalog entry, so the error propagates and fails the whole evaluation rather
than silently skipping one badge.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence

from classball.ir.badges import BadgeDefinition
from classball.ir.stats import StatSnapshot

from .catalog import BadgeCatalog

logger = logging.getLogger(__name__)


def find_newly_earned(
    catalog: BadgeCatalog,
    snapshot: StatSnapshot,
    owned: Iterable[str] = (),
) -> list[BadgeDefinition]:
    """Return badges whose rule *snapshot* satisfies and that are not owned.

    The result follows catalog order.  Calling again with the same snapshot
    and ``owned`` extended by this result returns an empty list.
    """
    owned_set = set(owned)
    earned = [
        badge
        for badge in catalog
        if badge.id not in owned_set and badge.condition(snapshot)
    ]
    if earned:
        logger.debug("Newly earned: %s", ", ".join(b.id for b in earned))
    return earned


def merge_awards(
    owned: Sequence[str], earned: Iterable[BadgeDefinition | str]
) -> list[str]:
    """Return a new owned-id list with *earned* appended.

    Existing order is preserved, ids already present are not repeated and
    nothing is ever removed.  *owned* itself is left untouched.
    """
    merged = list(owned)
    seen = set(merged)
    for item in earned:
        badge_id = item if isinstance(item, str) else item.id
        if badge_id not in seen:
            merged.append(badge_id)
            seen.add(badge_id)
    return merged


def check_roster(
    catalog: BadgeCatalog,
    snapshots: Mapping[str, StatSnapshot],
    owned_by_player: Mapping[str, Sequence[str]] | None = None,
) -> dict[str, list[BadgeDefinition]]:
    """Evaluate every player in *snapshots* at once.

    Returns ``player_id -> newly earned badges``; players with nothing new
    are left out.
    """
    owned_by_player = owned_by_player or {}
    results: dict[str, list[BadgeDefinition]] = {}
    for player_id, snapshot in snapshots.items():
        earned = find_newly_earned(
            catalog, snapshot, owned_by_player.get(player_id, ())
        )
        if earned:
            results[player_id] = earned
    logger.info(
        "Checked %d player(s); %d earned new badges", len(snapshots), len(results)
    )
    return results
