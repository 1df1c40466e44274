"""Category definitions -- progression ladders of related badges."""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_CATEGORY_ID = "special"
"""Category that receives every badge no category lists explicitly."""


class CategoryDefinition(BaseModel):
    """A named achievement track (hits, runs, defense, ...)."""

    id: str
    """Unique identifier (e.g. 'hits')."""

    name: str
    icon: str
    description: str

    badge_ids: list[str]
    """Badge ids ordered from easiest to hardest.

    The order defines which badge is "next" in the track.
    """

    model_config = {"frozen": True}
