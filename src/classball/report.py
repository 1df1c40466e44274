"""Plain-text badge report for one player, rendered with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader

from classball.engine.badge_engine import PlayerEvaluation
from classball.engine.progress import BadgeProgress
from classball.ir.badges import BadgeDefinition
from classball.ir.stats import StatSnapshot

_TEMPLATE_DIR = Path(__file__).parent / "templates"
_BAR_WIDTH = 20


def _bar(percent: float, width: int = _BAR_WIDTH) -> str:
    filled = int(round(width * max(0.0, min(100.0, percent)) / 100))
    return "#" * filled + "-" * (width - filled)


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["bar"] = _bar
    return env


def render_player_report(
    player_name: str,
    snapshot: StatSnapshot,
    newly_earned: Sequence[BadgeDefinition],
    next_badges: Sequence[BadgeProgress],
    tier_counts: dict[str, int],
) -> str:
    """Render the text report shown after a player's badges are checked."""
    template = _environment().get_template("player_report.txt.j2")
    return template.render(
        player_name=player_name,
        snapshot=snapshot,
        newly_earned=list(newly_earned),
        next_badges=list(next_badges),
        tier_counts=tier_counts,
    )


def render_evaluation(player_name: str, evaluation: PlayerEvaluation) -> str:
    """Convenience wrapper for a :class:`PlayerEvaluation`."""
    return render_player_report(
        player_name,
        evaluation.snapshot,
        evaluation.newly_earned,
        evaluation.next_badges,
        evaluation.tier_counts,
    )
