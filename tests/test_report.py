"""Tests for the plain-text player report."""

from __future__ import annotations

from classball.engine.badge_engine import BadgeEngine
from classball.report import _bar, render_evaluation, render_player_report
from classball.ir.stats import StatSnapshot


class TestBar:
    def test_empty_and_full(self) -> None:
        assert _bar(0) == "-" * 20
        assert _bar(100) == "#" * 20

    def test_half(self) -> None:
        assert _bar(50, width=10) == "#####-----"

    def test_clamped(self) -> None:
        assert _bar(250, width=4) == "####"
        assert _bar(-5, width=4) == "----"


class TestRenderPlayerReport:
    def test_sections(self) -> None:
        engine = BadgeEngine.load_default()
        result = engine.evaluate([{"stats": {"hits": 7, "runs": 1}, "isMVP": True}])
        text = render_evaluation("Minji", result)

        assert "Badge report -- Minji" in text
        assert "Total points:  8" in text
        assert "## New badges" in text
        assert "MVP Debut" in text
        assert "## Next up" in text
        assert "Hit Maker" in text
        assert "7/10" in text
        assert "70%" in text
        assert text.endswith("\n")

    def test_quiet_player(self) -> None:
        text = render_player_report(
            "Nobody",
            StatSnapshot(),
            newly_earned=[],
            next_badges=[],
            tier_counts={"beginner": 0},
        )
        assert "## New badges" not in text
        assert "## Next up" not in text
        assert "Games played:  0" in text
