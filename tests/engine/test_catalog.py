"""Tests for BadgeCatalog and the JSON loaders."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from classball.engine.catalog import BadgeCatalog, load_badge_set, load_default_badge_set
from classball.ir.badge_set import BadgeSet
from classball.ir.badges import BadgeDefinition, BadgeTier, ManualRule, Metric, ThresholdRule
from classball.ir.custom import ConditionType, CustomBadgeSpec


def _make_badge(badge_id: str, threshold: int = 1) -> BadgeDefinition:
    return BadgeDefinition(
        id=badge_id,
        name=badge_id.replace("_", " ").title(),
        icon="*",
        description="",
        tier=BadgeTier.BEGINNER,
        rule=ThresholdRule(metric=Metric.HITS, threshold=threshold),
    )


class TestDefaultCatalog:
    def test_loads_all_shipped_badges(self, catalog: BadgeCatalog) -> None:
        assert len(catalog) == 30

    def test_section_markers_skipped(self, default_set: BadgeSet) -> None:
        assert all(b.id for b in default_set.badges)
        assert len(default_set.categories) == 6

    def test_order_follows_data_file(self, catalog: BadgeCatalog) -> None:
        ids = catalog.ids()
        assert ids[:5] == [
            "first_game", "first_hit", "first_run", "first_defense", "first_cookie",
        ]
        assert ids[-1] == "legend_cookie"

    def test_iteration_is_stable(self, catalog: BadgeCatalog) -> None:
        assert [b.id for b in catalog] == [b.id for b in catalog]

    def test_get(self, catalog: BadgeCatalog) -> None:
        steady = catalog.get("steady")
        assert steady is not None
        assert steady.target() == 5
        assert catalog.get("nope") is None

    def test_contains(self, catalog: BadgeCatalog) -> None:
        assert "hit_maker" in catalog
        assert "nope" not in catalog

    def test_every_tier_used(self, catalog: BadgeCatalog) -> None:
        assert {b.tier for b in catalog} == set(BadgeTier)

    def test_no_manual_badges_shipped(self, catalog: BadgeCatalog) -> None:
        assert not any(b.is_manual for b in catalog)


class TestCatalogConstruction:
    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValueError, match="Duplicate badge id"):
            BadgeCatalog([_make_badge("a"), _make_badge("a")])

    def test_resolve_keeps_order_and_skips_unknown(self, caplog) -> None:
        catalog = BadgeCatalog([_make_badge("a"), _make_badge("b")])
        with caplog.at_level(logging.WARNING):
            resolved = catalog.resolve(["b", "ghost", "a"])
        assert [b.id for b in resolved] == ["b", "a"]
        assert "ghost" in caplog.text

    def test_hidden_badges_dropped(self) -> None:
        bs = BadgeSet(badges=[_make_badge("a"), _make_badge("b")], hidden=["a"])
        assert BadgeCatalog.from_badge_set(bs).ids() == ["b"]

    def test_override_changes_name_and_icon_only(self) -> None:
        bs = BadgeSet(
            badges=[_make_badge("a", threshold=3)],
            overrides={"a": {"name": "Renamed", "icon": "R"}},
        )
        badge = BadgeCatalog.from_badge_set(bs).get("a")
        assert badge.name == "Renamed"
        assert badge.icon == "R"
        assert badge.target() == 3

    def test_override_for_unknown_badge_warns(self, caplog) -> None:
        bs = BadgeSet(
            badges=[_make_badge("a")],
            overrides={"ghost": {"name": "Ghost", "icon": "G"}},
        )
        with caplog.at_level(logging.WARNING):
            catalog = BadgeCatalog.from_badge_set(bs)
        assert catalog.ids() == ["a"]
        assert "ghost" in caplog.text

    def test_custom_badges_appended(self) -> None:
        bs = BadgeSet(
            badges=[_make_badge("a")],
            custom_badges=[CustomBadgeSpec(id="helper", name="Helper", icon="H")],
        )
        catalog = BadgeCatalog.from_badge_set(bs)
        assert catalog.ids() == ["a", "helper"]
        assert isinstance(catalog.get("helper").rule, ManualRule)

    def test_custom_badge_replaces_shipped_badge_in_place(self) -> None:
        bs = BadgeSet(
            badges=[_make_badge("a"), _make_badge("b")],
            custom_badges=[
                CustomBadgeSpec(
                    id="a",
                    name="Custom A",
                    icon="A",
                    condition_type=ConditionType.AUTO_RUNS,
                    condition_data={"minRuns": 4},
                )
            ],
        )
        catalog = BadgeCatalog.from_badge_set(bs)
        assert catalog.ids() == ["a", "b"]
        assert catalog.get("a").name == "Custom A"
        assert catalog.get("a").rule.metric is Metric.RUNS
        assert catalog.get("a").tier is BadgeTier.BEGINNER
        assert catalog.get("b").tier is BadgeTier.BEGINNER


class TestLoadBadgeSet:
    def test_class_file_inherits_shipped_badges(self, tmp_path: Path) -> None:
        path = tmp_path / "class.json"
        path.write_text(
            json.dumps(
                {
                    "hidden": ["first_cookie"],
                    "overrides": {"steady": {"name": "Regular", "icon": "R"}},
                    "custom_badges": [
                        {"id": "helper", "name": "Helper", "icon": "H"},
                    ],
                }
            ),
            encoding="utf-8",
        )
        catalog = BadgeCatalog.from_badge_set(load_badge_set(path))
        assert "first_cookie" not in catalog
        assert catalog.get("steady").name == "Regular"
        assert "helper" in catalog
        assert len(catalog) == 30

    def test_explicit_paths(self, tmp_path: Path) -> None:
        badges_path = tmp_path / "badges.json"
        categories_path = tmp_path / "categories.json"
        badges_path.write_text(
            json.dumps(
                [
                    {"_section": "Only one"},
                    _make_badge("solo").model_dump(mode="json"),
                ]
            ),
            encoding="utf-8",
        )
        categories_path.write_text(
            json.dumps(
                [
                    {"id": "special", "name": "Special", "icon": "", "description": "", "badge_ids": ["solo"]}
                ]
            ),
            encoding="utf-8",
        )
        bs = load_default_badge_set(badges_path, categories_path)
        assert [b.id for b in bs.badges] == ["solo"]
        assert bs.get_category("special").badge_ids == ["solo"]
