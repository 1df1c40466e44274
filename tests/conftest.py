"""Shared fixtures and helpers for badge engine tests."""

from __future__ import annotations

import pytest

from classball.engine.catalog import BadgeCatalog, load_default_badge_set
from classball.engine.categories import CategoryIndex
from classball.engine.progress import ProgressCalculator
from classball.ir.badge_set import BadgeSet


@pytest.fixture(scope="module")
def default_set() -> BadgeSet:
    """Module-scoped shipped badge set, loaded once."""
    return load_default_badge_set()


@pytest.fixture(scope="module")
def catalog(default_set: BadgeSet) -> BadgeCatalog:
    return BadgeCatalog.from_badge_set(default_set)


@pytest.fixture(scope="module")
def categories(default_set: BadgeSet, catalog: BadgeCatalog) -> CategoryIndex:
    return CategoryIndex(default_set.categories, catalog)


@pytest.fixture(scope="module")
def calc(catalog: BadgeCatalog, categories: CategoryIndex) -> ProgressCalculator:
    return ProgressCalculator(catalog, categories)
