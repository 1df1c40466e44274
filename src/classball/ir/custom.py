"""Teacher-authored custom badges and their automatic award conditions.

A custom badge is either handed out manually or awarded automatically once
one cumulative counter reaches a teacher-chosen minimum.  The condition is
stored as a ``condition_type`` plus a small ``condition_data`` dict keyed by
the input field for that type (e.g. ``{"minHits": 20}``).
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, model_validator

from .badges import BadgeDefinition, BadgeTier, ManualRule, Metric, ThresholdRule


class ConditionType(str, Enum):
    """How a custom badge is awarded."""

    MANUAL = "manual"
    AUTO_APPEARANCES = "auto_appearances"
    AUTO_HOME_RUNS = "auto_home_runs"
    AUTO_RUNS = "auto_runs"
    AUTO_HITS = "auto_hits"


class ConditionInput(BaseModel):
    """Input field backing an automatic condition type."""

    field: str
    label: str
    metric: Metric
    min: int = 1
    max: int = 100


CONDITION_INPUTS: dict[ConditionType, ConditionInput] = {
    ConditionType.AUTO_APPEARANCES: ConditionInput(
        field="minAppearances", label="Minimum games played", metric=Metric.GAMES_PLAYED,
    ),
    ConditionType.AUTO_HOME_RUNS: ConditionInput(
        field="minHomeRuns", label="Minimum home runs", metric=Metric.HOMERUN,
    ),
    ConditionType.AUTO_RUNS: ConditionInput(
        field="minRuns", label="Minimum runs", metric=Metric.RUNS,
    ),
    ConditionType.AUTO_HITS: ConditionInput(
        field="minHits", label="Minimum hits", metric=Metric.HITS,
    ),
}


def validate_condition(
    condition_type: ConditionType, condition_data: dict[str, Any] | None
) -> list[str]:
    """Check *condition_data* against the input rules for *condition_type*.

    Returns a list of human-readable error strings (empty = valid).
    """
    if condition_type == ConditionType.MANUAL:
        return []

    config = CONDITION_INPUTS.get(condition_type)
    if config is None:
        return [f"Unknown condition type {condition_type!r}."]

    value = (condition_data or {}).get(config.field)
    if value is None or value == "":
        return [f"{config.label} ({config.field}) is required."]

    try:
        number = float(value)
    except (TypeError, ValueError):
        return [f"{config.field} must be a number, got {value!r}."]

    if not math.isfinite(number):
        return [f"{config.field} must be a finite number, got {value!r}."]

    errors: list[str] = []
    if number != int(number):
        errors.append(f"{config.field} must be a whole number, got {value!r}.")
    if number < config.min:
        errors.append(f"{config.field} must be at least {config.min}.")
    if number > config.max:
        errors.append(f"{config.field} must be at most {config.max}.")
    return errors


def default_condition_data(condition_type: ConditionType) -> dict[str, int] | None:
    """Return the pre-filled condition data for a new badge of this type."""
    config = CONDITION_INPUTS.get(condition_type)
    if config is None:
        return None
    return {config.field: config.min}


class CustomBadgeSpec(BaseModel):
    """A badge created by a teacher rather than shipped with the catalog."""

    id: str
    name: str
    icon: str
    description: str = ""
    condition_type: ConditionType = ConditionType.MANUAL
    condition_data: dict[str, Any] | None = None

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _validate_condition(self) -> "CustomBadgeSpec":
        errors = validate_condition(self.condition_type, self.condition_data)
        if errors:
            raise ValueError(
                f"Custom badge '{self.id}' has an invalid condition: "
                + " ".join(errors)
            )
        return self

    def to_definition(self, tier: BadgeTier = BadgeTier.SPECIAL) -> BadgeDefinition:
        """Build the catalog definition for this custom badge.

        Custom badges are SPECIAL unless they replace a shipped badge, in which
        case the caller passes the shipped tier.
        """
        config = CONDITION_INPUTS.get(self.condition_type)
        if config is None:
            rule: ThresholdRule | ManualRule = ManualRule()
        else:
            threshold = int(float(self.condition_data[config.field]))
            rule = ThresholdRule(metric=config.metric, threshold=threshold)
        return BadgeDefinition(
            id=self.id,
            name=self.name,
            icon=self.icon,
            description=self.description,
            tier=tier,
            rule=rule,
        )
