"""Display preferences decoded from string settings."""

from __future__ import annotations

from enum import Enum
from typing import Any


class DisplayType(str, Enum):
    CHART = "chart"
    NUMERIC = "numeric"
    BOTH = "both"


class DisplayUnit(str, Enum):
    PERCENTAGE = "percentage"
    MEGABYTES = "megabytes"
    GIGABYTES = "gigabytes"
    MEBIBYTES = "mebibytes"
    GIBIBYTES = "gibibytes"

    @property
    def is_binary(self) -> bool:
        return self in (DisplayUnit.MEBIBYTES, DisplayUnit.GIBIBYTES)


def _lookup(settings: Any, key: str) -> Any:
    if isinstance(settings, dict):
        return settings.get(key)
    return getattr(settings, key.replace("-", "_"), None)


def get_display_type_setting(settings: Any, key: str) -> DisplayType:
    """Decode ``key`` to a DisplayType; unknown or missing values give BOTH."""
    value = _lookup(settings, key)
    try:
        return DisplayType(value)
    except ValueError:
        return DisplayType.BOTH


def get_display_units_setting(settings: Any, key: str) -> DisplayUnit:
    """Decode ``key`` to a DisplayUnit; unknown or missing values give PERCENTAGE."""
    value = _lookup(settings, key)
    try:
        return DisplayUnit(value)
    except ValueError:
        return DisplayUnit.PERCENTAGE
