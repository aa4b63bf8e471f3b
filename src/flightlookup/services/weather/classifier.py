"""Flight category classification.

Maps visibility and ceiling to VFR / MVFR / IFR / LIFR. Missing values
count as unrestricted (10 SM, 10000 ft), so a sparse report never comes
out stricter than what was observed.

Accepts either an Observation from METARParser or a decoded METAR mapping
shaped like ``{"visibility": {"value": 3, "unit": "SM"},
"clouds": [{"quantity": "BKN", "height": 1200}]}``.
"""

import math
from collections.abc import Iterable, Mapping
from typing import Any

from flightlookup.core.logging_system import get_logger
from flightlookup.services.weather.models import (
    CloudLayer,
    FlightCategory,
    Observation,
    SkyCondition,
)

logger = get_logger(__name__)

DEFAULT_VISIBILITY_SM = 10.0
DEFAULT_CEILING_FT = 10000.0

METERS_PER_STATUTE_MILE = 1609.344

CEILING_QUANTITIES = (SkyCondition.BROKEN.value, SkyCondition.OVERCAST.value)


def classify_flight_category(
    visibility_sm: Any = None,
    ceiling_ft: Any = None,
) -> FlightCategory:
    """Classify conditions into a flight category.

    Args:
        visibility_sm: Visibility in statute miles. None or unparsable
            values default to 10.
        ceiling_ft: Ceiling in feet. None or unparsable values default
            to 10000.

    Returns:
        FlightCategory (first matching rule from LIFR down to VFR).
    """
    visibility = _to_float(visibility_sm, DEFAULT_VISIBILITY_SM)
    ceiling = _to_float(ceiling_ft, DEFAULT_CEILING_FT)

    if visibility < 1 or ceiling < 500:
        return FlightCategory.LIFR
    if visibility < 3 or ceiling < 1000:
        return FlightCategory.IFR
    if visibility < 5 or ceiling < 3000:
        return FlightCategory.MVFR
    return FlightCategory.VFR


def ceiling_from_layers(layers: Iterable[CloudLayer | Mapping[str, Any]] | None) -> float | None:
    """Get the ceiling from reported cloud layers.

    The ceiling is the lowest broken or overcast layer; FEW and SCT layers
    do not count. Layers may arrive in any order.

    Args:
        layers: CloudLayer objects or mappings with "quantity" and
            "height" keys.

    Returns:
        Ceiling height in feet, or None if no layer forms a ceiling.
    """
    if not layers:
        return None

    heights: list[float] = []
    for layer in layers:
        if isinstance(layer, CloudLayer):
            if layer.condition.is_ceiling:
                heights.append(float(layer.altitude))
        elif isinstance(layer, Mapping):
            if str(layer.get("quantity", "")).upper() in CEILING_QUANTITIES:
                height = _to_float(layer.get("height"), None)
                if height is not None:
                    heights.append(height)

    return min(heights) if heights else None


def classify_observation(observation: Observation | Mapping[str, Any] | None) -> FlightCategory:
    """Classify a decoded observation.

    Args:
        observation: Observation or decoded METAR mapping.

    Returns:
        FlightCategory.
    """
    if observation is None:
        return classify_flight_category()

    if isinstance(observation, Observation):
        return classify_flight_category(
            observation.visibility_sm, ceiling_from_layers(observation.clouds)
        )

    visibility = _visibility_from_mapping(observation.get("visibility"))
    ceiling = ceiling_from_layers(observation.get("clouds"))
    return classify_flight_category(visibility, ceiling)


def _visibility_from_mapping(visibility: Any) -> float | None:
    """Read visibility in statute miles from a decoded METAR field."""
    if not isinstance(visibility, Mapping):
        return _to_float(visibility, None)

    value = _to_float(visibility.get("value"), None)
    if value is None:
        return None

    unit = str(visibility.get("unit", "SM")).lower()
    if unit == "m":
        return value / METERS_PER_STATUTE_MILE
    if unit == "km":
        return value * 1000 / METERS_PER_STATUTE_MILE
    return value


def _to_float(value: Any, default: float | None) -> float | None:
    """Convert a reported value to float, falling back on bad input."""
    if value is None or isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.debug("Unparsable weather value %r, using %s", value, default)
        return default
    if math.isnan(result):
        return default
    return result
