"""Weather services for FlightLookup.

Decodes METAR observations and classifies them into flight categories.
"""

from flightlookup.services.weather.classifier import (
    DEFAULT_CEILING_FT,
    DEFAULT_VISIBILITY_SM,
    ceiling_from_layers,
    classify_flight_category,
    classify_observation,
)
from flightlookup.services.weather.metar_parser import METARParser
from flightlookup.services.weather.models import (
    CloudLayer,
    FlightCategory,
    Observation,
    SkyCondition,
    Wind,
)

__all__ = [
    "CloudLayer",
    "DEFAULT_CEILING_FT",
    "DEFAULT_VISIBILITY_SM",
    "FlightCategory",
    "METARParser",
    "Observation",
    "SkyCondition",
    "Wind",
    "ceiling_from_layers",
    "classify_flight_category",
    "classify_observation",
]
