"""FlightLookup - reference data and navigation core for VATSIM flight lookup.

Parses the VATSpy airport/FIR dataset, resolves which FIR a position is
in, computes great-circle distance, bearing and ETA, and classifies METAR
observations into flight categories.
"""

from flightlookup.airports import (
    AirportRecord,
    ReferenceDataSnapshot,
    ReferenceDataStore,
    parse_reference_data,
)
from flightlookup.navigation import (
    AirspaceIndex,
    ETAResult,
    FirMatch,
    GeoPoint,
    classify_position,
    distance_nm,
    estimate_arrival,
    initial_bearing_deg,
    parse_boundaries,
)
from flightlookup.resolver import FlightResolver, create_resolver
from flightlookup.services.weather import (
    FlightCategory,
    METARParser,
    Observation,
    classify_flight_category,
    classify_observation,
)
from flightlookup.version import __version__

__all__ = [
    "AirportRecord",
    "AirspaceIndex",
    "ETAResult",
    "FirMatch",
    "FlightCategory",
    "FlightResolver",
    "GeoPoint",
    "METARParser",
    "Observation",
    "ReferenceDataSnapshot",
    "ReferenceDataStore",
    "__version__",
    "classify_flight_category",
    "classify_observation",
    "classify_position",
    "create_resolver",
    "distance_nm",
    "estimate_arrival",
    "initial_bearing_deg",
    "parse_boundaries",
    "parse_reference_data",
]
