"""Navigation math and FIR resolution.

Typical usage:
    from flightlookup.navigation import AirspaceIndex, GeoPoint, estimate_arrival

    position = GeoPoint.from_lat_lon(pilot_lat, pilot_lon)
    fir = index.classify(position)
"""

from flightlookup.navigation.airspace import (
    AirspaceIndex,
    AirspaceKind,
    BoundaryFeature,
    FirMatch,
    MultiPolygonGeometry,
    PolygonGeometry,
    classify_position,
    parse_boundaries,
    point_in_multipolygon,
    point_in_polygon,
    point_in_ring,
)
from flightlookup.navigation.geodesy import (
    EARTH_RADIUS_NM,
    ETAResult,
    GeoPoint,
    distance_nm,
    estimate_arrival,
    initial_bearing_deg,
    split_duration,
)

__all__ = [
    "AirspaceIndex",
    "AirspaceKind",
    "BoundaryFeature",
    "EARTH_RADIUS_NM",
    "ETAResult",
    "FirMatch",
    "GeoPoint",
    "MultiPolygonGeometry",
    "PolygonGeometry",
    "classify_position",
    "distance_nm",
    "estimate_arrival",
    "initial_bearing_deg",
    "parse_boundaries",
    "point_in_multipolygon",
    "point_in_polygon",
    "point_in_ring",
    "split_duration",
]
