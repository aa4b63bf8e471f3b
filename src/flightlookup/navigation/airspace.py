"""FIR boundary containment.

Finds the Flight Information Region an aircraft is in, using the VATSpy
Boundaries.geojson feature collection. Each feature is a Polygon or a
MultiPolygon whose coordinates are [longitude, latitude] pairs; the first
ring of a polygon is its exterior and the following rings are holes.

Regions may overlap (coastal FIRs reach into oceanic ones), so every
feature is tested and a land FIR is preferred over an oceanic one.

Typical usage:
    from flightlookup.navigation.airspace import AirspaceIndex
    from flightlookup.navigation.geodesy import GeoPoint

    index = AirspaceIndex.from_geojson(boundaries_json, store.snapshot().fir_names)
    match = index.classify(GeoPoint.from_lat_lon(51.47, -0.45))
    if match:
        print(match.display_name())  # "London (EGTT)"
"""

import json
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from flightlookup.core.logging_system import get_logger
from flightlookup.navigation.geodesy import GeoPoint

logger = get_logger(__name__)

UNKNOWN_FIR_ID = "Unknown FIR"
OCEANIC_FLAG = "1"

# (longitude, latitude)
Coordinate = tuple[float, float]
Ring = tuple[Coordinate, ...]
Polygon = tuple[Ring, ...]


class AirspaceKind(Enum):
    """Region classification used for overlap priority."""

    LAND = "land"
    OCEANIC = "oceanic"


@dataclass(frozen=True)
class PolygonGeometry:
    """Single polygon: exterior ring followed by hole rings."""

    rings: Polygon


@dataclass(frozen=True)
class MultiPolygonGeometry:
    """Several disjoint polygons forming one region."""

    polygons: tuple[Polygon, ...]


Geometry = PolygonGeometry | MultiPolygonGeometry


@dataclass(frozen=True)
class BoundaryFeature:
    """One FIR boundary.

    Attributes:
        fir_id: FIR identifier (e.g., "EGTT").
        kind: Land or oceanic region.
        geometry: Polygon or MultiPolygon geometry.
    """

    fir_id: str
    kind: AirspaceKind
    geometry: Geometry

    @property
    def is_oceanic(self) -> bool:
        """Check if this is an oceanic region."""
        return self.kind is AirspaceKind.OCEANIC

    def contains(self, point: GeoPoint) -> bool:
        """Check if the boundary contains a point.

        Raises:
            TypeError: If the geometry is not a known geometry type.
        """
        if isinstance(self.geometry, PolygonGeometry):
            return point_in_polygon(point, self.geometry.rings)
        if isinstance(self.geometry, MultiPolygonGeometry):
            return point_in_multipolygon(point, self.geometry.polygons)
        raise TypeError(
            f"Unsupported geometry for {self.fir_id}: {type(self.geometry).__name__}"
        )


@dataclass(frozen=True)
class FirMatch:
    """FIR containing a position.

    Attributes:
        fir_id: FIR identifier.
        fir_name: FIR name, or the identifier if no name is known.
        is_oceanic: True for oceanic regions.
    """

    fir_id: str
    fir_name: str
    is_oceanic: bool

    def display_name(self) -> str:
        """Get display name like "London (EGTT)"."""
        return f"{self.fir_name} ({self.fir_id})"


def point_in_ring(point: GeoPoint, ring: Sequence[Sequence[float]]) -> bool:
    """Ray-casting test of a point against one ring.

    The ring does not need to be closed; the edge from the last vertex
    back to the first is always tested. A vertex exactly at the point's
    latitude counts for the edge above it only, so vertices are never
    counted twice.

    Args:
        point: Position to test.
        ring: Sequence of (longitude, latitude) vertices.

    Returns:
        True if the point is inside the ring.
    """
    lon = point.longitude
    lat = point.latitude
    inside = False

    j = len(ring) - 1
    for i in range(len(ring)):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]

        if (yi > lat) != (yj > lat) and lon < (xj - xi) * (lat - yi) / (yj - yi) + xi:
            inside = not inside

        j = i

    return inside


def point_in_polygon(point: GeoPoint, rings: Sequence[Sequence[Sequence[float]]]) -> bool:
    """Check a point against a polygon with holes.

    Args:
        point: Position to test.
        rings: Exterior ring first, then hole rings.

    Returns:
        True if inside the exterior ring and outside every hole.
    """
    if not rings:
        return False

    if not point_in_ring(point, rings[0]):
        return False

    return not any(point_in_ring(point, hole) for hole in rings[1:])


def point_in_multipolygon(
    point: GeoPoint, polygons: Iterable[Sequence[Sequence[Sequence[float]]]]
) -> bool:
    """Check a point against a MultiPolygon (inside any of its polygons)."""
    return any(point_in_polygon(point, polygon) for polygon in polygons)


def classify_position(
    point: GeoPoint,
    boundaries: Iterable[BoundaryFeature],
    fir_names: Mapping[str, str] | None = None,
) -> FirMatch | None:
    """Find the FIR containing a position.

    All boundaries are tested. The first land FIR in input order wins;
    if only oceanic FIRs match, the first of those is returned.

    Args:
        point: Aircraft position.
        boundaries: FIR boundaries to test.
        fir_names: Optional FIR id -> name mapping.

    Returns:
        FirMatch, or None if the position is outside every boundary.
    """
    matches = [feature for feature in boundaries if feature.contains(point)]
    if not matches:
        return None

    chosen = next((feature for feature in matches if not feature.is_oceanic), matches[0])

    names = fir_names or {}
    return FirMatch(
        fir_id=chosen.fir_id,
        fir_name=names.get(chosen.fir_id) or chosen.fir_id,
        is_oceanic=chosen.is_oceanic,
    )


BoundaryPayload = str | bytes | Mapping[str, Any] | Sequence[Any] | None


def parse_boundaries(collection: BoundaryPayload) -> list[BoundaryFeature]:
    """Build boundary features from a GeoJSON FeatureCollection.

    Args:
        collection: FeatureCollection as a JSON string, a parsed dict, or
            a plain list of features.

    Returns:
        List of BoundaryFeature in input order. Features with other or
        malformed geometry are skipped; bad JSON yields an empty list.
    """
    if not collection:
        return []

    if isinstance(collection, str | bytes):
        try:
            collection = json.loads(collection)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Failed to parse boundary JSON: %s", e)
            return []

    if isinstance(collection, Mapping):
        features = collection.get("features") or []
        if not isinstance(features, Sequence) or isinstance(features, str):
            logger.error("Boundary payload has no feature list")
            return []
    elif isinstance(collection, Sequence) and not isinstance(collection, str):
        features = collection
    else:
        logger.error("Unsupported boundary payload: %s", type(collection).__name__)
        return []

    boundaries: list[BoundaryFeature] = []
    for feature in features:
        boundary = _parse_feature(feature)
        if boundary is not None:
            boundaries.append(boundary)

    logger.info(
        "Loaded %d FIR boundaries (%d skipped)",
        len(boundaries),
        len(features) - len(boundaries),
    )
    return boundaries


def _parse_feature(feature: Any) -> BoundaryFeature | None:
    """Convert one GeoJSON feature to a BoundaryFeature."""
    if not isinstance(feature, Mapping):
        return None

    properties = feature.get("properties") or {}
    geometry = feature.get("geometry") or {}
    if not isinstance(properties, Mapping) or not isinstance(geometry, Mapping):
        return None

    fir_id = str(properties.get("id") or UNKNOWN_FIR_ID)
    is_oceanic = str(properties.get("oceanic")) == OCEANIC_FLAG
    kind = AirspaceKind.OCEANIC if is_oceanic else AirspaceKind.LAND

    geometry_type = geometry.get("type")
    coordinates = geometry.get("coordinates")

    try:
        if geometry_type == "Polygon":
            shape: Geometry = PolygonGeometry(rings=_to_polygon(coordinates))
        elif geometry_type == "MultiPolygon":
            shape = MultiPolygonGeometry(
                polygons=tuple(_to_polygon(polygon) for polygon in coordinates)
            )
        else:
            logger.debug("Skipping %s with geometry type %s", fir_id, geometry_type)
            return None
    except (TypeError, ValueError, IndexError) as e:
        logger.debug("Skipping %s with malformed coordinates: %s", fir_id, e)
        return None

    return BoundaryFeature(fir_id=fir_id, kind=kind, geometry=shape)


def _to_polygon(rings: Any) -> Polygon:
    """Convert nested coordinate lists to a tuple of rings."""
    return tuple(
        tuple((float(vertex[0]), float(vertex[1])) for vertex in ring) for ring in rings
    )


class AirspaceIndex:
    """Loaded FIR boundaries ready for repeated position queries.

    Holds no per-query state; classify() is safe to call from several
    threads.
    """

    def __init__(
        self,
        boundaries: Iterable[BoundaryFeature],
        fir_names: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the index.

        Args:
            boundaries: FIR boundaries, in priority order.
            fir_names: FIR id -> name mapping (e.g., from the reference data).
        """
        self._boundaries: tuple[BoundaryFeature, ...] = tuple(boundaries)
        self._fir_names: Mapping[str, str] = dict(fir_names or {})

    @classmethod
    def from_geojson(
        cls,
        collection: BoundaryPayload,
        fir_names: Mapping[str, str] | None = None,
    ) -> "AirspaceIndex":
        """Create an index from a GeoJSON FeatureCollection."""
        return cls(parse_boundaries(collection), fir_names)

    def classify(self, point: GeoPoint) -> FirMatch | None:
        """Find the FIR containing a position.

        Args:
            point: Aircraft position.

        Returns:
            FirMatch, or None if outside every known FIR.
        """
        return classify_position(point, self._boundaries, self._fir_names)

    @property
    def boundaries(self) -> tuple[BoundaryFeature, ...]:
        """Get the loaded boundaries."""
        return self._boundaries

    @property
    def feature_count(self) -> int:
        """Get number of loaded boundaries."""
        return len(self._boundaries)
