"""Tests for FIR boundary containment."""

import json

import pytest

from flightlookup.navigation.airspace import (
    UNKNOWN_FIR_ID,
    AirspaceIndex,
    AirspaceKind,
    BoundaryFeature,
    FirMatch,
    MultiPolygonGeometry,
    PolygonGeometry,
    classify_position,
    parse_boundaries,
    point_in_polygon,
    point_in_ring,
)
from flightlookup.navigation.geodesy import GeoPoint

# 10x10 degree square with a 2x2 hole in the middle, [lon, lat] pairs
OUTER = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]
HOLE = [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]]


def square(lon: float, lat: float, size: float) -> list[list[float]]:
    """Build a closed square ring with its south-west corner at lon/lat."""
    return [
        [lon, lat],
        [lon + size, lat],
        [lon + size, lat + size],
        [lon, lat + size],
        [lon, lat],
    ]


def feature(fir_id: str | None, geometry: dict, oceanic: object = "0") -> dict:
    """Build a GeoJSON feature."""
    properties: dict = {"oceanic": oceanic}
    if fir_id is not None:
        properties["id"] = fir_id
    return {"type": "Feature", "properties": properties, "geometry": geometry}


def polygon(*rings: list[list[float]]) -> dict:
    """Build a Polygon geometry."""
    return {"type": "Polygon", "coordinates": list(rings)}


def at(lon: float, lat: float) -> GeoPoint:
    """Build a point from lon/lat."""
    return GeoPoint(longitude=lon, latitude=lat)


class TestPointInRing:
    """Test the ray-casting primitive."""

    def test_inside(self) -> None:
        """Test point inside square."""
        assert point_in_ring(at(5, 5), OUTER) is True

    def test_outside(self) -> None:
        """Test points outside square."""
        assert point_in_ring(at(15, 5), OUTER) is False
        assert point_in_ring(at(5, -1), OUTER) is False

    def test_unclosed_ring(self) -> None:
        """Test an open ring behaves like the closed one."""
        open_ring = OUTER[:-1]

        assert point_in_ring(at(5, 5), open_ring) is True
        assert point_in_ring(at(11, 5), open_ring) is False

    def test_concave_ring(self) -> None:
        """Test the notch of a U-shaped ring is outside."""
        u_shape = [[0, 0], [9, 0], [9, 9], [6, 9], [6, 3], [3, 3], [3, 9], [0, 9]]

        assert point_in_ring(at(1.5, 6), u_shape) is True
        assert point_in_ring(at(4.5, 6), u_shape) is False
        assert point_in_ring(at(7.5, 6), u_shape) is True

    def test_empty_ring(self) -> None:
        """Test an empty ring contains nothing."""
        assert point_in_ring(at(0, 0), []) is False


class TestPointInPolygon:
    """Test polygons with holes."""

    def test_inside_exterior(self) -> None:
        """Test point inside exterior and outside the hole."""
        assert point_in_polygon(at(2, 2), [OUTER, HOLE]) is True

    def test_inside_hole(self) -> None:
        """Test point inside the hole is outside the polygon."""
        assert point_in_polygon(at(5, 5), [OUTER, HOLE]) is False

    def test_outside_exterior(self) -> None:
        """Test point outside the exterior."""
        assert point_in_polygon(at(20, 20), [OUTER, HOLE]) is False

    def test_no_rings(self) -> None:
        """Test polygon without rings contains nothing."""
        assert point_in_polygon(at(5, 5), []) is False


class TestClassifyPosition:
    """Test FIR selection among overlapping boundaries."""

    @pytest.fixture
    def boundaries(self) -> list[BoundaryFeature]:
        """Create overlapping oceanic and land boundaries."""
        return parse_boundaries(
            {
                "type": "FeatureCollection",
                "features": [
                    feature("KZWY", polygon(square(-20, -20, 40)), oceanic="1"),
                    feature("KZNY", polygon(square(0, 0, 10))),
                    feature("KZBW", polygon(square(5, 5, 10))),
                    feature("TTZO", polygon(square(-20, -20, 10)), oceanic=1),
                ],
            }
        )

    def test_land_wins_over_oceanic(self, boundaries: list[BoundaryFeature]) -> None:
        """Test land FIR is chosen even though oceanic comes first."""
        match = classify_position(at(2, 2), boundaries)

        assert match == FirMatch(fir_id="KZNY", fir_name="KZNY", is_oceanic=False)

    def test_first_land_in_input_order(self, boundaries: list[BoundaryFeature]) -> None:
        """Test overlapping land FIRs resolve to the first one listed."""
        match = classify_position(at(7, 7), boundaries)

        assert match is not None
        assert match.fir_id == "KZNY"

    def test_first_oceanic_when_no_land(self, boundaries: list[BoundaryFeature]) -> None:
        """Test only-oceanic matches return the first oceanic FIR."""
        match = classify_position(at(-15, -15), boundaries)

        assert match is not None
        assert match.fir_id == "KZWY"
        assert match.is_oceanic is True

    def test_no_match(self, boundaries: list[BoundaryFeature]) -> None:
        """Test position outside every FIR."""
        assert classify_position(at(100, 50), boundaries) is None

    def test_no_boundaries(self) -> None:
        """Test empty boundary list."""
        assert classify_position(at(0, 0), []) is None

    def test_name_lookup(self, boundaries: list[BoundaryFeature]) -> None:
        """Test FIR names come from the mapping when known."""
        match = classify_position(at(2, 2), boundaries, {"KZNY": "New York"})

        assert match is not None
        assert match.fir_name == "New York"
        assert match.display_name() == "New York (KZNY)"

    def test_name_falls_back_to_id(self, boundaries: list[BoundaryFeature]) -> None:
        """Test unknown and empty names fall back to the id."""
        match = classify_position(at(2, 2), boundaries, {"KZNY": ""})

        assert match is not None
        assert match.fir_name == "KZNY"

    def test_hole_excludes_position(self) -> None:
        """Test a position in a hole falls through to the next FIR."""
        boundaries = parse_boundaries(
            [
                feature("OUTR", polygon(OUTER, HOLE)),
                feature("INNR", polygon(square(4, 4, 2))),
            ]
        )

        match = classify_position(at(5, 5), boundaries)

        assert match is not None
        assert match.fir_id == "INNR"


class TestMultiPolygon:
    """Test MultiPolygon boundaries."""

    @pytest.fixture
    def index(self) -> AirspaceIndex:
        """Create index with one two-part region."""
        geometry = {
            "type": "MultiPolygon",
            "coordinates": [
                [square(0, 0, 5)],
                [square(20, 20, 5), square(21, 21, 1)],
            ],
        }
        return AirspaceIndex.from_geojson({"features": [feature("SPLT", geometry)]})

    def test_first_part(self, index: AirspaceIndex) -> None:
        """Test position in the first polygon."""
        match = index.classify(at(1, 1))

        assert match is not None
        assert match.fir_id == "SPLT"

    def test_second_part(self, index: AirspaceIndex) -> None:
        """Test position in the second polygon."""
        assert index.classify(at(24, 24)) is not None

    def test_hole_in_second_part(self, index: AirspaceIndex) -> None:
        """Test hole of the second polygon is excluded."""
        assert index.classify(at(21.5, 21.5)) is None

    def test_between_parts(self, index: AirspaceIndex) -> None:
        """Test the gap between the parts."""
        assert index.classify(at(10, 10)) is None

    def test_geometry_type(self, index: AirspaceIndex) -> None:
        """Test parsed geometry type."""
        assert isinstance(index.boundaries[0].geometry, MultiPolygonGeometry)


class TestParseBoundaries:
    """Test GeoJSON decoding."""

    def test_json_string(self) -> None:
        """Test JSON text input."""
        text = json.dumps({"features": [feature("EGTT", polygon(OUTER))]})

        boundaries = parse_boundaries(text)

        assert len(boundaries) == 1
        assert boundaries[0].fir_id == "EGTT"
        assert boundaries[0].kind is AirspaceKind.LAND
        assert isinstance(boundaries[0].geometry, PolygonGeometry)

    def test_json_bytes(self) -> None:
        """Test JSON bytes input."""
        text = json.dumps({"features": [feature("EGTT", polygon(OUTER))]})

        assert len(parse_boundaries(text.encode("utf-8"))) == 1

    def test_coordinates_converted_to_float_tuples(self) -> None:
        """Test coordinates are stored as immutable float pairs."""
        boundaries = parse_boundaries([feature("EGTT", polygon(OUTER))])
        geometry = boundaries[0].geometry

        assert isinstance(geometry, PolygonGeometry)
        assert geometry.rings[0][1] == (10.0, 0.0)

    @pytest.mark.parametrize("oceanic", ["1", 1])
    def test_oceanic_flag(self, oceanic: object) -> None:
        """Test oceanic flag as string or number."""
        boundaries = parse_boundaries([feature("KZWY", polygon(OUTER), oceanic=oceanic)])

        assert boundaries[0].is_oceanic is True

    @pytest.mark.parametrize("oceanic", ["0", 0, None, True, "yes"])
    def test_non_oceanic_flag(self, oceanic: object) -> None:
        """Test any other flag value means land."""
        boundaries = parse_boundaries([feature("KZNY", polygon(OUTER), oceanic=oceanic)])

        assert boundaries[0].is_oceanic is False

    def test_missing_id(self) -> None:
        """Test features without an id get the placeholder id."""
        boundaries = parse_boundaries([feature(None, polygon(OUTER))])

        assert boundaries[0].fir_id == UNKNOWN_FIR_ID

    def test_unsupported_geometry_skipped(self) -> None:
        """Test non-polygon features are skipped."""
        boundaries = parse_boundaries(
            [
                feature("LINE", {"type": "LineString", "coordinates": [[0, 0], [1, 1]]}),
                feature("EGTT", polygon(OUTER)),
            ]
        )

        assert [b.fir_id for b in boundaries] == ["EGTT"]

    def test_malformed_coordinates_skipped(self) -> None:
        """Test features with broken coordinates are skipped."""
        boundaries = parse_boundaries(
            [
                feature("BAD1", {"type": "Polygon", "coordinates": None}),
                feature("BAD2", {"type": "Polygon", "coordinates": [[[0]]]}),
                feature("BAD3", {"type": "Polygon", "coordinates": [[["x", "y"]]]}),
                "not a feature",
                feature("EGTT", polygon(OUTER)),
            ]
        )

        assert [b.fir_id for b in boundaries] == ["EGTT"]

    @pytest.mark.parametrize(
        "payload", [None, "", "{not json", b"\xff\xfe", 42, {"features": "x"}]
    )
    def test_bad_payload(self, payload: object) -> None:
        """Test unusable payloads give no boundaries."""
        assert parse_boundaries(payload) == []  # type: ignore[arg-type]

    def test_missing_features_key(self) -> None:
        """Test a collection without features is empty."""
        assert parse_boundaries({"type": "FeatureCollection"}) == []


class TestBoundaryFeature:
    """Test BoundaryFeature containment dispatch."""

    def test_unknown_geometry_raises(self) -> None:
        """Test unknown geometry objects are rejected."""
        boundary = BoundaryFeature(
            fir_id="ODD",
            kind=AirspaceKind.LAND,
            geometry="circle",  # type: ignore[arg-type]
        )

        with pytest.raises(TypeError, match="ODD"):
            boundary.contains(at(0, 0))


class TestAirspaceIndex:
    """Test the index wrapper."""

    def test_from_geojson_with_names(self) -> None:
        """Test index applies FIR names."""
        index = AirspaceIndex.from_geojson(
            {"features": [feature("EGTT", polygon(square(-6, 49, 8)))]},
            {"EGTT": "London"},
        )

        match = index.classify(GeoPoint.from_lat_lon(51.47, -0.45))

        assert index.feature_count == 1
        assert match is not None
        assert match.display_name() == "London (EGTT)"

    def test_empty_index(self) -> None:
        """Test an index without boundaries matches nothing."""
        index = AirspaceIndex([])

        assert index.feature_count == 0
        assert index.classify(at(0, 0)) is None

    def test_names_copied(self) -> None:
        """Test later changes to the name mapping do not leak in."""
        names = {"EGTT": "London"}
        index = AirspaceIndex.from_geojson([feature("EGTT", polygon(OUTER))], names)
        names["EGTT"] = "Changed"

        match = index.classify(at(1, 1))

        assert match is not None
        assert match.fir_name == "London"
