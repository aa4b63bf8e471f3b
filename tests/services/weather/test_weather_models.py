"""Tests for weather data models."""

import pytest

from flightlookup.services.weather.models import (
    CloudLayer,
    FlightCategory,
    Observation,
    SkyCondition,
    Wind,
)


class TestWind:
    """Tests for Wind dataclass."""

    def test_calm_wind(self) -> None:
        """Test detection of calm winds."""
        wind = Wind(direction=0, speed=0)
        assert wind.is_calm is True
        assert wind.to_display_string() == "Calm"

    def test_normal_wind(self) -> None:
        """Test normal wind conditions."""
        wind = Wind(direction=270, speed=15)
        assert wind.is_calm is False
        assert wind.to_display_string() == "270° at 15 KT"

    def test_gusting_wind(self) -> None:
        """Test wind with gusts."""
        wind = Wind(direction=180, speed=20, gust=30)
        assert wind.to_display_string() == "180° at 20 KT gusting to 30 KT"

    def test_variable_direction(self) -> None:
        """Test variable wind direction (-1)."""
        wind = Wind(direction=-1, speed=5)
        assert wind.to_display_string() == "Variable at 5 KT"


class TestCloudLayer:
    """Tests for CloudLayer dataclass."""

    def test_basic_layer(self) -> None:
        """Test basic cloud layer."""
        layer = CloudLayer(condition=SkyCondition.SCATTERED, altitude=5000)
        assert layer.to_display_string() == "SCT at 5000 ft"

    @pytest.mark.parametrize(
        ("condition", "expected"),
        [
            (SkyCondition.FEW, False),
            (SkyCondition.SCATTERED, False),
            (SkyCondition.BROKEN, True),
            (SkyCondition.OVERCAST, True),
            (SkyCondition.VERTICAL_VISIBILITY, False),
        ],
    )
    def test_is_ceiling(self, condition: SkyCondition, expected: bool) -> None:
        """Test only broken and overcast layers form a ceiling."""
        assert condition.is_ceiling is expected


class TestFlightCategory:
    """Tests for FlightCategory ordering."""

    def test_severity_order(self) -> None:
        """Test categories sort from VFR to LIFR."""
        shuffled = [
            FlightCategory.IFR,
            FlightCategory.VFR,
            FlightCategory.LIFR,
            FlightCategory.MVFR,
        ]

        assert sorted(shuffled) == [
            FlightCategory.VFR,
            FlightCategory.MVFR,
            FlightCategory.IFR,
            FlightCategory.LIFR,
        ]

    def test_comparisons(self) -> None:
        """Test rich comparisons."""
        assert FlightCategory.LIFR > FlightCategory.IFR
        assert FlightCategory.VFR < FlightCategory.MVFR
        assert FlightCategory.IFR >= FlightCategory.IFR
        assert FlightCategory.MVFR <= FlightCategory.IFR

    def test_compare_with_other_type(self) -> None:
        """Test comparison with a non-category raises TypeError."""
        with pytest.raises(TypeError):
            _ = FlightCategory.VFR < 1  # type: ignore[operator]

    def test_values(self) -> None:
        """Test string values."""
        assert [c.value for c in FlightCategory] == ["VFR", "MVFR", "IFR", "LIFR"]


class TestObservation:
    """Tests for Observation dataclass."""

    @pytest.fixture
    def clear_observation(self) -> Observation:
        """Create clear weather fixture."""
        return Observation(
            icao="KPAO",
            visibility_sm=10.0,
            wind=Wind(direction=270, speed=10),
            temperature=20,
            dewpoint=12,
        )

    @pytest.fixture
    def ifr_observation(self) -> Observation:
        """Create IFR weather fixture."""
        return Observation(
            icao="KSFO",
            visibility_sm=2.0,
            clouds=[
                CloudLayer(SkyCondition.SCATTERED, 400),
                CloudLayer(SkyCondition.BROKEN, 800),
                CloudLayer(SkyCondition.OVERCAST, 1500),
            ],
        )

    def test_ceiling_clear(self, clear_observation: Observation) -> None:
        """Test ceiling calculation with clear skies."""
        assert clear_observation.ceiling is None

    def test_ceiling_broken(self, ifr_observation: Observation) -> None:
        """Test ceiling skips scattered layers."""
        assert ifr_observation.ceiling == 800

    def test_ceiling_unsorted_layers(self) -> None:
        """Test ceiling is the lowest BKN/OVC layer when layers are unsorted."""
        observation = Observation(
            icao="KSFO",
            clouds=[
                CloudLayer(SkyCondition.OVERCAST, 3000),
                CloudLayer(SkyCondition.FEW, 300),
                CloudLayer(SkyCondition.BROKEN, 1200),
            ],
        )

        assert observation.ceiling == 1200

    def test_clouds_string_clear(self, clear_observation: Observation) -> None:
        """Test cloud summary for clear skies."""
        assert clear_observation.get_clouds_string() == "Clear"

    def test_clouds_string_layers(self, ifr_observation: Observation) -> None:
        """Test cloud summary lists every layer."""
        assert ifr_observation.get_clouds_string() == (
            "SCT at 400 ft, BKN at 800 ft, OVC at 1500 ft"
        )

    def test_defaults(self) -> None:
        """Test unreported fields default to None."""
        observation = Observation(icao="EGLL")

        assert observation.visibility_sm is None
        assert observation.clouds == []
        assert observation.wind is None
