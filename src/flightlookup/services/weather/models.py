"""Weather data models for flight category classification.

Provides the decoded subset of a METAR observation that the flight
category rules need.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class SkyCondition(Enum):
    """Sky condition categories per aviation standards."""

    CLEAR = "CLR"  # No clouds reported
    FEW = "FEW"  # 1/8 to 2/8 coverage
    SCATTERED = "SCT"  # 3/8 to 4/8 coverage
    BROKEN = "BKN"  # 5/8 to 7/8 coverage (ceiling)
    OVERCAST = "OVC"  # 8/8 coverage (ceiling)
    VERTICAL_VISIBILITY = "VV"  # Obscured sky

    @property
    def is_ceiling(self) -> bool:
        """Check if a layer of this coverage constitutes a ceiling."""
        return self in (SkyCondition.BROKEN, SkyCondition.OVERCAST)


class FlightCategory(Enum):
    """Flight category based on ceiling and visibility.

    Members compare by severity: VFR < MVFR < IFR < LIFR.
    """

    VFR = "VFR"  # Ceiling >=3000 ft AND visibility >=5 SM
    MVFR = "MVFR"  # Ceiling 1000-3000 ft OR visibility 3-5 SM
    IFR = "IFR"  # Ceiling 500-1000 ft OR visibility 1-3 SM
    LIFR = "LIFR"  # Ceiling <500 ft OR visibility <1 SM

    @property
    def severity(self) -> int:
        """Get severity rank (0 = VFR, 3 = LIFR)."""
        return _SEVERITY[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.severity < other.severity

    def __le__(self, other: object) -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.severity <= other.severity

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.severity > other.severity

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, FlightCategory):
            return NotImplemented
        return self.severity >= other.severity


_SEVERITY = {
    FlightCategory.VFR: 0,
    FlightCategory.MVFR: 1,
    FlightCategory.IFR: 2,
    FlightCategory.LIFR: 3,
}


@dataclass
class Wind:
    """Wind information.

    Attributes:
        direction: Wind direction in degrees (0-360), or -1 for variable.
        speed: Wind speed in knots.
        gust: Gust speed in knots, or None if no gusts.
    """

    direction: int
    speed: int
    gust: int | None = None

    @property
    def is_calm(self) -> bool:
        """Check if wind is calm (0 knots)."""
        return self.speed == 0

    def to_display_string(self) -> str:
        """Convert to display string like "270° at 15 KT gusting to 25 KT"."""
        if self.is_calm:
            return "Calm"
        direction_str = "Variable" if self.direction == -1 else f"{self.direction}°"
        result = f"{direction_str} at {self.speed} KT"
        if self.gust:
            result += f" gusting to {self.gust} KT"
        return result


@dataclass
class CloudLayer:
    """Single cloud layer.

    Attributes:
        condition: Sky condition (FEW, SCT, BKN, OVC).
        altitude: Cloud base altitude in feet AGL.
        type: Cloud type (e.g., "CB" for cumulonimbus), or None.
    """

    condition: SkyCondition
    altitude: int
    type: str | None = None

    def to_display_string(self) -> str:
        """Convert to display string like "BKN at 3000 ft"."""
        return f"{self.condition.value} at {self.altitude} ft"


@dataclass
class Observation:
    """Decoded weather observation.

    Attributes:
        icao: Station ICAO code.
        visibility_sm: Visibility in statute miles, None if not reported.
        clouds: Cloud layers as reported (lowest first).
        wind: Wind information, None if not reported.
        observation_time: Time of observation (UTC), None if unknown.
        temperature: Temperature in Celsius, None if not reported.
        dewpoint: Dewpoint in Celsius, None if not reported.
        raw_metar: Original METAR string.
    """

    icao: str
    visibility_sm: float | None = None
    clouds: list[CloudLayer] = field(default_factory=list)
    wind: Wind | None = None
    observation_time: datetime | None = None
    temperature: int | None = None
    dewpoint: int | None = None
    raw_metar: str | None = None

    @property
    def ceiling(self) -> int | None:
        """Get ceiling altitude (lowest BKN or OVC layer)."""
        heights = [layer.altitude for layer in self.clouds if layer.condition.is_ceiling]
        return min(heights) if heights else None

    def get_clouds_string(self) -> str:
        """Get human-readable cloud summary, "Clear" when none."""
        if not self.clouds:
            return "Clear"
        return ", ".join(layer.to_display_string() for layer in self.clouds)
