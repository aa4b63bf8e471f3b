"""Great-circle navigation math.

All functions are pure and work on GeoPoint values in degrees. GeoPoint
stores longitude first to match the boundary data; use
GeoPoint.from_lat_lon() when a call site has latitude first.

Typical usage:
    from flightlookup.navigation.geodesy import GeoPoint, distance_nm, estimate_arrival

    jfk = GeoPoint.from_lat_lon(40.6413, -73.7781)
    lax = GeoPoint.from_lat_lon(33.9416, -118.4085)

    distance_nm(jfk, lax)  # ~2145 nm
    eta = estimate_arrival(datetime.now(UTC), jfk, lax, groundspeed_knots=450)
"""

import math
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, tzinfo

# Earth radius in nautical miles
EARTH_RADIUS_NM = 3440.065


@dataclass(frozen=True)
class GeoPoint:
    """Geographic position in degrees.

    Attributes:
        longitude: Longitude in degrees (x axis).
        latitude: Latitude in degrees (y axis).
    """

    longitude: float
    latitude: float

    @classmethod
    def from_lat_lon(cls, latitude: float, longitude: float) -> "GeoPoint":
        """Create a point from latitude-first arguments."""
        return cls(longitude=longitude, latitude=latitude)

    def as_lon_lat(self) -> tuple[float, float]:
        """Get (longitude, latitude) pair, the boundary data axis order."""
        return self.longitude, self.latitude

    @property
    def is_finite(self) -> bool:
        """Check that both coordinates are real numbers."""
        return math.isfinite(self.longitude) and math.isfinite(self.latitude)


@dataclass(frozen=True)
class ETAResult:
    """Estimated arrival at a destination.

    Attributes:
        distance_nm: Remaining great-circle distance in nautical miles.
        hours: Whole hours of remaining flight time.
        minutes: Remaining minutes (0-59).
        eta_utc: Arrival time in UTC.
        eta_local: Same instant in the display time zone, with its offset.
    """

    distance_nm: float
    hours: int
    minutes: int
    eta_utc: datetime
    eta_local: datetime

    @property
    def duration(self) -> tuple[int, int]:
        """Get (hours, minutes) of remaining flight time."""
        return self.hours, self.minutes

    def format_duration(self) -> str:
        """Format duration like "2h 5m", or "45m" under one hour."""
        if self.hours > 0:
            return f"{self.hours}h {self.minutes}m"
        return f"{self.minutes}m"

    def format_eta_utc(self) -> str:
        """Format arrival time like "15:45Z"."""
        return self.eta_utc.strftime("%H:%MZ")

    def format_eta_local(self) -> str:
        """Format local arrival time like "11:45 EDT"."""
        zone = self.eta_local.tzname() or self.eta_local.strftime("%z")
        return f"{self.eta_local.strftime('%H:%M')} {zone}"

    def format_display(self) -> str:
        """Format duration and distance like "2h 5m (812 nm)"."""
        return f"{self.format_duration()} ({round(self.distance_nm)} nm)"


def distance_nm(a: GeoPoint, b: GeoPoint) -> float:
    """Calculate great-circle distance using the haversine formula.

    Args:
        a: First position.
        b: Second position.

    Returns:
        Distance in nautical miles.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h slightly outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))

    return EARTH_RADIUS_NM * c


def initial_bearing_deg(from_point: GeoPoint, to_point: GeoPoint) -> float:
    """Calculate initial great-circle bearing.

    Args:
        from_point: Start position.
        to_point: Target position.

    Returns:
        True bearing in degrees, in [0, 360).
    """
    lat1 = math.radians(from_point.latitude)
    lat2 = math.radians(to_point.latitude)
    dlon = math.radians(to_point.longitude - from_point.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)

    bearing = (math.degrees(math.atan2(y, x)) + 360) % 360
    # -0.0 and values that round up to 360.0 both mean north
    if bearing >= 360.0 or bearing == 0.0:
        return 0.0
    return bearing


def split_duration(time_hours: float) -> tuple[int, int]:
    """Split fractional hours into whole hours and rounded minutes.

    Minutes that round to 60 roll into the next hour, so the result is
    never "1h 60m".

    Args:
        time_hours: Non-negative duration in hours.

    Returns:
        (hours, minutes) with 0 <= minutes < 60.
    """
    hours = math.floor(time_hours)
    minutes = round((time_hours - hours) * 60)
    if minutes >= 60:
        hours += 1
        minutes -= 60
    return int(hours), int(minutes)


def estimate_arrival(
    now: datetime,
    own_position: GeoPoint,
    destination: GeoPoint | None,
    groundspeed_knots: float,
    local_tz: tzinfo | None = None,
) -> ETAResult | None:
    """Project arrival time at the current groundspeed.

    Args:
        now: Current time. Naive values are taken as UTC.
        own_position: Current aircraft position.
        destination: Destination position, None if unknown.
        groundspeed_knots: Current groundspeed in knots.
        local_tz: Time zone for eta_local. Defaults to the system zone.

    Returns:
        ETAResult, or None when no ETA can be given (stationary aircraft,
        unknown destination, non-finite inputs).
    """
    if destination is None or not destination.is_finite or not own_position.is_finite:
        return None

    if not math.isfinite(groundspeed_knots) or groundspeed_knots <= 0:
        return None

    distance = distance_nm(own_position, destination)
    time_hours = distance / groundspeed_knots
    if not math.isfinite(time_hours):
        return None
    hours, minutes = split_duration(time_hours)

    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)

    try:
        eta_utc = (now + timedelta(hours=time_hours)).astimezone(UTC)
        eta_local = eta_utc.astimezone(local_tz) if local_tz is not None else eta_utc.astimezone()
    except OverflowError:
        return None

    return ETAResult(
        distance_nm=distance,
        hours=hours,
        minutes=minutes,
        eta_utc=eta_utc,
        eta_local=eta_local,
    )
