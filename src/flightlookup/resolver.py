"""Flight resolver: the entry point used by the flight lookup front end.

Wires the reference data store, the FIR index and the weather classifier
together so a caller holding one pilot record (position, groundspeed,
arrival airport) and raw METAR text gets everything the flight panel
shows: airport names, current FIR, bearing, ETA and flight category.

FlightResolver takes every collaborator as an argument; only
create_resolver() reads the global settings.

Typical usage:
    store = ReferenceDataStore.from_path("data/vatspy/VATSpy.dat")
    airspace = AirspaceIndex.from_geojson(boundaries_json, store.snapshot().fir_names)
    resolver = FlightResolver(store, airspace)

    eta = resolver.estimate_arrival(position, "EGLL", groundspeed_knots=480)
    fir = resolver.current_fir(position)
"""

from dataclasses import replace
from datetime import UTC, datetime, tzinfo
from pathlib import Path

from flightlookup.airports.reference_store import DEFAULT_SEARCH_LIMIT, ReferenceDataStore
from flightlookup.airports.vatspy_parser import AirportRecord
from flightlookup.core.logging_system import get_logger, initialize_logging, is_initialized
from flightlookup.navigation.airspace import AirspaceIndex, FirMatch
from flightlookup.navigation.geodesy import (
    ETAResult,
    GeoPoint,
    distance_nm,
    estimate_arrival,
    initial_bearing_deg,
)
from flightlookup.services.weather.classifier import classify_observation
from flightlookup.services.weather.metar_parser import METARParser
from flightlookup.services.weather.models import FlightCategory, Observation
from flightlookup.settings.resolver_settings import ResolverSettings, get_resolver_settings

logger = get_logger(__name__)


class FlightResolver:
    """Resolves airports, FIRs, ETAs and flight categories for a flight."""

    def __init__(
        self,
        store: ReferenceDataStore,
        airspace: AirspaceIndex | None = None,
        local_tz: tzinfo | None = None,
        search_limit: int = DEFAULT_SEARCH_LIMIT,
    ) -> None:
        """Initialize the resolver.

        Args:
            store: Reference data store for airports and FIR names.
            airspace: FIR boundary index. Without one, current_fir()
                always returns None.
            local_tz: Time zone for local ETA display (system zone if None).
            search_limit: Default maximum number of search results.
        """
        self.store = store
        self.airspace = airspace or AirspaceIndex([])
        self.local_tz = local_tz
        self.search_limit = search_limit
        self._metar_parser = METARParser()

    @classmethod
    def from_settings(cls, settings: ResolverSettings) -> "FlightResolver":
        """Build a resolver from the configured data files.

        Both files are read here, since FIR names come from the reference
        data. Missing files give an empty store or an empty index.
        """
        store = ReferenceDataStore.from_path(settings.reference_data_path)

        boundaries_text: str | None = None
        boundaries_path = Path(settings.boundaries_path)
        try:
            boundaries_text = boundaries_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("FIR boundaries unavailable (%s): %s", boundaries_path, e)

        airspace = AirspaceIndex.from_geojson(boundaries_text, store.snapshot().fir_names)
        return cls(
            store,
            airspace,
            local_tz=settings.local_tzinfo(),
            search_limit=settings.search_limit,
        )

    def lookup_airport(self, icao: str) -> AirportRecord | None:
        """Get airport by ICAO code (case-insensitive)."""
        return self.store.lookup(icao)

    def search_airports(self, term: str, limit: int | None = None) -> list[AirportRecord]:
        """Search airports by name fragment."""
        return self.store.search(term, self.search_limit if limit is None else limit)

    def format_airport(self, icao: str) -> str:
        """Format an ICAO code with the airport name when known."""
        return self.store.format_airport_display(icao)

    def airport_position(self, icao: str) -> GeoPoint | None:
        """Get an airport's position, None if unknown."""
        airport = self.store.lookup(icao)
        if airport is None:
            return None
        return GeoPoint.from_lat_lon(airport.latitude, airport.longitude)

    def current_fir(self, position: GeoPoint) -> FirMatch | None:
        """Get the FIR the position is in, None outside all known FIRs.

        The name comes from the store's current snapshot, so a reload of
        the reference data is reflected here.
        """
        match = self.airspace.classify(position)
        if match is None:
            return None
        return replace(match, fir_name=self.store.fir_name(match.fir_id))

    def distance_to(self, position: GeoPoint, icao: str) -> float | None:
        """Get distance in nautical miles to an airport, None if unknown."""
        destination = self.airport_position(icao)
        if destination is None:
            return None
        return distance_nm(position, destination)

    def bearing_to(self, position: GeoPoint, icao: str) -> float | None:
        """Get initial bearing to an airport, None if unknown."""
        destination = self.airport_position(icao)
        if destination is None:
            return None
        return initial_bearing_deg(position, destination)

    def estimate_arrival(
        self,
        position: GeoPoint,
        arrival_icao: str | None,
        groundspeed_knots: float,
        now: datetime | None = None,
    ) -> ETAResult | None:
        """Estimate arrival at the flight plan destination.

        Args:
            position: Current aircraft position.
            arrival_icao: Arrival airport ICAO code from the flight plan.
            groundspeed_knots: Current groundspeed.
            now: Current time (defaults to now, UTC).

        Returns:
            ETAResult, or None without a known destination or while
            the aircraft is not moving.
        """
        if not arrival_icao:
            return None

        destination = self.airport_position(arrival_icao)
        if destination is None:
            logger.debug("No position for arrival airport %s", arrival_icao)
            return None

        return estimate_arrival(
            now or datetime.now(UTC),
            position,
            destination,
            groundspeed_knots,
            local_tz=self.local_tz,
        )

    def decode_metar(self, raw_metar: str) -> Observation | None:
        """Decode a raw METAR string."""
        return self._metar_parser.parse(raw_metar)

    def flight_category(self, raw_metar: str) -> FlightCategory | None:
        """Classify a raw METAR string, None if it cannot be decoded."""
        observation = self.decode_metar(raw_metar)
        if observation is None:
            return None
        return classify_observation(observation)


def create_resolver(
    settings: ResolverSettings | None = None,
    logging_config: str | Path | None = None,
) -> FlightResolver:
    """Configure logging and build a resolver from settings.

    Logging is configured only on the first call; later calls keep the
    handlers already installed.

    Args:
        settings: Resolver settings. Defaults to the global settings
            loaded from ~/.flightlookup/settings.json.
        logging_config: Optional YAML logging configuration file.

    Returns:
        FlightResolver over the configured data files.
    """
    if settings is None:
        settings = get_resolver_settings()

    if is_initialized():
        logger.debug("Logging already configured, keeping existing handlers")
    else:
        initialize_logging(logging_config, level=settings.log_level)
    logger.info("Reference data: %s", settings.reference_data_path)

    return FlightResolver.from_settings(settings)
