"""Parser for the VATSpy reference dataset.

VATSpy.dat is a line-oriented text file split into ``[Section]`` blocks.
Only two blocks are read here:

    [Airports]
    ICAO|Name|Latitude|Longitude|IATA|FIR|IsPseudo

    [FIRs]
    ID|Name|CallsignPrefix|Boundary

Everything else (countries, UIRs, IDL...) is ignored. The parser is
tolerant: malformed lines are skipped and a bad payload yields an empty
snapshot, never an exception.

Typical usage:
    from flightlookup.airports.vatspy_parser import parse_reference_data

    snapshot = parse_reference_data(text)
    airport = snapshot.airports.get("KJFK")
    fir_name = snapshot.fir_names.get("KZNY")
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from flightlookup.core.logging_system import get_logger

logger = get_logger(__name__)

AIRPORTS_SECTION = "Airports"
FIRS_SECTION = "FIRs"

AIRPORT_FIELD_COUNT = 7
FIR_FIELD_COUNT = 2

PSEUDO_FLAG = "1"
COMMENT_PREFIX = ";"


@dataclass(frozen=True)
class AirportRecord:
    """Airport entry from the [Airports] section.

    Attributes:
        icao: ICAO code, upper case (e.g., "KJFK").
        name: Airport name.
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        iata: IATA code (e.g., "JFK"), None if the field was empty.
        fir: Identifier of the FIR the airport belongs to.
        is_pseudo: True for pseudo airports (always False once admitted).
    """

    icao: str
    name: str
    latitude: float
    longitude: float
    iata: str | None
    fir: str
    is_pseudo: bool = False

    def display_name(self) -> str:
        """Get display name like "KJFK - John F Kennedy Intl"."""
        return f"{self.icao} - {self.name}"


@dataclass(frozen=True)
class FirNameRecord:
    """FIR name entry from the [FIRs] section."""

    id: str
    name: str


@dataclass(frozen=True)
class ReferenceDataSnapshot:
    """Immutable bundle of parsed reference data.

    Both mappings are read-only views. A reload builds a new snapshot
    instead of touching an existing one.

    Attributes:
        airports: ICAO -> AirportRecord, in file order.
        fir_names: FIR id -> FIR name, in file order.
    """

    airports: Mapping[str, AirportRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )
    fir_names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def airport_count(self) -> int:
        """Number of admitted airports."""
        return len(self.airports)

    @property
    def is_empty(self) -> bool:
        """Check whether the snapshot holds no data at all."""
        return not self.airports and not self.fir_names


EMPTY_SNAPSHOT = ReferenceDataSnapshot()


def parse_reference_data(text: str | bytes | None) -> ReferenceDataSnapshot:
    """Parse VATSpy.dat content into a reference data snapshot.

    Args:
        text: Full file content. Bytes are decoded as UTF-8.

    Returns:
        ReferenceDataSnapshot (possibly empty, never None).
    """
    if not text:
        logger.warning("Empty reference dataset, returning empty snapshot")
        return EMPTY_SNAPSHOT

    if isinstance(text, bytes):
        text = text.decode("utf-8", errors="replace")

    airports: dict[str, AirportRecord] = {}
    fir_names: dict[str, str] = {}
    section: str | None = None
    skipped = 0

    for raw_line in text.split("\n"):
        line = raw_line.strip()

        if not line or line.startswith(COMMENT_PREFIX):
            continue

        if line.startswith("[") and line.endswith("]"):
            section = line[1:-1]
            continue

        if section == AIRPORTS_SECTION:
            airport = _parse_airport_line(line)
            if airport is None:
                skipped += 1
            elif airport.icao not in airports:
                airports[airport.icao] = airport
        elif section == FIRS_SECTION:
            fir = _parse_fir_line(line)
            if fir is None:
                skipped += 1
            elif fir.id not in fir_names:
                # First entry is the primary name for the FIR
                fir_names[fir.id] = fir.name

    logger.info(
        "Parsed reference data: %d airports, %d FIRs (%d lines skipped)",
        len(airports),
        len(fir_names),
        skipped,
    )

    return ReferenceDataSnapshot(
        airports=MappingProxyType(airports),
        fir_names=MappingProxyType(fir_names),
    )


def _parse_airport_line(line: str) -> AirportRecord | None:
    """Parse one [Airports] line.

    Returns:
        AirportRecord, or None if the line is malformed, pseudo, or lacks
        an ICAO code or name.
    """
    parts = line.split("|")
    if len(parts) < AIRPORT_FIELD_COUNT:
        logger.debug("Skipping airport line with %d fields: %s", len(parts), line)
        return None

    icao = parts[0].strip().upper()
    name = parts[1].strip()
    is_pseudo = parts[6].strip() == PSEUDO_FLAG

    if is_pseudo or not icao or not name:
        return None

    try:
        latitude = float(parts[2])
        longitude = float(parts[3])
    except ValueError:
        logger.debug("Skipping airport %s with bad coordinates: %s", icao, line)
        return None

    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        logger.debug("Skipping airport %s with non-finite coordinates: %s", icao, line)
        return None

    return AirportRecord(
        icao=icao,
        name=name,
        latitude=latitude,
        longitude=longitude,
        iata=parts[4].strip() or None,
        fir=parts[5].strip(),
        is_pseudo=False,
    )


def _parse_fir_line(line: str) -> FirNameRecord | None:
    """Parse one [FIRs] line."""
    parts = line.split("|")
    if len(parts) < FIR_FIELD_COUNT:
        logger.debug("Skipping FIR line with %d fields: %s", len(parts), line)
        return None

    fir_id = parts[0].strip()
    if not fir_id:
        return None

    return FirNameRecord(id=fir_id, name=parts[1].strip())
