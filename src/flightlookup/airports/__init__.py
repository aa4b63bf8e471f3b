"""Airport and FIR reference data.

This package parses the VATSpy reference dataset and serves it from a
single-flight memoized store.

Typical usage:
    from flightlookup.airports import ReferenceDataStore

    store = ReferenceDataStore.from_path("data/VATSpy.dat")
    airport = store.lookup("KJFK")
"""

from flightlookup.airports.reference_store import DEFAULT_SEARCH_LIMIT, ReferenceDataStore
from flightlookup.airports.vatspy_parser import (
    EMPTY_SNAPSHOT,
    AirportRecord,
    FirNameRecord,
    ReferenceDataSnapshot,
    parse_reference_data,
)

__all__ = [
    "AirportRecord",
    "DEFAULT_SEARCH_LIMIT",
    "EMPTY_SNAPSHOT",
    "FirNameRecord",
    "ReferenceDataSnapshot",
    "ReferenceDataStore",
    "parse_reference_data",
]
