"""Memoized store for VATSpy reference data.

The store owns one ReferenceDataSnapshot. The first caller triggers the
load; concurrent callers arriving while that load runs wait for it and
receive the same snapshot object (single-flight). Once published, the
snapshot is served from memory without locking until reload() swaps in a
new one.

The store never fetches anything itself: it is given a loader callable
that returns the raw VATSpy.dat text.

Typical usage:
    from flightlookup.airports.reference_store import ReferenceDataStore

    store = ReferenceDataStore.from_path("data/VATSpy.dat")

    airport = store.lookup("kjfk")
    results = store.search("heathrow", limit=5)
    name = store.fir_name("EGTT")
"""

import threading
from collections.abc import Callable
from pathlib import Path

from flightlookup.airports.vatspy_parser import (
    EMPTY_SNAPSHOT,
    AirportRecord,
    ReferenceDataSnapshot,
    parse_reference_data,
)
from flightlookup.core.logging_system import get_logger

logger = get_logger(__name__)

DEFAULT_SEARCH_LIMIT = 10


class ReferenceDataStore:
    """Single-flight cache of parsed reference data.

    Examples:
        >>> store = ReferenceDataStore.from_text(vatspy_text)
        >>> airport = store.lookup("EGLL")
        >>> for match in store.search("paris", limit=2):
        ...     print(match.display_name())
    """

    def __init__(
        self,
        loader: Callable[[], str | bytes | None],
        parser: Callable[[str | bytes | None], ReferenceDataSnapshot] = parse_reference_data,
    ) -> None:
        """Initialize the store.

        Args:
            loader: Callable returning the raw reference dataset text.
                Called once per (re)load.
            parser: Callable turning the text into a snapshot.
        """
        self._loader = loader
        self._parser = parser
        self._snapshot: ReferenceDataSnapshot | None = None
        self._load_lock = threading.Lock()
        self._parse_count = 0

    @classmethod
    def from_text(cls, text: str | bytes | None) -> "ReferenceDataStore":
        """Create a store over already-retrieved text."""
        return cls(lambda: text)

    @classmethod
    def from_path(cls, path: str | Path) -> "ReferenceDataStore":
        """Create a store that reads a VATSpy.dat file on first access.

        Args:
            path: Path to the VATSpy.dat file.
        """
        path = Path(path)

        def _read() -> str:
            with open(path, encoding="utf-8", errors="replace") as f:
                return f.read()

        return cls(_read)

    def snapshot(self) -> ReferenceDataSnapshot:
        """Get the current snapshot, loading it on first access.

        Returns:
            The published snapshot (empty if the load failed).
        """
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._load_lock:
            # Another caller may have published while we waited
            if self._snapshot is None:
                self._snapshot = self._load()
            return self._snapshot

    def reload(self) -> ReferenceDataSnapshot:
        """Load the reference data again and publish a new snapshot.

        Readers holding the previous snapshot keep a consistent view.

        Returns:
            The newly published snapshot.
        """
        with self._load_lock:
            self._snapshot = self._load()
            return self._snapshot

    def _load(self) -> ReferenceDataSnapshot:
        """Run the loader and parser. Caller must hold the load lock."""
        try:
            text = self._loader()
        except Exception as e:
            logger.error("Failed to load reference data: %s", e)
            return EMPTY_SNAPSHOT

        self._parse_count += 1
        snapshot = self._parser(text)
        logger.info("Reference data ready: %d airports", snapshot.airport_count)
        return snapshot

    def lookup(self, icao: str) -> AirportRecord | None:
        """Get airport by ICAO code.

        Args:
            icao: ICAO code (case-insensitive).

        Returns:
            AirportRecord if found, None otherwise.
        """
        if not icao:
            return None
        return self.snapshot().airports.get(icao.strip().upper())

    def fir_name(self, fir_id: str) -> str:
        """Get FIR name by identifier, falling back to the identifier."""
        return self.snapshot().fir_names.get(fir_id) or fir_id

    def search(self, term: str, limit: int = DEFAULT_SEARCH_LIMIT) -> list[AirportRecord]:
        """Search airports whose name contains a term.

        Results keep the dataset order; they are not ranked.

        Args:
            term: Name fragment (case-insensitive).
            limit: Maximum number of results.

        Returns:
            Matching airports, at most ``limit`` of them.
        """
        if not term or limit <= 0:
            return []

        term_lower = term.lower()
        results: list[AirportRecord] = []

        for airport in self.snapshot().airports.values():
            if term_lower in airport.name.lower():
                results.append(airport)
                if len(results) >= limit:
                    break

        return results

    def format_airport_display(self, icao: str) -> str:
        """Format an ICAO code for display, adding the name when known.

        Returns:
            "KJFK - John F Kennedy Intl", or the bare code if unknown.
        """
        airport = self.lookup(icao)
        if airport and airport.name and airport.name != icao:
            return airport.display_name()
        return icao

    @property
    def is_loaded(self) -> bool:
        """Check if a snapshot has been published."""
        return self._snapshot is not None

    @property
    def airport_count(self) -> int:
        """Get number of airports in the current snapshot."""
        return self.snapshot().airport_count

    @property
    def parse_count(self) -> int:
        """Get how many times the dataset has been parsed."""
        return self._parse_count
