"""Resolver settings management.

This module manages where the reference data lives and how results are
presented: VATSpy.dat and Boundaries.geojson paths, airport search limit,
display time zone and log level.

Settings are stored in ~/.flightlookup/settings.json under the "resolver" key.

Typical usage:
    from flightlookup.settings import get_resolver_settings

    settings = get_resolver_settings()
    settings.set_search_limit(20)
    settings.save()
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

SETTINGS_KEY = "resolver"

DEFAULT_REFERENCE_DATA_PATH = "data/vatspy/VATSpy.dat"
DEFAULT_BOUNDARIES_PATH = "data/vatspy/Boundaries.geojson"
DEFAULT_SEARCH_LIMIT = 10
DEFAULT_LOG_LEVEL = "INFO"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ResolverSettings:
    """Resolver settings with persistence.

    Attributes:
        reference_data_path: Path to the VATSpy.dat reference dataset.
        boundaries_path: Path to the FIR Boundaries.geojson file.
        search_limit: Maximum number of airport search results.
        local_timezone: IANA zone name for local ETA display
            (empty for the system zone).
        log_level: Package log level name.
    """

    reference_data_path: str = DEFAULT_REFERENCE_DATA_PATH
    boundaries_path: str = DEFAULT_BOUNDARIES_PATH
    search_limit: int = DEFAULT_SEARCH_LIMIT
    local_timezone: str = ""
    log_level: str = DEFAULT_LOG_LEVEL
    _settings_path: Path = field(
        default_factory=lambda: Path.home() / ".flightlookup" / "settings.json"
    )
    _dirty: bool = field(default=False, repr=False)

    def set_reference_data_path(self, path: str | Path) -> None:
        """Set the VATSpy.dat path."""
        self.reference_data_path = str(path)
        self._dirty = True

    def set_boundaries_path(self, path: str | Path) -> None:
        """Set the Boundaries.geojson path."""
        self.boundaries_path = str(path)
        self._dirty = True

    def set_search_limit(self, limit: int) -> None:
        """Set maximum number of search results.

        Args:
            limit: Positive result count. Other values are ignored.
        """
        if limit > 0:
            self.search_limit = limit
            self._dirty = True

    def set_local_timezone(self, zone: str) -> bool:
        """Set the display time zone.

        Args:
            zone: IANA zone name (e.g., "Europe/Paris"), or "" for system.

        Returns:
            True if the zone was accepted.
        """
        if zone and _resolve_zone(zone) is None:
            logger.warning("Unknown time zone: %s", zone)
            return False
        self.local_timezone = zone
        self._dirty = True
        return True

    def set_log_level(self, level: str) -> None:
        """Set package log level (e.g., "DEBUG")."""
        level = level.upper()
        if level in LOG_LEVELS:
            self.log_level = level
            self._dirty = True

    def local_tzinfo(self) -> tzinfo | None:
        """Get the display time zone, None for the system zone."""
        if not self.local_timezone:
            return None
        return _resolve_zone(self.local_timezone)

    def load(self, path: Path | str | None = None) -> bool:
        """Load settings from file.

        Args:
            path: Optional path to settings file.
                 Defaults to ~/.flightlookup/settings.json.

        Returns:
            True if loaded successfully, False otherwise.
        """
        if path is not None:
            self._settings_path = Path(path)

        if not self._settings_path.exists():
            logger.info("No settings file found, using resolver defaults")
            return False

        try:
            with open(self._settings_path, encoding="utf-8") as f:
                data = json.load(f)

            resolver_data = data.get(SETTINGS_KEY, {})
            self.reference_data_path = resolver_data.get(
                "reference_data_path", DEFAULT_REFERENCE_DATA_PATH
            )
            self.boundaries_path = resolver_data.get("boundaries_path", DEFAULT_BOUNDARIES_PATH)
            self.search_limit = int(resolver_data.get("search_limit", DEFAULT_SEARCH_LIMIT))
            self.local_timezone = resolver_data.get("local_timezone", "")
            self.log_level = resolver_data.get("log_level", DEFAULT_LOG_LEVEL)

            self._dirty = False
            logger.info("Loaded resolver settings from %s", self._settings_path)
            return True

        except Exception as e:
            logger.error("Failed to load resolver settings: %s", e)
            return False

    def save(self, path: Path | str | None = None) -> bool:
        """Save settings to file.

        Args:
            path: Optional path to settings file.
                 Defaults to ~/.flightlookup/settings.json.

        Returns:
            True if saved successfully, False otherwise.
        """
        if path is not None:
            self._settings_path = Path(path)

        try:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)

            # Load existing data to preserve other settings
            existing_data: dict[str, Any] = {}
            if self._settings_path.exists():
                with open(self._settings_path, encoding="utf-8") as f:
                    existing_data = json.load(f)

            existing_data[SETTINGS_KEY] = self.to_dict()

            with open(self._settings_path, "w", encoding="utf-8") as f:
                json.dump(existing_data, f, indent=2)

            self._dirty = False
            logger.info("Saved resolver settings to %s", self._settings_path)
            return True

        except Exception as e:
            logger.error("Failed to save resolver settings: %s", e)
            return False

    @property
    def is_dirty(self) -> bool:
        """Check if settings have unsaved changes."""
        return self._dirty

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "reference_data_path": self.reference_data_path,
            "boundaries_path": self.boundaries_path,
            "search_limit": self.search_limit,
            "local_timezone": self.local_timezone,
            "log_level": self.log_level,
        }


def _resolve_zone(zone: str) -> tzinfo | None:
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        return None


# Global singleton instance
_global_settings: ResolverSettings | None = None


def get_resolver_settings() -> ResolverSettings:
    """Get the global resolver settings singleton.

    Loads settings from disk on first access.

    Returns:
        ResolverSettings instance.
    """
    global _global_settings
    if _global_settings is None:
        _global_settings = ResolverSettings()
        _global_settings.load()
    return _global_settings


def reset_resolver_settings() -> None:
    """Reset the global resolver settings singleton.

    Forces reload on next access.
    """
    global _global_settings
    _global_settings = None
