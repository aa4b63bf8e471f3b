"""User settings management for FlightLookup.

This package provides persistent settings for the reference data
locations and result presentation.
"""

from flightlookup.settings.resolver_settings import (
    DEFAULT_BOUNDARIES_PATH,
    DEFAULT_REFERENCE_DATA_PATH,
    ResolverSettings,
    get_resolver_settings,
    reset_resolver_settings,
)

__all__ = [
    "DEFAULT_BOUNDARIES_PATH",
    "DEFAULT_REFERENCE_DATA_PATH",
    "ResolverSettings",
    "get_resolver_settings",
    "reset_resolver_settings",
]
