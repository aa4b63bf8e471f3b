"""Version information for FlightLookup."""

__version__ = "0.1.0"
