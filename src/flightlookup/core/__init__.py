"""Core infrastructure shared by the FlightLookup packages."""
