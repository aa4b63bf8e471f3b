"""Services built on top of the FlightLookup core."""
