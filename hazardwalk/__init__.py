"""hazardwalk: location-driven survival overlay engine."""
