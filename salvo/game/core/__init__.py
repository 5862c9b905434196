"""Grid, fleet, placement and attack resolution."""
