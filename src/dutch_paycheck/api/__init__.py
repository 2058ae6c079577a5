"""HTTP API for the paycheck calculator."""
