"""HTTP API for Routinely."""
