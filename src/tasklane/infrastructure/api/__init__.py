"""HTTP adapter for the authorization engine."""
