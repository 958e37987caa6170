"""Infrastructure layer: persistence, authentication and HTTP adapters."""
