"""Infrastructure adapters: logging, database, email and SMS providers."""
