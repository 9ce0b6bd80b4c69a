"""Infrastructure adapters: storage, providers, logging and settings."""
