"""Domain models and static clinical reference data."""
