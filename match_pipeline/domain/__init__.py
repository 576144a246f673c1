"""Domain models for validated match data."""
