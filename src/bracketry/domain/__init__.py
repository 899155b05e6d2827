"""Domain models for tournament files."""
