"""Infrastructure layer: tournament files and match tree storage."""
