"""Application services wiring tournament files to the bracket engine."""
