"""Background execution of simulation runs for interactive callers."""
