"""Application-level support: configuration and logging."""
