"""Framework layer: configuration and startup checks."""
