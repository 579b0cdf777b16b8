"""Configuration layer: descriptor discovery, settings and logging."""
