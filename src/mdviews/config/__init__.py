"""Configuration — settings, view models, discovery, and logging."""
