"""Infrastructure layer — document discovery and file I/O."""
