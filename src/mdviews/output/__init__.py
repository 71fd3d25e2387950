"""Output layer — formats ServiceResult for terminals, pipes, and JSON."""
