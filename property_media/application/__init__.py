"""Application layer: use cases over the storage gateway."""
