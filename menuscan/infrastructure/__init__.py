"""Infrastructure layer: caches and backend adapters."""
