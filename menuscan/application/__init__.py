"""Application layer: catalog services consumed by the screens."""
