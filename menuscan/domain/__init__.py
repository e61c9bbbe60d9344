"""Domain layer: catalog entities, pure rules, errors and ports."""
