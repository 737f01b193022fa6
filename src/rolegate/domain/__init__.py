"""Domain layer - entities, value objects and pure authorization rules."""
