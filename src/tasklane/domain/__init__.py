"""Domain layer: entities and services for role-based authorization."""
