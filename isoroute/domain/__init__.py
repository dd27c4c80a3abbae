"""Domain layer: grid and route models, route services and events."""
