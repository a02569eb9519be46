"""Color.io services."""
