"""Core wiki logic: routing, storage and rendering."""
