"""Graph model for config source relationships."""
