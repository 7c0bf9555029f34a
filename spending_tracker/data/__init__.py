"""Packaged static data (predefined categories)."""
