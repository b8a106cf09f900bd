"""Cross-cutting systems."""
