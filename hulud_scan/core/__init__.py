"""Core detection engine components."""
