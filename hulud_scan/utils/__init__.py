"""Utility helpers for the scanner."""

from . import io

__all__ = ["io"]
