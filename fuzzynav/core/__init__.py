"""Shared plane geometry, vehicle presets and world description."""
