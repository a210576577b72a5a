"""Shared helpers: COLMAP loading and camera geometry."""
