"""Mesh writers."""
