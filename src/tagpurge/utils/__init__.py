"""Helpers shared across layers."""
