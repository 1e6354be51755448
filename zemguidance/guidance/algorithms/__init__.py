"""Guidance law implementations."""
