"""Operational entry points for the exposure store."""
