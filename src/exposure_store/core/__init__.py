"""Core configuration for the exposure store."""
