"""Small helpers shared across the exposure store."""
