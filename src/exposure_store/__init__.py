"""Interval-bucketed diagnosis key storage with verification-scoped writes."""

__version__ = "0.1.0"
